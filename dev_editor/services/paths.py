"""
Dev Editor — Path Containment
==============================

What:  Resolves client-supplied paths and rejects anything that escapes the
       directory it is supposed to stay in.
How:   Both sides are fully resolved (`..` collapsed, symlinks followed)
       before comparing, so `../`, absolute paths and escaping symlinks all
       fail the same check.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from dev_editor.exceptions import ForbiddenError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_within(
    base: PathLike,
    candidate: PathLike,
    anchor: Optional[PathLike] = None,
    message: str = "Invalid path",
) -> Path:
    """
    Resolve `candidate` and require it to sit strictly inside `base`.

    Args:
        base:      Directory the result must live under.
        candidate: Client-supplied path, relative or absolute.
        anchor:    Directory relative candidates are joined to (default: base).
        message:   Error message used when containment fails.

    Returns:
        The resolved absolute path.

    Raises:
        ForbiddenError if the resolved path is `base` itself or lies outside it.
    """
    base_path = Path(base).resolve()
    anchor_path = Path(anchor).resolve() if anchor is not None else base_path
    target = (anchor_path / candidate).resolve()

    if target == base_path or not target.is_relative_to(base_path):
        logger.warning("Rejected path outside %s: %s", base_path, candidate)
        raise ForbiddenError(
            message=message,
            context={"base": str(base_path), "requested": str(candidate)},
        )
    return target

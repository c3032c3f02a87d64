"""
Dev Editor — Content Service
=============================

What:  Reads, overwrites, and creates Markdown content files.
How:   Every client path is resolved and contained to the content directory
       before any I/O. File access goes through aiofiles so a slow disk does
       not stall the event loop.
Who:   Called by the /__dev-editor/save, /content and /create routes.

Lifecycle of a created file:
    1. Collection checked against the allow list
    2. Slug sanitized (empty → rejected)
    3. Front matter rendered to YAML and wrapped with the body
    4. File opened in exclusive-create mode (existing file → 409)
    5. Project-relative POSIX path returned to the client
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import aiofiles
import aiofiles.os
import yaml

from dev_editor.exceptions import (
    ConflictError,
    FileStorageError,
    NotFoundError,
    ValidationError,
)
from dev_editor.services.paths import resolve_within
from dev_editor.services.text import build_markdown, parse_markdown, slugify

logger = logging.getLogger(__name__)


class ContentService:
    """
    File operations scoped to the site's content collections.

    Args:
        project_root:         Site root; client file paths are relative to it.
        content_dir:          Directory every read and write must stay inside.
        allowed_collections:  Collection names `create` may write into.
    """

    def __init__(
        self,
        project_root: Path,
        content_dir: Path,
        allowed_collections: Iterable[str],
    ):
        self.project_root = Path(project_root).resolve()
        self.content_dir = Path(content_dir).resolve()
        self.allowed_collections = list(allowed_collections)

    def _relative(self, path: Path) -> str:
        # content_subdir may point outside the project root
        if path.is_relative_to(self.project_root):
            return path.relative_to(self.project_root).as_posix()
        return path.as_posix()

    def _contain(self, file_path: str) -> Path:
        return resolve_within(
            self.content_dir,
            file_path,
            anchor=self.project_root,
            message="Can only edit content files",
        )

    async def save(self, file_path: str, content: str) -> None:
        """
        Overwrite a content file with new text.

        The parent directory is not created; saving into a missing
        collection fails as a storage error.

        Raises:
            ForbiddenError if the path resolves outside the content directory.
            FileStorageError if the write fails.
        """
        target = self._contain(file_path)
        try:
            async with aiofiles.open(target, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to save %s: %s", target, e)
            raise FileStorageError(
                message=f"Failed to save {file_path}: {e}",
                context={"path": str(target)},
            ) from e

        logger.info("Saved %s (%d chars)", self._relative(target), len(content))

    async def read(self, file_path: str) -> Dict[str, Any]:
        """
        Load a content file and split it into front matter and body.

        Returns:
            Dict with `file_path`, `frontmatter`, `body` and the raw `content`.
        """
        target = self._contain(file_path)
        if not await aiofiles.os.path.isfile(target):
            raise NotFoundError(context={"path": file_path})

        try:
            async with aiofiles.open(target, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise FileStorageError(
                message=f"Failed to read {file_path}: {e}",
                context={"path": str(target)},
            ) from e

        try:
            metadata, body = parse_markdown(content)
        except yaml.YAMLError as e:
            raise FileStorageError(
                message=f"Could not parse front matter in {file_path}: {e}",
                context={"path": str(target)},
            ) from e

        return {
            "file_path": self._relative(target),
            "frontmatter": metadata,
            "body": body,
            "content": content,
        }

    async def create(
        self,
        collection: str,
        slug: str,
        front_matter: Dict[str, Any],
        body: Optional[str] = None,
    ) -> str:
        """
        Create `<content_dir>/<collection>/<slug>.md`.

        Returns:
            The new file's project-relative path, e.g. "src/content/blog/my-post.md".

        Raises:
            ValidationError for an unknown collection or an empty slug.
            ConflictError if the file already exists.
            FileStorageError if the write fails.
        """
        if collection not in self.allowed_collections:
            raise ValidationError(
                message=f"Invalid collection: {collection}",
                field="collection",
                context={"allowed": self.allowed_collections},
            )

        safe_slug = slugify(slug)
        if not safe_slug:
            raise ValidationError(message="Invalid slug", field="slug")

        target = resolve_within(self.content_dir, f"{collection}/{safe_slug}.md")
        if await aiofiles.os.path.exists(target):
            raise ConflictError(context={"path": self._relative(target)})

        markdown = build_markdown(front_matter, body)
        try:
            await aiofiles.os.makedirs(target.parent, exist_ok=True)
            # "x" mode: a file created between the check and the write still conflicts
            async with aiofiles.open(target, "x", encoding="utf-8") as f:
                await f.write(markdown)
        except FileExistsError as e:
            raise ConflictError(context={"path": self._relative(target)}) from e
        except OSError as e:
            logger.error("Failed to create %s: %s", target, e)
            raise FileStorageError(
                message=f"Failed to create {self._relative(target)}: {e}",
                context={"path": str(target)},
            ) from e

        relative = self._relative(target)
        logger.info("Created %s in collection '%s'", relative, collection)
        return relative

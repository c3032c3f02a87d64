"""
Dev Editor — Name Sanitization & Front Matter Rendering
========================================================

What:  Pure string helpers shared by the content and image services.
How:   Regex-based sanitizers for user-supplied names, and a small YAML
       emitter for flat front-matter mappings.

Sanitizers:
    sanitize_filename("My Photo (1).JPG")  → "my-photo-1-.jpg"
    slugify("Hello, World!")               → "hello-world"

    Both are idempotent: applying them twice gives the same result as once.
    Neither can produce a path separator, so their output is always a single
    path component.

Front matter:
    frontmatter_to_yaml({"title": "Dune", "tags": ["sci-fi"]})
        → "title: Dune\\ntags:\\n  - sci-fi"

    The output is written by hand (not yaml.safe_dump) so dates stay bare
    `YYYY-MM-DD` values and key order follows the editor form. Strings are
    quoted only when a YAML reader would otherwise see something else.
    Documents are read back with python-frontmatter (parse_markdown).
"""

import json
import re
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple

import frontmatter
import yaml

_FILENAME_DISALLOWED = re.compile(r"[^a-z0-9.-]")
_SLUG_DISALLOWED = re.compile(r"[^a-z0-9]+")
_DASH_RUN = re.compile(r"-+")
_DATE_STRING = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Characters that always force a quoted scalar
_QUOTE_TRIGGERS = (":", "#", '"', "'")


# ── Sanitizers ────────────────────────────────────────────────────────────

def sanitize_filename(name: str) -> str:
    """
    Reduce an uploaded filename to `[a-z0-9.-]`.

    Disallowed characters become dashes, dash runs collapse to one, and
    leading/trailing dashes are dropped. Dots survive so the extension is kept.
    """
    cleaned = _FILENAME_DISALLOWED.sub("-", name.lower())
    cleaned = _DASH_RUN.sub("-", cleaned)
    return cleaned.strip("-")


def slugify(text: str) -> str:
    """Lowercase `text` and join its alphanumeric runs with single dashes."""
    return _SLUG_DISALLOWED.sub("-", text.lower()).strip("-")


# ── Front Matter ──────────────────────────────────────────────────────────

def _is_iso_date(value: str) -> bool:
    if not _DATE_STRING.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _needs_quotes(value: str) -> bool:
    if value == "" or any(ch in value for ch in _QUOTE_TRIGGERS):
        return True
    try:
        return yaml.safe_load(value) != value
    except (yaml.YAMLError, ValueError):
        # e.g. "2024-13-45" matches the timestamp resolver but is not a date
        return True


def _format_scalar(value: Any) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        # repr forms like 1e+20 read back as strings under YAML 1.1; the dumper writes 1.0e+20
        return yaml.safe_dump(value).splitlines()[0]
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, str):
        if _is_iso_date(value):
            return value
        if _needs_quotes(value):
            # A JSON string literal is a valid YAML double-quoted scalar
            return json.dumps(value, ensure_ascii=False)
        return value
    if isinstance(value, Mapping):
        return json.dumps(dict(value), ensure_ascii=False, default=str)
    return str(value)


def _format_key(key: Any) -> str:
    key = str(key)
    return json.dumps(key, ensure_ascii=False) if _needs_quotes(key) else key


def frontmatter_to_yaml(data: Mapping[str, Any]) -> str:
    """
    Render a flat front-matter mapping as YAML lines.

    Rules:
        None and empty lists  → omitted
        bool                  → true / false
        int                   → as-is
        float                 → YAML float form (1e20 → 1.0e+20)
        date, "YYYY-MM-DD"    → bare date
        list                  → "key:" then "  - item" per item
        str                   → bare, or double-quoted when ambiguous
        mapping               → inline flow mapping
    """
    lines = []
    for key, value in data.items():
        if value is None:
            continue
        rendered_key = _format_key(key)
        if isinstance(value, (list, tuple)):
            items = [item for item in value if item is not None]
            if not items:
                continue
            lines.append(f"{rendered_key}:")
            lines.extend(f"  - {_format_scalar(item)}" for item in items)
            continue
        lines.append(f"{rendered_key}: {_format_scalar(value)}")
    return "\n".join(lines)


def build_markdown(front_matter: Dict[str, Any], body: Optional[str] = None) -> str:
    """Assemble a Markdown document: fenced front matter, blank line, body."""
    return f"---\n{frontmatter_to_yaml(front_matter)}\n---\n\n{body or ''}"


def parse_markdown(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a Markdown document into its front matter and body.

    Parsing is python-frontmatter's: YAML is read with the safe loader,
    front matter that is not a mapping is ignored, and the body comes back
    with surrounding whitespace stripped.

    Raises:
        yaml.YAMLError if the front matter block is not valid YAML.
    """
    post = frontmatter.loads(text)
    return dict(post.metadata), post.content

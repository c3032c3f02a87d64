"""
Dev Editor — JSON Data Documents
=================================

What:  Reads and writes the site's JSON config blobs (gallery, memes).
How:   The documents are opaque: whatever JSON the editor posts is stored
       pretty-printed and handed back unchanged. A missing file reads as
       the document's default value.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from dev_editor.exceptions import FileStorageError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONFIG = {"images": []}


class JsonDocument:
    """A single JSON file under the site's data directory."""

    def __init__(self, path: Path, default: Any = None):
        self.path = Path(path)
        self.default = DEFAULT_IMAGE_CONFIG if default is None else default

    async def load(self) -> Any:
        """
        Return the stored document, or a fresh copy of the default if absent.

        Raises:
            FileStorageError if the file cannot be read or is not valid JSON.
        """
        if not await aiofiles.os.path.exists(self.path):
            return copy.deepcopy(self.default)

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                text = await f.read()
            return json.loads(text)
        except OSError as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise FileStorageError(
                message=f"Failed to read {self.path.name}: {e}",
                context={"path": str(self.path)},
            ) from e
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.error("Corrupt JSON in %s: %s", self.path, e)
            raise FileStorageError(
                message=f"Could not parse {self.path.name}: {e}",
                context={"path": str(self.path)},
            ) from e

    async def save(self, data: Any) -> None:
        """Overwrite the document with `data`, 2-space indented."""
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, indent=2, ensure_ascii=False))
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise FileStorageError(
                message=f"Failed to write {self.path.name}: {e}",
                context={"path": str(self.path)},
            ) from e

        logger.info("Wrote %s", self.path.name)

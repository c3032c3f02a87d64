"""
Dev Editor — Image Library Service
===================================

What:  Upload, list, and delete images in a public image library.
How:   One `ImageLibrary` instance per library directory (gallery, memes).
       Uploaded names are sanitized, payloads are base64-decoded and size
       checked, and deletes are contained to the library directory.
Who:   Called by the upload / delete / list routes for both libraries.

Validation order for uploads:
    1. Declared MIME type (when sent) against ALLOWED_MIME_TYPES
    2. Sanitized filename must be non-empty with an allowed extension
    3. Base64 payload must decode and fit within max_upload_size
    4. File written (an existing file of the same name is replaced)
"""

import base64
import binascii
import logging
import re
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from dev_editor.exceptions import FileStorageError, ForbiddenError, NotFoundError, ValidationError
from dev_editor.services.paths import resolve_within
from dev_editor.services.text import sanitize_filename

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
    "image/heic",
    "image/heif",
}

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".heic", ".heif"}

# Browsers' FileReader.readAsDataURL prefix
_DATA_URL_PREFIX = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)


def decode_image_data(data: str, max_size: int) -> bytes:
    """
    Decode a base64 image payload.

    Accepts bare base64 or a `data:<mime>;base64,` URL. Whitespace is ignored.

    Raises:
        ValidationError if the payload is empty, not base64, or over `max_size`.
    """
    payload = "".join(_DATA_URL_PREFIX.sub("", data.strip()).split())
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(message="Invalid base64 image data", field="data") from e

    if not raw:
        raise ValidationError(message="Image data is empty", field="data")

    if len(raw) > max_size:
        max_mb = max_size / (1024 * 1024)
        raise ValidationError(
            message=f"Image size ({len(raw) / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
            field="data",
            context={"max_size_mb": max_mb, "actual_size": len(raw)},
        )
    return raw


def _isoformat_utc(timestamp: float) -> str:
    # 2024-01-15T12:00:00.000Z
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ImageLibrary:
    """
    A directory of publicly served images.

    Args:
        name:        Short name used in logs ("gallery", "memes").
        directory:   Absolute directory the images live in.
        url_prefix:  Public URL prefix, e.g. "/gallery/".
        label:       Noun used in the delete rejection message ("gallery images").
        max_upload_size: Decoded byte limit for uploads.
    """

    def __init__(
        self,
        name: str,
        directory: Path,
        url_prefix: str,
        label: str,
        max_upload_size: int,
    ):
        self.name = name
        self.directory = Path(directory).resolve()
        self.url_prefix = url_prefix if url_prefix.endswith("/") else f"{url_prefix}/"
        self.label = label
        self.max_upload_size = max_upload_size

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}{filename}"

    @staticmethod
    def validate_mime_type(mime_type: Optional[str]) -> None:
        """A declared MIME type must be an allowed image type; absence is fine."""
        if mime_type and mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Invalid image type",
                field="mimeType",
                context={"mime_type": mime_type, "allowed": sorted(ALLOWED_MIME_TYPES)},
            )

    @staticmethod
    def validate_filename(filename: str) -> str:
        """
        Sanitize an upload name and require an allowed image extension.

        Returns:
            The sanitized filename.
        """
        safe = sanitize_filename(filename)
        if not safe or PurePosixPath(safe).suffix not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message="Invalid filename",
                field="filename",
                context={"allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return safe

    async def upload(self, filename: str, data: str, mime_type: Optional[str] = None) -> str:
        """
        Store a base64-encoded image in the library.

        Returns:
            Public URL path of the stored image, e.g. "/gallery/photo.jpg".
        """
        self.validate_mime_type(mime_type)
        safe_name = self.validate_filename(filename)
        raw = decode_image_data(data, self.max_upload_size)

        target = resolve_within(self.directory, safe_name)
        try:
            await aiofiles.os.makedirs(self.directory, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(raw)
        except OSError as e:
            logger.error("Failed to store %s image %s: %s", self.name, target, e)
            raise FileStorageError(
                message=f"Failed to save {safe_name}: {e}",
                context={"path": str(target)},
            ) from e

        logger.info("Stored %s image %s (%d bytes)", self.name, safe_name, len(raw))
        return self.url_for(safe_name)

    async def delete(self, url_path: str) -> None:
        """
        Delete an image by its public URL path.

        Only the basename of `url_path` is used, and it must resolve to a file
        directly inside the library directory.

        Raises:
            ForbiddenError if the URL is not under this library or escapes it.
            NotFoundError if the file does not exist.
        """
        if not url_path.startswith(self.url_prefix):
            raise ForbiddenError(
                message=f"Can only delete {self.label}",
                context={"path": url_path},
            )

        filename = PurePosixPath(url_path).name
        target = resolve_within(self.directory, filename)

        if not await aiofiles.os.path.isfile(target):
            raise NotFoundError(context={"path": url_path})

        try:
            await aiofiles.os.remove(target)
        except OSError as e:
            logger.error("Failed to delete %s image %s: %s", self.name, target, e)
            raise FileStorageError(
                message=f"Failed to delete {filename}: {e}",
                context={"path": str(target)},
            ) from e

        logger.info("Deleted %s image %s", self.name, filename)

    async def list_images(self) -> List[Dict[str, Any]]:
        """
        List the library's images, sorted by filename.

        Creates the directory when missing. Non-image files and
        subdirectories are skipped.
        """
        await aiofiles.os.makedirs(self.directory, exist_ok=True)

        images = []
        for filename in sorted(await aiofiles.os.listdir(self.directory)):
            if PurePosixPath(filename).suffix.lower() not in ALLOWED_EXTENSIONS:
                continue
            path = self.directory / filename
            if not await aiofiles.os.path.isfile(path):
                continue
            stats = await aiofiles.os.stat(path)
            images.append(
                {
                    "filename": filename,
                    "path": self.url_for(filename),
                    "size": stats.st_size,
                    "modified": _isoformat_utc(stats.st_mtime),
                }
            )
        return images

"""
Dev Editor — HEIC to JPEG Conversion
=====================================

What:  Converts HEIC/HEIF photos (as shot by phones) to JPEG for the web.
How:   pillow-heif (the `heic` extra) registers a HEIF opener with Pillow.
       The decoded image is rotated per its EXIF orientation, flattened to
       RGB, and re-encoded as JPEG. Decoding is CPU-bound, so it runs in a
       worker thread. Without pillow-heif, HEIC input fails to decode like
       any other unknown format.

Any format Pillow can open is accepted as input, not only HEIC.
"""

import asyncio
import base64
import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from dev_editor.exceptions import ImageConversionError
from dev_editor.services.media_service import decode_image_data

logger = logging.getLogger(__name__)

try:
    from pillow_heif import register_heif_opener
except ImportError:  # installed with the `heic` extra
    HEIF_SUPPORTED = False
else:
    register_heif_opener()
    HEIF_SUPPORTED = True


class ImageConverter:
    """
    Base64-in, base64-out JPEG converter.

    Args:
        quality:   JPEG quality (1-100).
        max_size:  Decoded input byte limit.
    """

    def __init__(self, quality: int = 92, max_size: int = 26_214_400):
        self.quality = quality
        self.max_size = max_size

    def to_jpeg(self, raw: bytes) -> bytes:
        """Decode `raw` with Pillow and return JPEG bytes."""
        try:
            with Image.open(io.BytesIO(raw)) as image:
                image = ImageOps.exif_transpose(image)
                if image.mode != "RGB":
                    image = image.convert("RGB")
                out = io.BytesIO()
                image.save(out, format="JPEG", quality=self.quality)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.error("Image conversion failed: %s", e)
            raise ImageConversionError(
                message=f"Image conversion failed: {e}",
                context={"input_size": len(raw)},
            ) from e
        return out.getvalue()

    async def convert(self, data: str) -> str:
        """
        Convert a base64 image payload to base64 JPEG.

        Raises:
            ValidationError for bad base64 or oversized input.
            ImageConversionError if the image cannot be decoded or encoded.
        """
        raw = decode_image_data(data, self.max_size)
        jpeg = await asyncio.to_thread(self.to_jpeg, raw)
        logger.info("Converted image to JPEG (%d → %d bytes)", len(raw), len(jpeg))
        return base64.b64encode(jpeg).decode("ascii")

"""
Image preparation before the vision call.

Decodes the upload with Pillow to make sure it is really an image, derives
the MIME type from the decoded format and downsizes anything larger than
MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT (aspect ratio preserved).
"""

import io
import logging
import os
from typing import Any

from PIL import Image, UnidentifiedImageError

from generation.exceptions import ImageTooLargeError, InvalidImageError, MissingImageError
from generation.schemas import ImagePayload

log = logging.getLogger(__name__)

MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))
MAX_IMAGE_WIDTH = int(os.getenv("MAX_IMAGE_WIDTH", "2048"))
MAX_IMAGE_HEIGHT = int(os.getenv("MAX_IMAGE_HEIGHT", "2048"))

# Formats the vision endpoint accepts as-is; anything else is re-encoded as PNG
_PASSTHROUGH_FORMATS = {"PNG", "JPEG", "GIF", "WEBP"}


def cap_image_size(img: Any, max_w: int = MAX_IMAGE_WIDTH, max_h: int = MAX_IMAGE_HEIGHT) -> Any:
    """
    Resize PIL Image to fit within max_w x max_h, preserving aspect ratio.
    Returns the same image object when it already fits.
    """
    w, h = img.size
    if w <= max_w and h <= max_h:
        return img
    ratio = min(max_w / w, max_h / h)
    new_w = max(1, int(w * ratio))
    new_h = max(1, int(h * ratio))
    return img.resize((new_w, new_h), Image.Resampling.LANCZOS)


def prepare_image(data: bytes, max_bytes: int = MAX_IMAGE_BYTES) -> ImagePayload:
    """
    Validate and normalise an uploaded image.

    Args:
        data:      Raw upload bytes
        max_bytes: Upload size limit

    Returns:
        ImagePayload with the bytes to send and their MIME type

    Raises:
        MissingImageError:  no bytes at all
        ImageTooLargeError: more than max_bytes
        InvalidImageError:  Pillow cannot decode the bytes
    """
    if not data:
        raise MissingImageError("No image file uploaded.")
    if len(data) > max_bytes:
        raise ImageTooLargeError(f"Image is {len(data)} bytes; limit is {max_bytes} bytes.")

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidImageError(f"Uploaded file is not a readable image: {e}") from e

    fmt = (img.format or "").upper()
    capped = cap_image_size(img)

    if capped is img and fmt in _PASSTHROUGH_FORMATS:
        return ImagePayload(
            data=data,
            mime_type=Image.MIME[fmt],
            width=img.width,
            height=img.height,
        )

    if capped.mode not in ("RGB", "RGBA", "L"):
        capped = capped.convert("RGBA")
    buf = io.BytesIO()
    capped.save(buf, format="PNG")
    log.info(f"Re-encoded {fmt or 'unknown'} {img.width}x{img.height} → PNG {capped.width}x{capped.height}")
    return ImagePayload(
        data=buf.getvalue(),
        mime_type="image/png",
        width=capped.width,
        height=capped.height,
    )

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

_FALLBACK_MIMETYPE = "application/octet-stream"


def inspect_image(data: bytes) -> str:
    """Return the image mimetype, or raise ValidationError if `data` is not an image Pillow can read."""

    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise ValidationError("Only image files are allowed")

    return Image.MIME.get(fmt or "", _FALLBACK_MIMETYPE)


def image_mimetype(data: bytes) -> str:
    """Best-effort mimetype for stored image bytes."""

    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", _FALLBACK_MIMETYPE)
    except (UnidentifiedImageError, OSError):
        return _FALLBACK_MIMETYPE

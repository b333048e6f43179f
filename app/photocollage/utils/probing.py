from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from app.photocollage.errors import UnrecognizedImageFormat

# Large camera originals are expected input.
Image.MAX_IMAGE_PIXELS = max(int(getattr(Image, "MAX_IMAGE_PIXELS", 0) or 0), 250_000_000)


def probe_dimensions(data: bytes) -> Tuple[int, int]:
    """Return the natural (width, height) of encoded image bytes.

    Only the header is parsed; pixel data is not decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise UnrecognizedImageFormat(f"cannot identify image data: {exc}") from exc


def decode_image(data: bytes) -> Image.Image:
    """Fully decode image bytes into a loaded Pillow image."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise UnrecognizedImageFormat(f"cannot decode image data: {exc}") from exc
    return img

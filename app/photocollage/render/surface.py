"""Pillow-backed rendering surface.

The layout core hands this surface rectangles in canvas coordinates; all
pixel rounding happens here.
"""

from __future__ import annotations

import io
from typing import Tuple

from PIL import Image

from app.photocollage.errors import InvalidConfiguration, RenderFailure

Color = Tuple[int, int, int, int]

TRANSPARENT: Color = (0, 0, 0, 0)

# Pillow format name per accepted alias.
_FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "webp": "WEBP",
    "bmp": "BMP",
    "gif": "GIF",
    "tiff": "TIFF",
    "tif": "TIFF",
}

_NO_ALPHA = {"JPEG", "BMP"}


def normalize_format(fmt: str) -> str:
    """Map 'png', '.jpg', 'image/jpeg' etc. to a Pillow format name."""
    if not isinstance(fmt, str) or not fmt.strip():
        raise InvalidConfiguration("output format must be a non-empty string")
    key = fmt.strip().lower()
    if key.startswith("image/"):
        key = key[len("image/"):]
    key = key.lstrip(".")
    try:
        return _FORMATS[key]
    except KeyError:
        raise InvalidConfiguration(f"unsupported output format: {fmt}") from None


def parse_color(value: str) -> Color:
    """Parse '#RRGGBB' or '#RRGGBBAA' (leading '#' optional)."""
    text = value.strip().lstrip("#")
    if len(text) not in (6, 8):
        raise InvalidConfiguration(f"invalid color: {value}")
    try:
        parts = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError:
        raise InvalidConfiguration(f"invalid color: {value}") from None
    if len(parts) == 3:
        parts.append(255)
    return tuple(parts)  # type: ignore[return-value]


class PillowSurface:
    def __init__(self, canvas: Image.Image, background: Color) -> None:
        self.canvas = canvas
        self.background = background

    @classmethod
    def create(cls, width: int, height: int, background: Color = TRANSPARENT) -> "PillowSurface":
        if width <= 0 or height <= 0:
            raise RenderFailure(f"cannot allocate a {width}x{height} surface")
        try:
            canvas = Image.new("RGBA", (int(width), int(height)), tuple(background))
        except (MemoryError, ValueError, Image.DecompressionBombError) as exc:
            raise RenderFailure(f"cannot allocate a {width}x{height} surface: {exc}") from exc
        return cls(canvas, background)

    @property
    def size(self) -> Tuple[int, int]:
        return self.canvas.size

    def draw(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        """Scale ``image`` into the rectangle and paste it (alpha aware)."""
        # Rounding both edges keeps adjacent tiles seamless.
        dx, dy = max(0, int(round(x))), max(0, int(round(y)))
        box_w = max(1, int(round(x + width)) - dx)
        box_h = max(1, int(round(y + height)) - dy)
        canvas_w, canvas_h = self.canvas.size
        if dx >= canvas_w or dy >= canvas_h:
            raise RenderFailure(f"target ({x}, {y}) lies outside the {canvas_w}x{canvas_h} surface")
        try:
            tile = image.convert("RGBA")
            if tile.size != (box_w, box_h):
                tile = tile.resize((box_w, box_h), resample=Image.Resampling.LANCZOS)
            # Rounding may push the last pixel column/row past the edge.
            if dx + box_w > canvas_w or dy + box_h > canvas_h:
                tile = tile.crop((0, 0, min(box_w, canvas_w - dx), min(box_h, canvas_h - dy)))
            self.canvas.alpha_composite(tile, dest=(dx, dy))
        except (OSError, ValueError) as exc:
            raise RenderFailure(f"failed to draw image at ({x}, {y}): {exc}") from exc

    def encode(self, fmt: str = "png", quality: int = 90) -> bytes:
        pil_format = normalize_format(fmt)
        out = self.canvas
        if pil_format in _NO_ALPHA:
            r, g, b, a = self.background
            fill = (r, g, b) if a else (255, 255, 255)
            flat = Image.new("RGB", out.size, fill)
            flat.paste(out, mask=out.getchannel("A"))
            out = flat

        options = {}
        if pil_format in ("JPEG", "WEBP"):
            options["quality"] = int(quality)

        buf = io.BytesIO()
        try:
            out.save(buf, format=pil_format, **options)
        except (OSError, ValueError, KeyError) as exc:
            raise RenderFailure(f"failed to encode {pil_format}: {exc}") from exc
        return buf.getvalue()

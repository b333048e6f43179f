"""Build an encoded collage from a list of image sources.

Stages:
1. resolve + probe every source (concurrently, joined in input order)
2. synchronous layout (app.photocollage.layout.pipeline)
3. draw each thumbnail onto a Pillow surface, row by row, and encode
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Optional, Sequence

import requests

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.layout.pipeline import compute_layout
from app.photocollage.models import CollageLayout, LayoutConfig, SizedImage
from app.photocollage.render.surface import TRANSPARENT, Color, PillowSurface, normalize_format
from app.photocollage.utils.probing import decode_image, probe_dimensions
from app.photocollage.utils.sources import DEFAULT_TIMEOUT, describe_source, resolve_source

logger = logging.getLogger(__name__)

DEFAULT_ROW_HEIGHT = 300
DEFAULT_SPACING = 10


def effective_workers(workers: int, jobs: int) -> int:
    if workers <= 0:
        cpu = os.cpu_count() or 4
        workers = min(32, max(1, cpu * 2))
    return max(1, min(int(workers), jobs))


def load_sized_image(
    ref: Any,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> SizedImage:
    data = resolve_source(ref, timeout=timeout, session=session)
    width, height = probe_dimensions(data)
    logger.debug("probed %s: %dx%d", describe_source(ref), width, height)
    return SizedImage(image=data, width=width, height=height)


def load_sized_images(
    sources: Sequence[Any],
    *,
    workers: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[SizedImage]:
    """Resolve and probe all sources; result order matches ``sources``.

    The first failure is raised once the pool has drained. requests.Session
    is not thread-safe, so a caller-supplied session is used sequentially.
    """

    n_workers = 1 if session is not None else effective_workers(workers, len(sources))
    if n_workers <= 1:
        return [load_sized_image(ref, timeout=timeout, session=session) for ref in sources]

    with ThreadPoolExecutor(max_workers=n_workers) as ex:
        return list(
            ex.map(lambda ref: load_sized_image(ref, timeout=timeout, session=session), sources)
        )


def _validate_request(sources: Sequence[Any], max_width: float, columns_count: int) -> None:
    if sources is None or len(sources) == 0:
        raise InvalidConfiguration("sources must not be empty")
    if isinstance(max_width, bool) or not isinstance(max_width, (int, float)) or max_width <= 0:
        raise InvalidConfiguration("max_width must be > 0")
    if isinstance(columns_count, bool) or not isinstance(columns_count, int) or columns_count < 0:
        raise InvalidConfiguration("columns_count must be an integer >= 0")


def render_layout(
    layout: CollageLayout,
    output_format: str = "png",
    *,
    background: Color = TRANSPARENT,
    quality: int = 90,
) -> bytes:
    width, height = layout.canvas.size
    surface = PillowSurface.create(width, height, background)

    for index, (row, row_positions) in enumerate(zip(layout.rows, layout.positions)):
        logger.debug("drawing row %d: %d images, height %.1f", index, len(row), row[0].height)
        for thumb, pos in zip(row, row_positions):
            surface.draw(decode_image(thumb.image), pos.x, pos.y, thumb.width, thumb.height)

    return surface.encode(output_format, quality=quality)


def create_collage(
    sources: Sequence[Any],
    max_width: float,
    columns_count: int = 0,
    output_format: str = "png",
    *,
    target_row_height: float = DEFAULT_ROW_HEIGHT,
    spacing: float = DEFAULT_SPACING,
    background: Color = TRANSPARENT,
    quality: int = 90,
    workers: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Lay out ``sources`` in justified rows and return the encoded collage.

    Raises InvalidConfiguration before any I/O when the request itself is bad.
    """

    _validate_request(sources, max_width, columns_count)
    normalize_format(output_format)
    config = LayoutConfig(
        container_width=max_width,
        target_row_height=target_row_height,
        columns_count=columns_count,
        spacing=spacing,
    ).validate()

    logger.info("building collage from %d sources (max_width=%s)", len(sources), max_width)
    images = load_sized_images(sources, workers=workers, timeout=timeout, session=session)
    layout = compute_layout(images, config)
    data = render_layout(layout, output_format, background=background, quality=quality)

    width, height = layout.canvas.size
    logger.info(
        "collage ready: %d rows, %dx%d, %d bytes", len(layout.rows), width, height, len(data)
    )
    return data


def save_collage(
    path: str | Path,
    sources: Sequence[Any],
    max_width: float,
    columns_count: int = 0,
    output_format: Optional[str] = None,
    **kwargs: Any,
) -> Path:
    """Write a collage to ``path``; the format defaults to the file suffix."""
    out = Path(path)
    fmt = output_format or out.suffix or "png"
    data = create_collage(sources, max_width, columns_count, fmt, **kwargs)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    return out

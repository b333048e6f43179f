"""Compose the layout stages: window -> packer -> corrector -> geometry."""

from __future__ import annotations

import logging
from typing import List, Sequence

from app.photocollage.layout.geometry import derive_geometry
from app.photocollage.layout.justified import pack_rows
from app.photocollage.layout.rows import correct_rows
from app.photocollage.models import CollageLayout, LayoutConfig, Row, SizedImage

logger = logging.getLogger(__name__)


def get_row_layout(images: Sequence[SizedImage], config: LayoutConfig) -> List[Row]:
    config.validate()
    window = config.search_window()
    logger.debug(
        "packing %d images: container=%s target_height=%s window=%d",
        len(images),
        config.container_width,
        config.target_row_height,
        window,
    )

    thumbs = pack_rows(
        images,
        config.container_width,
        window,
        config.target_row_height,
        config.spacing,
    )
    return correct_rows(thumbs, config.container_width, config.spacing)


def compute_layout(images: Sequence[SizedImage], config: LayoutConfig) -> CollageLayout:
    """Run the full layout for one collage.

    Deterministic: the same images and config always give the same layout.
    """

    rows = get_row_layout(images, config)
    canvas, positions = derive_geometry(rows, config.spacing)
    logger.debug("layout: %d rows, canvas %.1fx%.1f", len(rows), canvas.width, canvas.height)
    return CollageLayout(rows=tuple(rows), positions=tuple(positions), canvas=canvas)

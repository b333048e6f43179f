"""Re-bucket packed thumbnails into rows and guard against rounding overflow.

Thumbnail widths are fractional and only rounded at draw time, so a row whose
exact widths fit the container can still end up a pixel too wide once each
width is rounded. This pass walks the flat packer output and closes a row as
soon as the rounded running width would exceed the container. Packer row
boundaries are always kept; the width check only splits inside one.
"""

from __future__ import annotations

from typing import Iterable, List

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.models import Row, Thumbnail


def correct_rows(
    thumbnails: Iterable[Thumbnail],
    container_width: float,
    spacing: float = 0,
) -> List[Row]:
    """Split thumbnails into rows, then widen a lone trailing thumbnail."""

    if container_width <= 0:
        raise InvalidConfiguration("container_width must be > 0")

    rows: List[Row] = []
    current: List[Thumbnail] = []
    width = 0

    for thumb in thumbnails:
        rounded = round(thumb.width)
        new_run = bool(current) and (
            thumb.row != current[0].row or thumb.height != current[0].height
        )
        if current and (new_run or width + rounded > container_width):
            rows.append(tuple(current))
            current = []
            width = 0
        current.append(thumb)
        width += rounded

    if current:
        rows.append(tuple(current))

    return widen_lone_trailing(rows, spacing)


def widen_lone_trailing(rows: List[Row], spacing: float) -> List[Row]:
    """Give a single-image last row one extra spacing of width.

    Returns a new list; the input rows and thumbnails are left untouched.
    """

    if not rows or len(rows[-1]) != 1 or not spacing:
        return list(rows)
    return [*rows[:-1], (rows[-1][0].widened(spacing),)]

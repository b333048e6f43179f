"""Canvas size and absolute thumbnail positions for corrected rows."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.models import CanvasDimensions, Position, Row, row_height


def _require_rows(rows: Sequence[Row]) -> None:
    if not rows or not all(rows):
        raise InvalidConfiguration("geometry needs at least one non-empty row")


def canvas_width(rows: Sequence[Row], spacing: float) -> float:
    """Width of row 0 plus gap and margin allowances.

    Rows are width-consistent by construction, so only the first is summed.
    """
    _require_rows(rows)
    first = rows[0]
    additional = math.ceil(len(first) / 2) * spacing + spacing * 2
    return sum(thumb.width for thumb in first) + additional


def canvas_height(rows: Sequence[Row], spacing: float) -> float:
    _require_rows(rows)
    margin = spacing * 2 if len(rows) > 1 else spacing
    additional = math.ceil(len(rows) / 2) * spacing + margin
    return sum(row_height(row) for row in rows) + additional


def row_positions(rows: Sequence[Row], spacing: float) -> List[Tuple[Position, ...]]:
    positions: List[Tuple[Position, ...]] = []
    y = spacing
    for row in rows:
        x = spacing
        placed = []
        for thumb in row:
            placed.append(Position(x=x, y=y))
            x += thumb.width + spacing
        positions.append(tuple(placed))
        y += row_height(row) + spacing
    return positions


def content_extent(
    rows: Sequence[Row], positions: Sequence[Sequence[Position]]
) -> Tuple[float, float]:
    """Right-most and bottom-most edge covered by any thumbnail."""
    right = 0.0
    bottom = 0.0
    for row, placed in zip(rows, positions):
        for thumb, pos in zip(row, placed):
            right = max(right, pos.x + thumb.width)
            bottom = max(bottom, pos.y + thumb.height)
    return right, bottom


def derive_geometry(
    rows: Sequence[Row], spacing: float = 0
) -> Tuple[CanvasDimensions, List[Tuple[Position, ...]]]:
    """Compute (canvas, positions).

    The allowance formulas reserve ceil(n / 2) gaps for n items, which is
    short of the n - 1 real gaps once a row (or the row count) reaches six;
    the canvas then grows to the content edge so nothing is clipped.
    """

    if spacing < 0:
        raise InvalidConfiguration("spacing must be >= 0")
    _require_rows(rows)

    positions = row_positions(rows, spacing)
    right, bottom = content_extent(rows, positions)
    canvas = CanvasDimensions(
        width=max(canvas_width(rows, spacing), right),
        height=max(canvas_height(rows, spacing), bottom),
    )
    return canvas, positions

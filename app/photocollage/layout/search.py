"""Lookahead window helpers for justified row packing."""

from __future__ import annotations

from app.photocollage.errors import InvalidConfiguration

# Below this container width a two-image window is always used.
NARROW_CONTAINER_PX = 450
MIN_SEARCH_WIDTH = 2
MAX_SEARCH_WIDTH = 24


def ideal_search_width(
    *,
    container_width: float,
    target_row_height: float,
    max_search: int = MAX_SEARCH_WIDTH,
) -> int:
    """Choose how many images the packer may consider for one row.

    Policy:
    - proportional to how many target-height squares fit across the row
      (container_width / target_row_height), divided by 1.5
    - plus a fixed slack of 8
    - clamped to [MIN_SEARCH_WIDTH, max_search]
    """

    if container_width <= 0:
        raise InvalidConfiguration("container_width must be > 0")
    if target_row_height <= 0:
        raise InvalidConfiguration("target_row_height must be > 0")
    if max_search < MIN_SEARCH_WIDTH:
        raise InvalidConfiguration(f"max_search must be >= {MIN_SEARCH_WIDTH}")

    row_aspect = container_width / target_row_height
    n = round(row_aspect / 1.5) + 8
    return int(max(MIN_SEARCH_WIDTH, min(max_search, n)))


def choose_search_window(
    *,
    container_width: float,
    target_row_height: float,
    columns_count: int = 0,
) -> int:
    """Resolve the packer's window: explicit column count wins, then width."""

    if columns_count < 0:
        raise InvalidConfiguration("columns_count must be >= 0")
    if columns_count:
        return int(columns_count)
    if container_width < NARROW_CONTAINER_PX:
        return MIN_SEARCH_WIDTH
    return ideal_search_width(
        container_width=container_width,
        target_row_height=target_row_height,
    )

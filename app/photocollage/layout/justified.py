"""Justified row packing.

Given images in display order, split them into rows so that every row,
scaled uniformly, spans the container and its height stays close to the
target. Pure function of its inputs; no I/O, no shared state.

Break points are picked by minimum total cost over the whole sequence, where
a row's cost is the squared deviation of its common height from the target.
Rows are bounded by the lookahead window, so the search is a shortest path
over a DAG with at most ``len(images) * search_window`` edges.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from app.photocollage.errors import InvalidConfiguration, InvalidImageDimensions
from app.photocollage.models import SizedImage, Thumbnail


def row_allowance(count: int, spacing: float) -> float:
    """Horizontal spacing reserved for a row of ``count`` images.

    Outer margins (2 * spacing) plus half a spacing per image rounded up to
    pairs. The geometry stage adds exactly this back to the canvas width.
    """
    return spacing * (2 + math.ceil(count / 2))


def validate_images(images: Sequence[SizedImage]) -> None:
    for index, item in enumerate(images):
        for name in ("width", "height"):
            value = getattr(item, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value <= 0
            ):
                raise InvalidImageDimensions(
                    f"image {index} has invalid natural {name}: {value!r}"
                )


def common_height(
    aspect_sum: float, count: int, container_width: float, spacing: float
) -> float:
    usable = max(1.0, container_width - row_allowance(count, spacing))
    return usable / aspect_sum


def scaled_width(ratio: float, height: float) -> float:
    """Width at ``height``, rounded to 0.1 px once it is wide enough to absorb it."""
    width = ratio * height
    return round(width, 1) if width >= 10 else width


def find_breaks(
    ratios: Sequence[float],
    container_width: float,
    search_window: int,
    target_row_height: float,
    spacing: float = 0,
) -> List[int]:
    """Return row boundaries as indices ``[0, b1, ..., len(ratios)]``."""

    n = len(ratios)
    # An image wider than the row at target height always gets a row of its own.
    solo_width = container_width - row_allowance(1, spacing)
    oversized = [r * target_row_height >= solo_width for r in ratios]
    best: List[float] = [math.inf] * (n + 1)
    back: List[Optional[int]] = [None] * (n + 1)
    best[0] = 0.0

    for start in range(n):
        if best[start] == math.inf:
            continue
        aspect_sum = 0.0
        for end in range(start + 1, min(n, start + search_window) + 1):
            if end - start > 1 and (oversized[start] or oversized[end - 1]):
                break
            aspect_sum += ratios[end - 1]
            height = common_height(aspect_sum, end - start, container_width, spacing)
            total = best[start] + (height - target_row_height) ** 2
            # Strict comparison keeps the earliest break on ties.
            if total < best[end]:
                best[end] = total
                back[end] = start

    breaks = [n]
    while breaks[-1] > 0:
        prev = back[breaks[-1]]
        if prev is None:
            raise RuntimeError("row search did not reach the start of the sequence")
        breaks.append(prev)
    breaks.reverse()
    return breaks


def pack_rows(
    images: Sequence[SizedImage],
    container_width: float,
    search_window: int,
    target_row_height: float,
    spacing: float = 0,
) -> List[Thumbnail]:
    """Scale every image to its row height; return thumbnails in input order.

    Row boundaries are carried on each thumbnail as ``row``, which the
    overflow corrector uses to re-bucket them.
    """

    if container_width <= 0:
        raise InvalidConfiguration("container_width must be > 0")
    if target_row_height <= 0:
        raise InvalidConfiguration("target_row_height must be > 0")
    if search_window < 1:
        raise InvalidConfiguration("search_window must be >= 1")
    if spacing < 0:
        raise InvalidConfiguration("spacing must be >= 0")

    validate_images(images)
    if not images:
        return []

    ratios = [item.aspect_ratio for item in images]
    breaks = find_breaks(ratios, container_width, search_window, target_row_height, spacing)

    thumbs: List[Thumbnail] = []
    for row, (start, end) in enumerate(zip(breaks, breaks[1:])):
        height = common_height(sum(ratios[start:end]), end - start, container_width, spacing)
        for j in range(start, end):
            thumbs.append(
                Thumbnail(
                    image=images[j].image,
                    width=scaled_width(ratios[j], height),
                    height=height,
                    row=row,
                )
            )
    return thumbs

"""Value types shared by the layout stages.

All of these are frozen: a stage produces new values instead of mutating the
ones it was given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Sequence, Tuple

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.layout.search import choose_search_window


@dataclass(frozen=True)
class SizedImage:
    """A resolved source plus its natural pixel size.

    image: opaque handle (raw bytes in practice); never copied downstream.
    """

    image: Any = field(repr=False)
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class Thumbnail:
    image: Any = field(repr=False)
    width: float
    height: float
    # Index of the packer row this thumbnail was scaled for.
    row: int = 0

    def widened(self, extra: float) -> "Thumbnail":
        return replace(self, width=self.width + extra)


Row = Tuple[Thumbnail, ...]


def row_height(row: Sequence[Thumbnail]) -> float:
    return row[0].height


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class CanvasDimensions:
    width: float
    height: float

    @property
    def size(self) -> Tuple[int, int]:
        """Integer pixel size large enough to hold the fractional canvas."""
        return int(math.ceil(self.width)), int(math.ceil(self.height))


@dataclass(frozen=True)
class LayoutConfig:
    """Parameters fixed for one layout invocation.

    columns_count: 0 means "pick the lookahead window automatically".
    """

    container_width: float
    target_row_height: float = 300
    columns_count: int = 0
    spacing: float = 10

    def validate(self) -> "LayoutConfig":
        if not _is_number(self.container_width) or self.container_width <= 0:
            raise InvalidConfiguration("container_width must be > 0")
        if not _is_number(self.target_row_height) or self.target_row_height <= 0:
            raise InvalidConfiguration("target_row_height must be > 0")
        if isinstance(self.columns_count, bool) or not isinstance(self.columns_count, int):
            raise InvalidConfiguration("columns_count must be an integer")
        if self.columns_count < 0:
            raise InvalidConfiguration("columns_count must be >= 0")
        if not _is_number(self.spacing) or self.spacing < 0:
            raise InvalidConfiguration("spacing must be >= 0")
        return self

    def search_window(self) -> int:
        return choose_search_window(
            container_width=self.container_width,
            target_row_height=self.target_row_height,
            columns_count=self.columns_count,
        )


@dataclass(frozen=True)
class CollageLayout:
    rows: Tuple[Row, ...]
    positions: Tuple[Tuple[Position, ...], ...]
    canvas: CanvasDimensions

    def placements(self) -> Iterator[Tuple[Thumbnail, Position]]:
        """Yield (thumbnail, position) in row-then-left-to-right draw order."""
        for row, row_positions in zip(self.rows, self.positions):
            yield from zip(row, row_positions)

    def __len__(self) -> int:
        return sum(len(row) for row in self.rows)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)

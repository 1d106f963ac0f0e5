"""
Grid module.

A fixed-size 2D container stored as one contiguous row-major numpy
buffer. The grid never interprets its values; owners decide what a
tile means.
"""
import operator
from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Sequence, Tuple, TypeVar,
)

import numpy as np

from .errors import OutOfBoundsError


T = TypeVar("T")

Position = Tuple[int, int]


# ============================================================================
# Neighbour Offsets
# ============================================================================

ORTHOGONAL_OFFSETS: Tuple[Position, ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

SURROUNDING_OFFSETS: Tuple[Position, ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)


# ============================================================================
# Grid Class
# ============================================================================

class Grid(Generic[T]):
    """
    Rectangular grid of width x height tiles addressed by (x, y).

    Reads and writes outside the grid raise OutOfBoundsError; callers
    that accept untrusted coordinates should test in_bounds first.
    """

    def __init__(
        self,
        width: int,
        height: int,
        fill: Any = None,
        dtype: Any = object,
    ) -> None:
        """
        Create a grid with every tile set to fill.

        Args:
            width: Number of columns (x axis).
            height: Number of rows (y axis).
            fill: Initial value for every tile.
            dtype: numpy dtype of the backing buffer.
        """
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive")
        self.width = width
        self.height = height
        self._cells = np.empty(width * height, dtype=dtype)
        if self._cells.dtype == object:
            # One slot at a time, so sequence values are stored whole
            for index in range(width * height):
                self._cells[index] = fill
        else:
            self._cells.fill(fill)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]], dtype: Any = object) -> "Grid[T]":
        """Build a grid from rows, where rows[y][x] is the tile at (x, y)."""
        if not rows or not rows[0]:
            raise ValueError("Grid dimensions must be positive")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")
        grid = cls(width, len(rows), fill=rows[0][0], dtype=dtype)
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                grid.set(x, y, value)
        return grid

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Grid[T]":
        """Build a grid from a 2D (height, width) numpy array."""
        if array.ndim != 2:
            raise ValueError("Expected a 2D array")
        if 0 in array.shape:
            raise ValueError("Grid dimensions must be positive")
        height, width = array.shape
        return cls._wrap(width, height, array.ravel().copy())

    @classmethod
    def _wrap(cls, width: int, height: int, cells: np.ndarray) -> "Grid[T]":
        grid = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._cells = cells
        return grid

    # ========================================================================
    # Indexing (Low-level)
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is a pair of integers within grid bounds."""
        try:
            x, y = operator.index(x), operator.index(y)
        except TypeError:
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return y * self.width + x

    def get(self, x: int, y: int) -> T:
        """Return the tile at (x, y)."""
        return self._cells.item(self._index(x, y))

    def set(self, x: int, y: int, value: T) -> None:
        """Replace the tile at (x, y)."""
        self._cells[self._index(x, y)] = value

    # ========================================================================
    # Traversal
    # ========================================================================

    def positions(self) -> Iterator[Position]:
        """Yield every (x, y) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def neighbors(
        self, x: int, y: int, offsets: Iterable[Position]
    ) -> Iterator[Position]:
        """Yield the in-bounds positions at the given offsets from (x, y)."""
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def count(self, predicate: Callable[[T], bool]) -> int:
        """Count tiles matching predicate."""
        return sum(1 for value in self._cells if predicate(value))

    def rows(self) -> List[List[T]]:
        """Return the tiles as nested lists, rows[y][x]."""
        return [
            [self.get(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    # ========================================================================
    # Snapshots
    # ========================================================================

    def copy(self) -> "Grid[T]":
        """Return an independent copy of this grid."""
        return Grid._wrap(self.width, self.height, self._cells.copy())

    def to_array(self) -> np.ndarray:
        """Return a (height, width) copy of the backing buffer."""
        return self._cells.reshape(self.height, self.width).copy()

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid size as (width, height)."""
        return self.width, self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.shape == other.shape
            and bool(np.all(self._cells == other._cells))
        )

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

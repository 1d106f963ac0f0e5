"""
Board module for the minesweeper game.

Holds the board configuration, random placement of solid/mine tiles,
and the MineBoard that derives adjacency counts from a mine layout.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np

from .errors import ContractViolation
from .grid import SURROUNDING_OFFSETS, Grid, Position
from .tiles import EMPTY, SOLID, Tile


logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


# ============================================================================
# Constants
# ============================================================================

# Percentages above this are accepted only after explicit confirmation
WARN_PERCENT = 40
MAX_PERCENT = 99


@dataclass
class BoardConfig:
    """
    Configuration for a generated board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        percent_solid: Share of tiles made solid (flood fill) or mined
            (minesweeper), in percent.
    """

    width: int = 9
    height: int = 9
    percent_solid: int = 12

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if not 0 <= self.percent_solid <= MAX_PERCENT:
            raise ValueError(
                f"Percent solid must be between 0 and {MAX_PERCENT}"
            )

    @property
    def area(self) -> int:
        """Total number of tiles."""
        return self.width * self.height

    @property
    def num_solid(self) -> int:
        """Number of tiles to make solid, rounded down."""
        return int(self.area * (self.percent_solid / 100.0))

    @property
    def needs_confirmation(self) -> bool:
        """Check if the percentage is high enough to warrant a warning."""
        return self.percent_solid > WARN_PERCENT


# ============================================================================
# Layout Generation
# ============================================================================

def generate_layout(config: BoardConfig, rng: RandomSource = None) -> Grid[bool]:
    """
    Place config.num_solid mines on distinct random tiles.

    Args:
        config: Board configuration.
        rng: Seed or numpy Generator for reproducible placement.

    Returns:
        Boolean grid, True where a mine (or solid tile) sits.
    """
    rng = np.random.default_rng(rng)
    layout: Grid[bool] = Grid(config.width, config.height, False, dtype=bool)
    picks = rng.choice(config.area, size=config.num_solid, replace=False)
    for index in picks:
        layout.set(int(index) % config.width, int(index) // config.width, True)
    logger.debug(
        "Placed %d solid tiles on a %dx%d board",
        config.num_solid, config.width, config.height,
    )
    return layout


def terrain_from_layout(layout: Grid[bool]) -> Grid[Tile]:
    """Convert a boolean layout into flood-fill terrain."""
    terrain: Grid[Tile] = Grid(layout.width, layout.height, EMPTY)
    for x, y in layout.positions():
        if layout.get(x, y):
            terrain.set(x, y, SOLID)
    return terrain


def generate_terrain(config: BoardConfig, rng: RandomSource = None) -> Grid[Tile]:
    """Generate flood-fill terrain with config.num_solid solid tiles."""
    return terrain_from_layout(generate_layout(config, rng))


# ============================================================================
# MineBoard Class
# ============================================================================

class MineBoard:
    """
    Immutable mine layout plus the adjacency count of every safe tile.

    The layout is copied on construction, so later changes to the
    caller's grid do not leak into a running game.
    """

    def __init__(self, layout: Grid[bool]) -> None:
        """
        Build the board and compute adjacency counts.

        Args:
            layout: True where a mine sits.

        Raises:
            ValueError: If every tile is a mine.
        """
        self._mines: Grid[bool] = Grid(layout.width, layout.height, False, dtype=bool)
        for x, y in layout.positions():
            self._mines.set(x, y, bool(layout.get(x, y)))
        self._num_mines = self._mines.count(bool)
        if self._num_mines == self.total_tiles:
            raise ValueError("Layout must contain at least one safe tile")

        self._adjacent: Grid[int] = Grid(layout.width, layout.height, 0, dtype=np.int8)
        self._calculate_adjacent_mines()

    @classmethod
    def from_array(cls, mines: np.ndarray) -> "MineBoard":
        """Build a board from a (height, width) boolean array."""
        return cls(Grid.from_array(np.asarray(mines, dtype=bool)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> "MineBoard":
        """Build a board from rows, where rows[y][x] is True for a mine."""
        return cls(Grid.from_rows(rows, dtype=bool))

    @classmethod
    def generate(cls, config: BoardConfig, rng: RandomSource = None) -> "MineBoard":
        """Build a board with randomly placed mines."""
        return cls(generate_layout(config, rng))

    # ========================================================================
    # Adjacency (Low-level)
    # ========================================================================

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all safe tiles."""
        for x, y in self._mines.positions():
            if not self._mines.get(x, y):
                self._adjacent.set(x, y, self._count_adjacent_mines(x, y))

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines among the eight tiles around (x, y)."""
        return sum(
            1
            for nx, ny in self._mines.neighbors(x, y, SURROUNDING_OFFSETS)
            if self._mines.get(nx, ny)
        )

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._mines.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._mines.height

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.width * self.height

    @property
    def num_mines(self) -> int:
        """Number of mines in the layout."""
        return self._num_mines

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return self._mines.in_bounds(x, y)

    def is_mine(self, x: int, y: int) -> bool:
        """Check if a mine sits at (x, y)."""
        return self._mines.get(x, y)

    def adjacent_mines(self, x: int, y: int) -> int:
        """
        Number of mines around the safe tile at (x, y).

        Raises:
            ContractViolation: If (x, y) is itself a mine.
        """
        if self._mines.get(x, y):
            raise ContractViolation(f"Mine at ({x}, {y}) has no adjacency count")
        return self._adjacent.get(x, y)

    def mine_positions(self) -> List[Position]:
        """All mine positions in row-major order."""
        return [pos for pos in self._mines.positions() if self._mines.get(*pos)]

    def layout(self) -> Grid[bool]:
        """Return a copy of the mine layout."""
        return self._mines.copy()


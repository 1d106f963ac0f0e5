"""
Floodsweep: flood fill over tile grids and a minesweeper game built on it.

Provides the grid container, flood fill, the mine board and the game
state machine, plus a console shell and a Gymnasium environment.
"""
from .errors import (
    ContractViolation,
    OutOfBoundsError,
    SolidTileError,
    InvalidTransitionError,
    GameOverError,
)
from .grid import Grid, ORTHOGONAL_OFFSETS, SURROUNDING_OFFSETS
from .tiles import Tile, Terrain, EMPTY, SOLID
from .cell import Cell, CellState
from .flood import flood_fill, iter_flood_fill
from .board import (
    BoardConfig,
    MineBoard,
    generate_layout,
    generate_terrain,
    terrain_from_layout,
)
from .game import GameState, MineGame, TurnResult, flood_reveal
from .environment import FloodsweepEnv

__all__ = [
    "ContractViolation",
    "OutOfBoundsError",
    "SolidTileError",
    "InvalidTransitionError",
    "GameOverError",
    "Grid",
    "ORTHOGONAL_OFFSETS",
    "SURROUNDING_OFFSETS",
    "Tile",
    "Terrain",
    "EMPTY",
    "SOLID",
    "Cell",
    "CellState",
    "flood_fill",
    "iter_flood_fill",
    "BoardConfig",
    "MineBoard",
    "generate_layout",
    "generate_terrain",
    "terrain_from_layout",
    "GameState",
    "MineGame",
    "TurnResult",
    "flood_reveal",
    "FloodsweepEnv",
]

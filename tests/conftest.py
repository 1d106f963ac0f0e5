"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, List

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from floodsweep import EMPTY, SOLID, Grid, MineBoard, MineGame, Tile


# ============================================================================
# Helpers
# ============================================================================

def terrain_from_text(*rows: str) -> Grid[Tile]:
    """Build terrain from strings where '#' is solid and anything else is empty."""
    return Grid.from_rows([[SOLID if ch == "#" else EMPTY for ch in row] for row in rows])


def board_from_text(*rows: str) -> MineBoard:
    """Build a mine board from strings where '*' marks a mine."""
    return MineBoard.from_rows([[ch == "*" for ch in row] for row in rows])


def scripted(answers: List[str]) -> Callable[[str], str]:
    """Read function that replays answers in order."""
    remaining = iter(answers)
    return lambda _prompt: next(remaining)


# ============================================================================
# Factory Fixtures
# ============================================================================

@pytest.fixture
def make_terrain() -> Callable[..., Grid[Tile]]:
    """Factory for terrain built from text rows."""
    return terrain_from_text


@pytest.fixture
def make_board() -> Callable[..., MineBoard]:
    """Factory for mine boards built from text rows."""
    return board_from_text


@pytest.fixture
def make_read() -> Callable[[List[str]], Callable[[str], str]]:
    """Factory for scripted console input."""
    return scripted


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def open_terrain() -> Grid[Tile]:
    """Create a 3x3 terrain grid with no solid tiles."""
    return Grid(3, 3, EMPTY)


@pytest.fixture
def walled_terrain() -> Grid[Tile]:
    """Create terrain split in two by a vertical wall."""
    return terrain_from_text(
        "..#..",
        "..#..",
        "..#..",
    )


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_board() -> MineBoard:
    """Create a 3x3 board with a single mine at (0, 0)."""
    return board_from_text(
        "*..",
        "...",
        "...",
    )


@pytest.fixture
def corner_mine_game(corner_mine_board: MineBoard) -> MineGame:
    """Create a game on the 3x3 corner-mine board."""
    return MineGame(corner_mine_board)


@pytest.fixture
def split_game() -> MineGame:
    """
    Create a 5x3 game with a column of mines at x=2.

    Both sides are zero regions bordered by numbered tiles.
    """
    return MineGame(board_from_text(
        "..*..",
        "..*..",
        "..*..",
    ))

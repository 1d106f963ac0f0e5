"""
Console shell for flood fill and minesweeper.

Text rendering, integer/character prompts, and the interactive loops
that drive the core. Input and output go through a Console so the
loops can be scripted.
"""
import logging
from typing import Callable, Optional

from .board import (
    MAX_PERCENT, WARN_PERCENT, BoardConfig, MineBoard, RandomSource,
    generate_layout, terrain_from_layout,
)
from .cell import Cell, CellState
from .errors import ContractViolation
from .flood import iter_flood_fill
from .game import GameState, MineGame
from .grid import Grid
from .tiles import Terrain, Tile


logger = logging.getLogger(__name__)


# ============================================================================
# Rendering
# ============================================================================

EMPTY_CHAR = " "
SOLID_CHAR = "#"
HIDDEN_CHAR = "-"
SELECTED_CHAR = "^"
FLAGGED_CHAR = "!"

_CELL_CHARS = {
    CellState.HIDDEN: HIDDEN_CHAR,
    CellState.FLAGGED: FLAGGED_CHAR,
    CellState.SELECTED: SELECTED_CHAR,
    CellState.REVEALED_EMPTY: EMPTY_CHAR,
    CellState.REVEALED_MINE: SOLID_CHAR,
}


def tile_char(tile: Tile) -> str:
    """Character for a terrain tile."""
    if tile.terrain == Terrain.FILLED:
        return tile.marker
    if tile.terrain == Terrain.SOLID:
        return SOLID_CHAR
    return EMPTY_CHAR


def cell_char(cell: Cell) -> str:
    """Character for a visible minesweeper cell."""
    if cell.state == CellState.REVEALED_COUNT:
        return str(cell.adjacent_mines)
    return _CELL_CHARS[cell.state]


def render_grid(grid: Grid, to_char: Callable[[object], str]) -> str:
    """Draw grid inside a box border, one character per tile."""
    lines = ["┌" + "─" * grid.width + "┐"]
    for row in grid.rows():
        lines.append("│" + "".join(to_char(value) for value in row) + "│")
    lines.append("└" + "─" * grid.width + "┘")
    return "\n".join(lines)


def render_terrain(grid: Grid[Tile]) -> str:
    """Render a flood-fill terrain grid."""
    return render_grid(grid, tile_char)


def render_board(grid: Grid[Cell]) -> str:
    """Render a visible minesweeper board."""
    return render_grid(grid, cell_char)


# ============================================================================
# Prompts
# ============================================================================

class Console:
    """Line-based operator I/O with re-prompting on bad input."""

    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.read = read
        self.write = write

    def prompt_int(self, prompt: str) -> int:
        """Ask until the answer parses as an integer."""
        while True:
            answer = self.read(prompt).strip()
            try:
                return int(answer)
            except ValueError:
                logger.debug("Rejected integer input %r", answer)

    def prompt_char(self, prompt: str) -> str:
        """Ask until the answer has a non-blank character; return the first one."""
        while True:
            answer = self.read(prompt).strip()
            if answer:
                return answer[0]

    def prompt_positive(self, prompt: str) -> int:
        """Ask until the answer is a positive integer."""
        while True:
            value = self.prompt_int(prompt)
            if value > 0:
                return value

    def prompt_in_range(self, prompt: str, upper: int) -> int:
        """Ask until 0 <= value < upper."""
        while True:
            value = self.prompt_int(prompt)
            if 0 <= value < upper:
                return value


# ============================================================================
# Sessions
# ============================================================================

def ask_config(console: Console) -> BoardConfig:
    """Ask for width, height and the percentage of impassable tiles."""
    width = console.prompt_positive("Please enter width: ")
    height = console.prompt_positive("Please enter height: ")

    while True:
        percent = console.prompt_int("Please enter percent impassable: ")
        if not 0 <= percent <= MAX_PERCENT:
            continue
        if percent > WARN_PERCENT:
            verify = console.prompt_char(
                f"Warning! Values greater than {WARN_PERCENT}% could cause "
                "poor results!\nPlease enter uppercase Y to confirm: "
            )
            if verify != "Y":
                continue
        return BoardConfig(width, height, percent)


def run_flood_fill(
    console: Console, terrain: Grid[Tile], show_progress: bool = True
) -> Grid[Tile]:
    """
    Ask for a start tile and marker, then flood fill terrain.

    Args:
        console: Operator I/O.
        terrain: Grid to fill in place.
        show_progress: Redraw the grid after every newly filled tile.

    Returns:
        The filled terrain.
    """
    console.write(render_terrain(terrain))

    while True:
        console.write(
            "Please select a blank tile to start the fill from\n"
            "(Coordinates are 0 indexed)"
        )
        x = console.prompt_in_range("Please enter X coordinate: ", terrain.width)
        y = console.prompt_in_range("Please enter Y coordinate: ", terrain.height)
        if not terrain.get(x, y).is_solid:
            break

    marker = console.prompt_char("Please enter character to fill with: ")
    for _ in iter_flood_fill(terrain, marker, x, y):
        if show_progress:
            console.write(render_terrain(terrain) + "\n")

    console.write(render_terrain(terrain))
    return terrain


def _board_header(game: MineGame) -> str:
    return f"\nMines left: {game.mines_left}\n" + render_board(game.visible_board)


def run_minesweeper(console: Console, game: MineGame) -> GameState:
    """
    Play game to completion on the console.

    Returns:
        The terminal state, WON or LOST.
    """
    while game.is_playing:
        console.write(_board_header(game))
        x = console.prompt_int("Please enter X coord (0 indexed): ")
        y = console.prompt_int("Please enter Y coord (0 indexed): ")
        try:
            game.select_tile(x, y)
        except ContractViolation as exc:
            logger.debug("Ignored selection: %s", exc)
            continue

        console.write(_board_header(game))
        choice = console.prompt_char(
            "What do you want to do: [F]lag/unflag   [R]eveal   [C]ancel: "
        )
        if choice == "F":
            game.confirm_flag()
        elif choice == "R":
            if game.confirm_reveal().refused:
                console.write("Tile is flagged!")
        else:
            game.confirm_cancel()

    if game.is_lost:
        console.write("Game Over!\n" + render_board(game.visible_board))
    else:
        console.write("You Win!\n" + render_board(game.visible_board))
    return game.game_state


def run_interactive(
    console: Optional[Console] = None,
    rng: RandomSource = None,
    show_progress: bool = True,
) -> None:
    """Ask for a board, then either play minesweeper on it or flood fill it."""
    console = console or Console()
    config = ask_config(console)
    layout = generate_layout(config, rng)

    choice = console.prompt_char(
        "Want to play MineSweeper with this board?\n"
        "Enter uppercase Y to play or anything else to flood fill: "
    )
    if choice == "Y":
        run_minesweeper(console, MineGame(MineBoard(layout)))
    else:
        run_flood_fill(console, terrain_from_layout(layout), show_progress)


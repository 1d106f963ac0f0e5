"""
Minesweeper game state machine.

Players pick a tile with select_tile, then commit to flagging,
revealing or cancelling. Revealing a tile with no mines around it
cascades outward across the connected zero region.
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Optional, Tuple

import numpy as np

from .board import MineBoard
from .cell import FLAGGED, HIDDEN, REVEALED_EMPTY, REVEALED_MINE, SELECTED, Cell
from .errors import GameOverError, InvalidTransitionError, OutOfBoundsError
from .grid import SURROUNDING_OFFSETS, Grid, Position


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one player action.

    Attributes:
        state: Game state after the action.
        board: Snapshot of the visible board for rendering.
        num_flagged: Flags on the board after the action.
        num_unrevealed: Tiles still unrevealed after the action.
        revealed: Safe tiles newly revealed by the action.
        refused: True when a reveal was refused because the tile is flagged.
    """

    state: GameState
    board: Grid[Cell]
    num_flagged: int
    num_unrevealed: int
    revealed: int = 0
    refused: bool = False


# ============================================================================
# Cascade Reveal
# ============================================================================

def flood_reveal(board: MineBoard, visible: Grid[Cell], x: int, y: int) -> int:
    """
    Reveal the zero region around (x, y) and its numbered border.

    Breadth-first over all eight neighbours. Zero tiles are revealed
    and expanded; numbered tiles are revealed but not expanded. Only
    HIDDEN tiles are touched, so flags stop the cascade.

    Args:
        board: Mine layout and adjacency counts.
        visible: Player-visible board, mutated in place.
        x: Start column; must be hidden with no adjacent mines.
        y: Start row.

    Returns:
        Number of tiles revealed, including the start.
    """
    if not visible.get(x, y).is_hidden or board.is_mine(x, y) \
            or board.adjacent_mines(x, y) != 0:
        raise InvalidTransitionError(
            f"Cascade must start on a hidden zero tile, not ({x}, {y})"
        )

    queue: Deque[Position] = deque()
    visible.set(x, y, REVEALED_EMPTY)
    revealed = 1
    queue.append((x, y))

    while queue:
        cx, cy = queue.popleft()
        for nx, ny in visible.neighbors(cx, cy, SURROUNDING_OFFSETS):
            if not visible.get(nx, ny).is_hidden or board.is_mine(nx, ny):
                continue
            revealed += 1
            count = board.adjacent_mines(nx, ny)
            visible.set(nx, ny, Cell.revealed(count))
            if count == 0:
                queue.append((nx, ny))

    logger.debug("Cascade from (%d, %d) revealed %d tiles", x, y, revealed)
    return revealed


# ============================================================================
# MineGame Class
# ============================================================================

class MineGame:
    """
    One game of minesweeper over a fixed MineBoard.

    Every action returns a TurnResult. Invalid actions raise a
    ContractViolation and leave the game unchanged.
    """

    def __init__(self, board: MineBoard) -> None:
        """
        Start a game with every tile hidden.

        Args:
            board: Mine layout for this game.
        """
        self.board = board
        self._visible: Grid[Cell] = Grid(board.width, board.height, HIDDEN)
        self._game_state = GameState.PLAYING
        self._num_flagged = 0
        self._num_unrevealed = board.total_tiles
        self._selected: Optional[Position] = None
        self._prior: Cell = HIDDEN

    # ========================================================================
    # Game Actions
    # ========================================================================

    def select_tile(self, x: int, y: int) -> TurnResult:
        """
        Mark a hidden or flagged tile as pending confirmation.

        Raises:
            OutOfBoundsError: If (x, y) is outside the board.
            InvalidTransitionError: If the tile is revealed or another
                tile is already selected.
            GameOverError: If the game has ended.
        """
        self._require_playing()
        if not self._visible.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        if self._selected is not None:
            raise InvalidTransitionError(
                f"Tile {self._selected} is already selected"
            )
        cell = self._visible.get(x, y)
        if not cell.is_selectable:
            raise InvalidTransitionError(f"Tile ({x}, {y}) cannot be selected")

        self._prior = cell
        self._selected = (x, y)
        self._visible.set(x, y, SELECTED)
        return self._result()

    def confirm_flag(self) -> TurnResult:
        """Toggle the flag on the selected tile."""
        x, y = self._take_selection()
        if self._prior.is_flagged:
            self._visible.set(x, y, HIDDEN)
            self._num_flagged -= 1
        else:
            self._visible.set(x, y, FLAGGED)
            self._num_flagged += 1
        return self._result()

    def confirm_reveal(self) -> TurnResult:
        """
        Reveal the selected tile.

        A flagged tile is put back unchanged and the result is marked
        refused. A mine loses the game; a zero tile cascades.
        """
        x, y = self._take_selection()
        if self._prior.is_flagged:
            return self._result(refused=True)

        if self.board.is_mine(x, y):
            self._reveal_all_mines()
            self._game_state = GameState.LOST
            logger.debug("Mine hit at (%d, %d)", x, y)
            return self._result()

        count = self.board.adjacent_mines(x, y)
        if count == 0:
            revealed = flood_reveal(self.board, self._visible, x, y)
        else:
            self._visible.set(x, y, Cell.revealed(count))
            revealed = 1
        self._num_unrevealed -= revealed

        self._check_win_condition()
        return self._result(revealed=revealed)

    def confirm_cancel(self) -> TurnResult:
        """Put the selected tile back the way it was."""
        self._take_selection()
        return self._result()

    # ========================================================================
    # Transition Helpers (Low-level)
    # ========================================================================

    def _require_playing(self) -> None:
        if self._game_state != GameState.PLAYING:
            raise GameOverError(f"Game is over ({self._game_state.name})")

    def _take_selection(self) -> Position:
        """Clear the selection, restoring the tile's prior state."""
        self._require_playing()
        if self._selected is None:
            raise InvalidTransitionError("No tile is selected")
        x, y = self._selected
        self._selected = None
        self._visible.set(x, y, self._prior)
        return x, y

    def _reveal_all_mines(self) -> None:
        for x, y in self.board.mine_positions():
            self._visible.set(x, y, REVEALED_MINE)

    def _check_win_condition(self) -> None:
        """Win once only mines remain unrevealed."""
        if self._num_unrevealed == self.board.num_mines:
            self._reveal_all_mines()
            self._game_state = GameState.WON
            logger.debug("Game won with %d flags placed", self._num_flagged)

    def _result(self, revealed: int = 0, refused: bool = False) -> TurnResult:
        return TurnResult(
            state=self._game_state,
            board=self.visible_board,
            num_flagged=self._num_flagged,
            num_unrevealed=self._num_unrevealed,
            revealed=revealed,
            refused=refused,
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.board.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.board.height

    @property
    def num_mines(self) -> int:
        """Number of mines in the layout."""
        return self.board.num_mines

    @property
    def num_flagged(self) -> int:
        """Flags currently on the board."""
        return self._num_flagged

    @property
    def num_unrevealed(self) -> int:
        """Tiles not yet revealed, mines included."""
        return self._num_unrevealed

    @property
    def mines_left(self) -> int:
        """Mines minus flags, as shown to the player."""
        return self.board.num_mines - self._num_flagged

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        """Position awaiting confirmation, if any."""
        return self._selected

    @property
    def visible_board(self) -> Grid[Cell]:
        """Snapshot of the player-visible board."""
        return self._visible.copy()

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the visible cell at (x, y)."""
        return self._visible.get(x, y)

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array for agents.

        Returns:
            (height, width) int8 array of Cell.to_observation values.
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y in self._visible.positions():
            obs[y, x] = self._visible.get(x, y).to_observation()
        return obs

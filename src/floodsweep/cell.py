"""
Cell module for the minesweeper board.

Represents what the player sees at one position: hidden, flagged,
selected for confirmation, or revealed.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    SELECTED = auto()
    REVEALED_EMPTY = auto()
    REVEALED_COUNT = auto()
    REVEALED_MINE = auto()


REVEALED_STATES = frozenset(
    {CellState.REVEALED_EMPTY, CellState.REVEALED_COUNT, CellState.REVEALED_MINE}
)

# Observation values for states that carry no count
_OBSERVATION = {
    CellState.HIDDEN: -1,
    CellState.FLAGGED: -2,
    CellState.SELECTED: -3,
    CellState.REVEALED_EMPTY: 0,
    CellState.REVEALED_MINE: 9,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Player-visible state of a single position.

    Attributes:
        state: Current visual state.
        adjacent_mines: Count shown by a REVEALED_COUNT cell (1-8).
    """

    state: CellState = CellState.HIDDEN
    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        """Validate the count against the state."""
        if self.state == CellState.REVEALED_COUNT:
            if not 1 <= self.adjacent_mines <= 8:
                raise ValueError("Revealed count must be between 1 and 8")
        elif self.adjacent_mines != 0:
            raise ValueError("Only revealed counts carry a number")

    @classmethod
    def revealed(cls, adjacent_mines: int) -> "Cell":
        """Create the revealed cell for a safe tile with this many mines around it."""
        if adjacent_mines == 0:
            return REVEALED_EMPTY
        return cls(CellState.REVEALED_COUNT, adjacent_mines)

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_selected(self) -> bool:
        """Check if cell is awaiting confirmation."""
        return self.state == CellState.SELECTED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed (safe or mine)."""
        return self.state in REVEALED_STATES

    @property
    def is_selectable(self) -> bool:
        """Check if cell may move to SELECTED."""
        return self.state in (CellState.HIDDEN, CellState.FLAGGED)

    def to_observation(self) -> int:
        """
        Convert cell to an observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Selected cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.REVEALED_COUNT:
            return self.adjacent_mines
        return _OBSERVATION[self.state]


HIDDEN = Cell()
FLAGGED = Cell(CellState.FLAGGED)
SELECTED = Cell(CellState.SELECTED)
REVEALED_EMPTY = Cell(CellState.REVEALED_EMPTY)
REVEALED_MINE = Cell(CellState.REVEALED_MINE)

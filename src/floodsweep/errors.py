"""
Exceptions raised by the floodsweep core.

Every rejection of a caller's request derives from ContractViolation,
so an interactive shell can catch one type around operator input.
"""


class ContractViolation(ValueError):
    """A request broke a precondition of the grid or the game."""


class OutOfBoundsError(ContractViolation, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Position ({x}, {y}) is outside a {width}x{height} grid"
        )
        self.x = x
        self.y = y


class SolidTileError(ContractViolation):
    """A flood fill was started on an impassable tile."""


class InvalidTransitionError(ContractViolation):
    """A tile or the game cannot move to the requested state."""


class GameOverError(InvalidTransitionError):
    """A mutating action was attempted after the game was won or lost."""

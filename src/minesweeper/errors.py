"""
Error types for the Minesweeper board model.

All errors are recoverable and raised to the caller; the board is left
unchanged whenever one of them is raised.
"""


class MinesweeperError(Exception):
    """Base class for every error raised by the board model."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count are not usable."""


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y


class InvalidTransition(MinesweeperError):
    """The command is not allowed in the current cell or board state."""

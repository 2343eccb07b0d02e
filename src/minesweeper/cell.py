"""
Cell module for Minesweeper.

A cell has contents (mine or neighbor count), fixed once the board
places its mines, and a visibility that changes as the player reveals
and flags.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidTransition


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Classes
# ============================================================================

@dataclass(frozen=True)
class CellContents:
    """What lies under a cell."""

    is_mine: bool = False
    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_mines <= 8:
            raise ValueError(
                f"adjacent_mines must be between 0 and 8, got {self.adjacent_mines}"
            )


EMPTY = CellContents()


@dataclass
class Cell:
    """
    One square of the grid.

    Contents start out unplaced (read as an empty non-mine) and are set
    exactly once through place(). Visibility moves HIDDEN -> REVEALED
    for good, or between HIDDEN and FLAGGED.
    """

    contents: Optional[CellContents] = None
    state: CellState = CellState.HIDDEN

    def place(self, is_mine: bool, adjacent_mines: int = 0) -> None:
        """
        Fix the contents of this cell.

        Raises:
            InvalidTransition: Contents were already placed.
        """
        if self.contents is not None:
            raise InvalidTransition("Cell contents are already placed")
        self.contents = CellContents(is_mine, 0 if is_mine else adjacent_mines)

    @property
    def is_placed(self) -> bool:
        return self.contents is not None

    @property
    def is_mine(self) -> bool:
        return (self.contents or EMPTY).is_mine

    @property
    def adjacent_mines(self) -> int:
        return (self.contents or EMPTY).adjacent_mines

    def reveal(self) -> bool:
        """Uncover a hidden cell; False if it is flagged or already open."""
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """Flip HIDDEN and FLAGGED; False for a revealed cell."""
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def hide(self) -> None:
        """Cover the cell again, keeping its contents."""
        self.state = CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the cell for a numpy board snapshot.

        Returns:
            -1 while hidden, -2 while flagged, the neighbor count once
            safely revealed, 9 for a revealed mine.
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines

    def view(self, game_over: bool) -> "CellView":
        """Build the read-only view handed to renderers."""
        show_count = self.is_revealed and not self.is_mine
        return CellView(
            state=self.state,
            adjacent_mines=self.adjacent_mines if show_count else None,
            is_mine=self.is_mine if game_over else None,
        )


@dataclass(frozen=True)
class CellView:
    """
    What a renderer may know about a cell.

    Attributes:
        state: Current visual state.
        adjacent_mines: Neighbor mine count, only once safely revealed.
        is_mine: Mine flag, only once the game is over.
    """

    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None

"""
Board module for Minesweeper.

Implements the game board with mine placement, cell revealing,
flagging and game state management. Coordinates are (x, y) where x is
the column and y the row; the grid is stored row-major.
"""
import random
from collections import deque
from dataclasses import InitVar, dataclass, field, replace
from enum import Enum, auto
from numbers import Integral
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

import numpy as np

from .cell import Cell, CellView
from .errors import InvalidConfiguration, InvalidTransition, OutOfBounds

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """Won and lost boards accept no further commands."""
        return self in (GameState.WON, GameState.LOST)


class Action(Enum):
    """Commands a player can issue against a cell."""

    REVEAL = auto()
    FLAG = auto()
    CHORD = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        safe_first_click: Defer mine placement until the first reveal and
            keep the revealed cell and its neighbors mine-free.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    safe_first_click: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidConfiguration("Number of mines must be positive")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def area(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    @classmethod
    def for_difficulty(
        cls, difficulty: Union[str, "Difficulty"]
    ) -> "BoardConfig":
        """
        Look up a preset configuration.

        Args:
            difficulty: A Difficulty or its name ("beginner", ...).

        Returns:
            A fresh copy of the preset.
        """
        if not isinstance(difficulty, Difficulty):
            try:
                difficulty = Difficulty(str(difficulty).lower())
            except ValueError:
                raise InvalidConfiguration(
                    f"Unknown difficulty: {difficulty}"
                ) from None
        return difficulty.config()


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


class Difficulty(Enum):
    """Named difficulty levels."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"

    def config(self) -> BoardConfig:
        """Return a copy of the preset for this level."""
        return replace(_PRESETS[self])


_PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
}


@dataclass(frozen=True)
class BoardStatus:
    """Summary of a board, as shown next to the grid."""

    state: GameState
    revealed_count: int
    flagged_count: int
    remaining_mine_estimate: int


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Commands either apply completely or raise
    a MinesweeperError without touching the board.

    Attributes:
        config: Dimensions, mine count and placement policy.
        seed: Seed for the board's own random generator.
        rng: Generator to draw mine positions from; built from seed if
            not given.
        mines: Fixed (x, y) mine layout; must hold config.num_mines
            positions. Random placement is used when omitted.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    seed: Optional[int] = None
    rng: Optional[random.Random] = field(default=None, repr=False)
    mines: InitVar[Optional[Iterable[Position]]] = None
    _grid: List[List[Cell]] = field(init=False, default_factory=list, repr=False)
    _game_state: GameState = field(init=False, default=GameState.NOT_STARTED)
    _mines_placed: bool = field(init=False, default=False)
    _fixed_mines: Optional[FrozenSet[Position]] = field(
        init=False, default=None, repr=False
    )
    _safe_revealed: int = field(init=False, default=0)

    def __post_init__(self, mines: Optional[Iterable[Position]]) -> None:
        """Initialize the generator and grid after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random(self.seed)
        if mines is not None:
            self._fixed_mines = self._validate_layout(mines)
        self._init_grid()

    def _validate_layout(self, mines: Iterable[Position]) -> FrozenSet[Position]:
        """Check a fixed layout against the configuration."""
        positions = frozenset(mines)
        for x, y in positions:
            if not self._is_valid_position(x, y):
                raise InvalidConfiguration(
                    f"Mine ({x}, {y}) is outside the "
                    f"{self.config.width}x{self.config.height} board"
                )
        if len(positions) != self.config.num_mines:
            raise InvalidConfiguration(
                f"Layout has {len(positions)} mines, "
                f"configuration expects {self.config.num_mines}"
            )
        return positions

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        mine_count: int,
        seed: Optional[int] = None,
    ) -> "Board":
        """Create a board with deferred (first-click safe) placement."""
        return cls(BoardConfig(width, height, mine_count), seed=seed)

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Create a board with an explicit mine layout.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (x, y) positions of every mine.

        Returns:
            Board with mines already placed.
        """
        positions = frozenset((int(x), int(y)) for x, y in mines)
        config = BoardConfig(width, height, len(positions), safe_first_click=False)
        return cls(config, mines=positions)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells and place mines if not deferred."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]
        self._game_state = GameState.NOT_STARTED
        self._mines_placed = False
        self._safe_revealed = 0

        if self._fixed_mines is not None:
            self._set_mines(self._fixed_mines)
        elif not self.config.safe_first_click:
            self._place_mines(set())

    def _place_mines(self, exclude: Set[Position]) -> None:
        """
        Place mines randomly, excluding some cells.

        Args:
            exclude: (x, y) positions to keep mine-free.
        """
        positions = self._get_valid_mine_positions(exclude)
        self._set_mines(self.rng.sample(positions, self.config.num_mines))

    def _get_valid_mine_positions(self, exclude: Set[Position]) -> List[Position]:
        """Get all valid positions for mine placement."""
        positions = []
        for y in range(self.config.height):
            for x in range(self.config.width):
                if (x, y) not in exclude:
                    positions.append((x, y))
        return positions

    def _first_click_exclusion(self, x: int, y: int) -> Set[Position]:
        """Cells kept clear of mines for a first reveal at (x, y)."""
        zone = {(x, y)}
        zone.update(self._get_neighbors(x, y))
        if self.config.area - len(zone) >= self.config.num_mines:
            return zone
        return {(x, y)}

    def _set_mines(self, positions: Iterable[Position]) -> None:
        """Fix every cell's contents from the chosen mine positions."""
        mines = set(positions)
        for y in range(self.config.height):
            for x in range(self.config.width):
                is_mine = (x, y) in mines
                adjacent = 0 if is_mine else self._count_adjacent_mines(mines, x, y)
                self._grid[y][x].place(is_mine, adjacent)
        self._mines_placed = True

    def _count_adjacent_mines(self, mines: Set[Position], x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(1 for neighbor in self._get_neighbors(x, y) if neighbor in mines)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for neighbors inside the board.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _require_position(self, x: int, y: int) -> Cell:
        """Return the cell at (x, y) or raise OutOfBounds."""
        integral = isinstance(x, Integral) and isinstance(y, Integral)
        if not integral or not self._is_valid_position(x, y):
            raise OutOfBounds(x, y, self.config.width, self.config.height)
        return self._grid[y][x]

    def _require_active(self) -> None:
        if self._game_state.is_terminal:
            raise InvalidTransition(
                f"Game is over ({self._game_state.name.lower()})"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> List[Position]:
        """
        Reveal a cell at the given position.

        With deferred placement the first reveal places the mines, keeping
        this cell (and its neighbors when there is room) mine-free. An
        empty cell (0 adjacent mines) flood-fills its region; a mine loses
        the game.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            Positions revealed by this command, starting with (x, y).

        Raises:
            OutOfBounds: Position is off the board.
            InvalidTransition: Game over, or cell revealed or flagged.
        """
        cell = self._require_position(x, y)
        self._require_active()
        if cell.is_revealed:
            raise InvalidTransition(f"({x}, {y}) is already revealed")
        if cell.is_flagged:
            raise InvalidTransition(f"({x}, {y}) is flagged")

        if not self._mines_placed:
            self._place_mines(self._first_click_exclusion(x, y))
        self._game_state = GameState.IN_PROGRESS

        if cell.is_mine:
            cell.reveal()
            self._lose()
            return [(x, y)]

        revealed = self._flood_reveal(x, y)
        self._check_win_condition()
        return revealed

    def _flood_reveal(self, x: int, y: int) -> List[Position]:
        """
        Reveal a hidden safe cell and, if empty, its connected region.

        Uses an explicit queue; each cell is revealed at most once and
        flagged cells are skipped.
        """
        self._grid[y][x].reveal()
        self._safe_revealed += 1
        revealed = [(x, y)]
        queue = deque(revealed)

        while queue:
            current_x, current_y = queue.popleft()
            if self._grid[current_y][current_x].adjacent_mines != 0:
                continue
            for neighbor_x, neighbor_y in self._get_neighbors(current_x, current_y):
                if not self._grid[neighbor_y][neighbor_x].reveal():
                    continue
                self._safe_revealed += 1
                revealed.append((neighbor_x, neighbor_y))
                queue.append((neighbor_x, neighbor_y))

        return revealed

    def _lose(self) -> None:
        """End the game and uncover the remaining hidden mines."""
        self._game_state = GameState.LOST
        for row in self._grid:
            for cell in row:
                if cell.is_mine and cell.is_hidden:
                    cell.reveal()

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        non_mine_cells = self.config.area - self.config.num_mines
        if self._safe_revealed < non_mine_cells:
            return
        self._game_state = GameState.WON
        for row in self._grid:
            for cell in row:
                if cell.is_mine and cell.is_hidden:
                    cell.toggle_flag()

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            x: Column.
            y: Row.

        Returns:
            True if the cell is now flagged, False if now hidden.

        Raises:
            OutOfBounds: Position is off the board.
            InvalidTransition: Game over or cell already revealed.
        """
        cell = self._require_position(x, y)
        self._require_active()
        if not cell.toggle_flag():
            raise InvalidTransition(f"({x}, {y}) is revealed and cannot be flagged")
        return cell.is_flagged

    def chord(self, x: int, y: int) -> List[Position]:
        """
        Chord action: reveal all unflagged neighbors if flag count matches.

        A misplaced flag means a mine gets revealed and the game is lost.

        Args:
            x: Column of a revealed numbered cell.
            y: Row of a revealed numbered cell.

        Returns:
            Positions revealed; empty if the flag count does not match.
        """
        cell = self._require_position(x, y)
        self._require_active()
        if not cell.is_revealed:
            raise InvalidTransition(f"({x}, {y}) is not revealed")
        if self._count_adjacent_flags(x, y) != cell.adjacent_mines:
            return []

        revealed: List[Position] = []
        exploded = False
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            neighbor = self._grid[neighbor_y][neighbor_x]
            if not neighbor.is_hidden:
                continue
            if neighbor.is_mine:
                neighbor.reveal()
                exploded = True
                revealed.append((neighbor_x, neighbor_y))
            else:
                revealed.extend(self._flood_reveal(neighbor_x, neighbor_y))

        if exploded:
            self._lose()
        else:
            self._check_win_condition()
        return revealed

    def _count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_flagged:
                count += 1
        return count

    def play(self, x: int, y: int, action: Action) -> Union[List[Position], bool]:
        """Dispatch a player action to the matching command."""
        if action == Action.REVEAL:
            return self.reveal(x, y)
        if action == Action.FLAG:
            return self.toggle_flag(x, y)
        if action == Action.CHORD:
            return self.chord(x, y)
        raise ValueError(f"Unknown action: {action}")

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game has started and is not yet decided."""
        return self._game_state == GameState.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        """Check if game was won or lost."""
        return self._game_state.is_terminal

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mines_placed(self) -> bool:
        """Check if the mine layout has been decided."""
        return self._mines_placed

    def status(self) -> BoardStatus:
        """Summarize the board without changing it."""
        revealed = 0
        flagged = 0
        for row in self._grid:
            for cell in row:
                if cell.is_revealed:
                    revealed += 1
                elif cell.is_flagged:
                    flagged += 1
        return BoardStatus(
            state=self._game_state,
            revealed_count=revealed,
            flagged_count=flagged,
            remaining_mine_estimate=self.config.num_mines - flagged,
        )

    def cell_view(self, x: int, y: int) -> CellView:
        """Get what a renderer may show for the cell at (x, y)."""
        return self._require_position(x, y).view(self.is_over)

    def inspect_cell(self, x: int, y: int) -> Cell:
        """Get a detached copy of the cell at (x, y), mine included."""
        return replace(self._require_position(x, y))

    def mine_positions(self) -> FrozenSet[Position]:
        """Get the (x, y) positions of all placed mines."""
        return frozenset(
            (x, y)
            for y in range(self.config.height)
            for x in range(self.config.width)
            if self._grid[y][x].is_mine
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy snapshot indexed [y, x].

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for y in range(self.config.height):
            for x in range(self.config.width):
                obs[y, x] = self._grid[y][x].to_observation()
        return obs

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()

    def restart(self) -> None:
        """
        Replay the current game: same mines, every cell covered again.

        Flags and reveals are cleared and the game returns to
        NOT_STARTED. A board whose mines are not yet placed is simply
        cleared.
        """
        for row in self._grid:
            for cell in row:
                cell.hide()
        self._game_state = GameState.NOT_STARTED
        self._safe_revealed = 0

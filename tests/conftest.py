"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines and a fixed seed."""
    return Board(seed=1234)


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with its only mine in the middle."""
    return Board.from_mines(3, 3, [(1, 1)])


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with its only mine in the bottom-right corner."""
    return Board.from_mines(3, 3, [(2, 2)])


@pytest.fixture
def open_board() -> Board:
    """5x5 board with one corner mine, so most of it floods open."""
    return Board.from_mines(5, 5, [(4, 4)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    cell = Cell()
    cell.place(is_mine=True)
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)

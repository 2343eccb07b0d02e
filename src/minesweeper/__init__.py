"""
Minesweeper board model.

Provides core game logic including board management, cell state and
a text front end.
"""
from .cell import Cell, CellContents, CellState, CellView
from .board import (
    Action,
    Board,
    BoardConfig,
    BoardStatus,
    Difficulty,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .errors import InvalidConfiguration, InvalidTransition, MinesweeperError, OutOfBounds
from .render import render_status, render_text

__all__ = [
    "Cell",
    "CellContents",
    "CellState",
    "CellView",
    "Action",
    "Board",
    "BoardConfig",
    "BoardStatus",
    "Difficulty",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperError",
    "InvalidConfiguration",
    "OutOfBounds",
    "InvalidTransition",
    "render_text",
    "render_status",
]

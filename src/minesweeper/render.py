"""
Text rendering for Minesweeper boards.
"""
from typing import Optional

from .board import Board


_SYMBOLS = {-1: ".", -2: "F", 9: "*", 0: " "}


def render_text(board: Board) -> str:
    """
    Render board as a text grid with column and row headings.

    Hidden cells are ".", flags "F", revealed mines "*", empty cells
    blank and numbered cells their count.
    """
    obs = board.get_observation()
    label_width = len(str(board.height - 1))
    cell_width = len(str(board.width - 1))

    header = " " * label_width + " " + " ".join(
        str(x).rjust(cell_width) for x in range(board.width)
    )
    lines = [header]
    for y in range(board.height):
        row_str = str(y).rjust(label_width) + " "
        row_str += " ".join(
            _SYMBOLS.get(int(val), str(val)).rjust(cell_width)
            for val in obs[y]
        )
        lines.append(row_str.rstrip())

    return "\n".join(lines)


def render_status(board: Board, elapsed: Optional[float] = None) -> str:
    """One-line summary of the board status, with game time if known."""
    status = board.status()
    line = (
        f"{status.state.name.replace('_', ' ').title()} | "
        f"Mines left: {status.remaining_mine_estimate} | "
        f"Revealed: {status.revealed_count}"
    )
    if elapsed is not None:
        line += f" | Time: {elapsed:.2f}s"
    return line

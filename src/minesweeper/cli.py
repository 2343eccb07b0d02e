"""
Play Minesweeper in the terminal.

Usage:
    minesweeper [--difficulty {beginner,intermediate,expert}]
    minesweeper --width 8 --height 8 --mines 10 [--seed N]

Commands at the prompt (x is the column, y the row):
    r x y   reveal a cell
    f x y   toggle a flag
    c x y   chord around a numbered cell
    q       quit
"""
import argparse
import time
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from .board import Action, Board, BoardConfig, Difficulty, GameState
from .errors import MinesweeperError
from .render import render_status, render_text


COMMANDS = {
    "r": Action.REVEAL,
    "reveal": Action.REVEAL,
    "f": Action.FLAG,
    "flag": Action.FLAG,
    "c": Action.CHORD,
    "chord": Action.CHORD,
}

QUIT_COMMANDS = ("q", "quit", "exit")

HELP_TEXT = "Commands: r x y (reveal), f x y (flag), c x y (chord), q (quit)"


def parse_command(line: str) -> Optional[Tuple[Action, int, int]]:
    """
    Parse one prompt line.

    Returns:
        (action, x, y), or None for a quit command.

    Raises:
        ValueError: The line is not a recognised command.
    """
    parts = line.strip().lower().split()
    if not parts:
        raise ValueError("Empty command")
    if parts[0] in QUIT_COMMANDS:
        return None
    if parts[0] not in COMMANDS or len(parts) != 3:
        raise ValueError(f"Unrecognised command: {line.strip()!r}")
    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError:
        raise ValueError(f"Coordinates must be integers: {line.strip()!r}") from None
    return COMMANDS[parts[0]], x, y


def play(
    board: Board,
    lines: Iterable[str],
    output: Callable[[str], None] = print,
    clock: Callable[[], float] = time.monotonic,
) -> Board:
    """
    Run the game loop over input lines until the game ends.

    The game clock starts with the move that starts the game.

    Args:
        board: Board to play on.
        lines: Source of commands, e.g. an iterator over stdin.
        output: Where to write the board and messages.
        clock: Source of seconds for the game timer.

    Returns:
        The board in its final state.
    """
    output(render_text(board))
    output(render_status(board))
    started: Optional[float] = None

    for line in lines:
        if not line.strip():
            continue
        try:
            command = parse_command(line)
        except ValueError as exc:
            output(str(exc))
            continue
        if command is None:
            output("Bye.")
            break

        action, x, y = command
        move_time = clock() if started is None else started
        try:
            board.play(x, y, action)
        except MinesweeperError as exc:
            output(f"Ignored: {exc}")
            continue
        if started is None and board.game_state != GameState.NOT_STARTED:
            started = move_time

        elapsed = None if started is None else clock() - started
        output(render_text(board))
        output(render_status(board, elapsed))

        if board.is_won:
            output("*** WIN! ***")
            break
        if board.is_lost:
            output("*** LOST (hit mine) ***")
            break

    return board


def _prompt_lines() -> Iterable[str]:
    """Yield lines typed at the prompt until end of input."""
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Turn parsed arguments into a board configuration."""
    config = BoardConfig.for_difficulty(args.difficulty)
    if args.width is not None or args.height is not None or args.mines is not None:
        config = BoardConfig(
            width=args.width if args.width is not None else config.width,
            height=args.height if args.height is not None else config.height,
            num_mines=args.mines if args.mines is not None else config.num_mines,
        )
    return replace(config, safe_first_click=not args.no_safe_first_click)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description="Minesweeper - play in the terminal")
    parser.add_argument(
        "--difficulty",
        choices=[level.value for level in Difficulty],
        default=Difficulty.BEGINNER.value,
        help="Preset board size and mine count",
    )
    parser.add_argument("--width", type=int, default=None, help="Number of columns")
    parser.add_argument("--height", type=int, default=None, help="Number of rows")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Seed for mine placement")
    parser.add_argument(
        "--no-safe-first-click",
        action="store_true",
        help="Place mines before the first reveal",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run a game."""
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
    except MinesweeperError as exc:
        print(f"Invalid board: {exc}")
        return 2

    board = Board(config, seed=args.seed)
    print(f"Board: {config.width}x{config.height} with {config.num_mines} mines")
    print(HELP_TEXT)
    play(board, _prompt_lines())
    return 0 if board.is_won else 1


if __name__ == "__main__":
    raise SystemExit(main())

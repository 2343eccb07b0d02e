"""
Unit tests for the terminal front end.
"""
import builtins
import itertools

import pytest
from minesweeper import Action, Board
from minesweeper.cli import build_config, build_parser, main, parse_command, play


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test prompt line parsing."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("r 1 2", (Action.REVEAL, 1, 2)),
            ("  F 0 3 ", (Action.FLAG, 0, 3)),
            ("chord 4 4", (Action.CHORD, 4, 4)),
        ],
    )
    def test_valid_commands(self, line: str, expected) -> None:
        assert parse_command(line) == expected

    @pytest.mark.parametrize("line", ["q", "quit", "EXIT"])
    def test_quit_commands(self, line: str) -> None:
        assert parse_command(line) is None

    @pytest.mark.parametrize("line", ["", "x 1 2", "r 1", "r 1 2 3"])
    def test_unrecognised_commands_raise(self, line: str) -> None:
        with pytest.raises(ValueError):
            parse_command(line)

    def test_non_integer_coordinates_raise(self) -> None:
        with pytest.raises(ValueError, match="integers"):
            parse_command("r a b")


# ============================================================================
# Game Loop Tests
# ============================================================================

class TestPlay:
    """Test the game loop against scripted input."""

    def test_winning_game(self, corner_mine_board: Board) -> None:
        output = []
        board = play(corner_mine_board, ["bogus", "", "r 0 0"], output.append)

        assert board.is_won is True
        assert any("Unrecognised command" in line for line in output)
        assert output[-1] == "*** WIN! ***"

    def test_losing_game_stops_reading(self, center_mine_board: Board) -> None:
        output = []
        lines = iter(["r 1 1", "r 0 0"])
        play(center_mine_board, lines, output.append)

        assert center_mine_board.is_lost is True
        assert output[-1] == "*** LOST (hit mine) ***"
        assert next(lines) == "r 0 0"

    def test_errors_are_reported_and_loop_continues(
        self, center_mine_board: Board
    ) -> None:
        output = []
        play(center_mine_board, ["r 5 5", "r 0 0", "f 0 0", "q"], output.append)

        ignored = [line for line in output if line.startswith("Ignored:")]
        assert len(ignored) == 2
        assert output[-1] == "Bye."
        assert center_mine_board.is_playing is True

    def test_clock_starts_with_first_reveal(self, corner_mine_board: Board) -> None:
        output = []
        clock = itertools.count(100.0, 2.5).__next__
        play(corner_mine_board, ["f 2 2", "f 2 2", "r 0 0"], output.append, clock)

        statuses = [line for line in output if line.startswith(("Not Started", "Won"))]
        assert all("Time:" not in line for line in statuses[:-1])
        assert statuses[-1] == "Won | Mines left: 0 | Revealed: 8 | Time: 2.50s"


# ============================================================================
# Entry Point Tests
# ============================================================================

class TestMain:
    """Test argument handling."""

    def test_custom_size_overrides_preset(self) -> None:
        args = build_parser().parse_args(["--difficulty", "expert", "--mines", "50"])
        config = build_config(args)
        assert (config.width, config.height, config.num_mines) == (30, 16, 50)
        assert config.safe_first_click is True

    def test_eager_placement_flag(self) -> None:
        args = build_parser().parse_args(["--no-safe-first-click"])
        assert build_config(args).safe_first_click is False

    def test_invalid_board_returns_error_code(self, capsys) -> None:
        code = main(["--width", "1", "--height", "1", "--mines", "0"])
        assert code == 2
        assert "Invalid board" in capsys.readouterr().out

    def test_end_of_input_ends_game(self, monkeypatch, capsys) -> None:
        def no_input(prompt: str = "") -> str:
            raise EOFError

        monkeypatch.setattr(builtins, "input", no_input)
        assert main(["--seed", "1"]) == 1
        assert "Board: 9x9 with 10 mines" in capsys.readouterr().out

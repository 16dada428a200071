"""Tests for the console command processor."""

import io

import pytest

from squares.game.rules import SquaresGame
from squares.interfaces.cli import HELP_TEXT, CommandProcessor, SimpleCLI
from squares.utils import Color


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def processor(out):
    return CommandProcessor(SquaresGame(seed=5), out=out)


def lines(out: io.StringIO):
    """Captured output with trailing whitespace removed from every line."""
    return [line.rstrip() for line in out.getvalue().splitlines()]


def reset(out: io.StringIO):
    out.seek(0)
    out.truncate()


def test_start_game(processor, out):
    processor.process("GAME 3, user W, user B")
    assert processor.game.is_active()
    assert lines(out) == ["New game started"]


@pytest.mark.parametrize("command", [
    "GAME 2, user W, user B",
    "GAME 3, foo W, user B",
    "GAME 3, user W, user W",
    "GAME 3, user W",
    "GAME x, user W, user B",
    "GAME 3, user Z, user B",
    "GAME 3, user, user B",
])
def test_invalid_game_command(processor, out, command):
    processor.process(command)
    assert not processor.game.is_active()
    assert lines(out) == ["Incorrect command"]


def test_keywords_are_case_insensitive(processor, out):
    processor.process("game 3, USER w, Comp b")
    assert lines(out) == ["New game started"]
    reset(out)
    processor.process("move 0 0")
    assert lines(out)[0] == "W (0, 0)"

def test_color_words_use_first_letter(processor, out):
    processor.process("GAME 3, user White, comp Black")
    assert lines(out) == ["New game started"]
    assert processor.game.get_current_player().color == Color.WHITE
    assert processor.game.get_opponent().color == Color.BLACK


def test_move_before_start(processor, out):
    processor.process("MOVE 0, 0")
    assert lines(out) == ["Game not started"]


def test_valid_move(processor, out):
    processor.process("GAME 3, user W, user B")
    reset(out)
    processor.process("MOVE 0, 0")
    assert lines(out) == [
        "W (0, 0)",
        "Current board state:",
        "   0 1 2",
        "0 W . .",
        "1 . . .",
        "2 . . .",
    ]
    assert processor.game.board.get(0, 0) == Color.WHITE


def test_invalid_moves(processor, out):
    processor.process("GAME 3, user W, user B")
    reset(out)
    processor.process("MOVE 3, 0")
    assert lines(out) == ["Incorrect command"]

    processor.process("MOVE 0, 0")
    reset(out)
    processor.process("MOVE 0, 0")
    assert lines(out) == ["Incorrect command"]

    reset(out)
    processor.process("MOVE 1")
    processor.process("MOVE a, b")
    assert lines(out) == ["Incorrect command", "Incorrect command"]


def test_win_output(processor, out):
    processor.process("GAME 3, user W, user B")
    reset(out)
    for move in ["0, 0", "2, 2", "0, 1", "2, 1", "1, 0", "2, 0", "1, 1"]:
        processor.process(f"MOVE {move}")

    output = lines(out)
    assert output[-2:] == [
        "Game finished. W wins!",
        "Winning square coordinates: (0,0) (0,1) (1,0) (1,1)",
    ]
    assert output[-8:-2] == [
        "W (1, 1)",
        "Current board state:",
        "   0 1 2",
        "0 W W .",
        "1 W W .",
        "2 B B B",
    ]
    assert output.count("Current board state:") == 7
    assert not processor.game.is_active()

    reset(out)
    processor.process("MOVE 2, 2")
    assert lines(out) == ["Game not started"]


def test_draw_output(processor, out):
    processor.process("GAME 3, user W, user B")
    moves = [(0, 0), (0, 1), (1, 0), (0, 2), (2, 0), (1, 1), (1, 2), (2, 1), (2, 2)]
    for row, col in moves:
        processor.process(f"MOVE {row}, {col}")
    assert lines(out)[-1] == "Game finished. Draw"
    assert not processor.game.is_active()


def test_computer_moves_first(processor, out):
    processor.process("GAME 3, comp W, user B")
    output = lines(out)
    assert output[0] == "New game started"
    assert output[1].startswith("W (")
    assert processor.game.board.count(Color.WHITE) == 1


def test_each_record_shows_its_own_board(processor, out):
    processor.process("GAME 3, user W, comp B")
    reset(out)
    processor.process("MOVE 0, 0")
    output = lines(out)
    assert output[0] == "W (0, 0)"
    # first board shows only the human stone, second one adds the reply
    assert "B" not in "".join(output[3:6])
    assert output[6].startswith("B (")
    assert "B" in "".join(output[9:12])


def test_computer_vs_computer(processor, out):
    processor.process("GAME 3, comp W, comp B")
    output = lines(out)
    assert output[0] == "New game started"
    assert any(line.startswith("Game finished") for line in output)
    assert not processor.game.is_active()


def test_help(processor, out):
    processor.process("HELP")
    assert lines(out) == HELP_TEXT.splitlines()
    assert lines(out)[0] == "Available commands:"


@pytest.mark.parametrize("command", ["", "   ", "JUMP 1, 2", None])
def test_unknown_command(processor, out, command):
    assert processor.process(command) is True
    assert lines(out) == ["Incorrect command"]


def test_exit(processor, out):
    assert processor.process("EXIT") is False
    assert processor.process("exit") is False
    assert out.getvalue() == ""


def test_simple_cli_stops_at_exit(out):
    cli = SimpleCLI(CommandProcessor(SquaresGame(), out=out))
    cli.run(["GAME 3, user W, user B\n", "EXIT\n", "HELP\n"])
    output = lines(out)
    assert output[0].startswith("Starting SquaresGame")
    assert "New game started" in output
    assert "Available commands:" not in output


def test_simple_cli_reports_eof(out):
    cli = SimpleCLI(CommandProcessor(SquaresGame(), out=out))
    cli.run(["HELP\n"])
    assert lines(out)[-1] == "Input closed. Exiting program."

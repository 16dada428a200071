"""Shared pytest fixtures for the Squares test suite."""

import pytest

from squares.debug import DebugLevel, debug
from squares.game.board import Board
from squares.game.rules import SquaresGame


def board_from_rows(*rows: str) -> Board:
    """Build a board from row strings such as 'W.B'."""
    return Board.from_data(len(rows), "".join(rows))


@pytest.fixture(autouse=True)
def quiet_debug():
    debug.configure(level=DebugLevel.WARNING, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, components=[])


@pytest.fixture
def game():
    return SquaresGame(seed=1234)


@pytest.fixture
def make_board():
    return board_from_rows

"""Tests for the Board class and the board text codec."""

import numpy as np
import pytest

from squares.exceptions import InvalidBoardDataError, InvalidSizeError, OutOfBoundsError
from squares.game.board import Board
from squares.utils import Color


@pytest.mark.parametrize("size", [-1, 0, 1, 2])
def test_rejects_small_sizes(size):
    with pytest.raises(InvalidSizeError):
        Board(size)


def test_new_board_is_empty():
    board = Board(4)
    assert board.size == 4
    assert board.grid.shape == (4, 4)
    assert board.empty_cells() == [(r, c) for r in range(4) for c in range(4)]
    assert not board.is_full()


def test_get_and_set():
    board = Board(3)
    board.set(0, 0, Color.WHITE)
    board.set(2, 1, Color.BLACK)
    assert board.get(0, 0) == Color.WHITE
    assert board.get(2, 1) == Color.BLACK
    assert board.get(1, 1) is None
    board.set(0, 0, None)
    assert board.get(0, 0) is None


def test_set_overwrites_without_checking():
    board = Board(3)
    board.set(1, 1, Color.WHITE)
    board.set(1, 1, Color.BLACK)
    assert board.get(1, 1) == Color.BLACK


@pytest.mark.parametrize("row, col", [(3, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_bounds(row, col):
    board = Board(3)
    assert not board.is_inside(row, col)
    with pytest.raises(OutOfBoundsError):
        board.get(row, col)
    with pytest.raises(OutOfBoundsError):
        board.set(row, col, Color.WHITE)


def test_is_full():
    board = Board(3)
    for row in range(3):
        for col in range(3):
            assert not board.is_full()
            board.set(row, col, Color.WHITE if (row + col) % 2 else Color.BLACK)
    assert board.is_full()


def test_cells_of_is_row_major():
    board = Board(3)
    for row, col in [(2, 0), (0, 2), (1, 1), (0, 0)]:
        board.set(row, col, Color.WHITE)
    assert board.cells_of(Color.WHITE) == [(0, 0), (0, 2), (1, 1), (2, 0)]
    assert board.cells_of(Color.BLACK) == []


def test_from_data_accepts_all_symbols():
    board = Board.from_data(3, "Ww. bB...")
    assert board.get(0, 0) == Color.WHITE
    assert board.get(0, 1) == Color.WHITE
    assert board.get(0, 2) is None
    assert board.get(1, 0) is None
    assert board.get(1, 1) == Color.BLACK
    assert board.get(1, 2) == Color.BLACK
    assert board.to_data() == "WW..BB..."


def test_from_data_rejects_bad_input():
    with pytest.raises(InvalidBoardDataError):
        Board.from_data(3, "W" * 8)
    with pytest.raises(InvalidBoardDataError):
        Board.from_data(3, "WWX......")
    with pytest.raises(InvalidSizeError):
        Board.from_data(2, "....")


def test_copy_is_independent():
    board = Board(3)
    board.set(0, 0, Color.WHITE)
    clone = board.copy()
    clone.set(1, 1, Color.BLACK)
    assert board.get(1, 1) is None
    assert clone != board
    clone.set(1, 1, None)
    assert clone == board


def test_get_state_returns_copy():
    board = Board(3)
    state = board.get_state()
    state[0, 0] = Color.WHITE.value
    assert board.get(0, 0) is None
    assert state.dtype == np.int8


def test_render_layout():
    board = Board.from_data(3, "W.......B")
    lines = [line.rstrip() for line in board.render().splitlines()]
    assert lines == [
        "Current board state:",
        "   0 1 2",
        "0 W . .",
        "1 . . .",
        "2 . . B",
    ]


def test_render_pads_row_numbers_on_large_boards():
    lines = Board(11).render().splitlines()
    assert lines[1].startswith("    0 1 2")
    assert lines[2].startswith(" 0 . ")
    assert lines[-1].startswith("10 . ")

"""
board.py - Board representation for Squares

This module implements the Board class which owns the N x N grid of cells.
It answers bounds and occupancy queries and stores colors; it knows nothing
about turns or squares.
"""

from typing import List, Optional

import numpy as np

from squares.debug import debug
from squares.exceptions import InvalidSizeError, OutOfBoundsError
from squares.utils import (EMPTY, MIN_BOARD_SIZE, Color, Coord,
                           encode_board_data, parse_board_data, render_board_ascii)


class Board:
    """
    Represents a Squares game board.

    Cells are addressed by (row, col), both in [0, size). The grid stores
    EMPTY (0) or a Color value.
    """

    def __init__(self, size: int):
        """
        Create an empty board.

        Args:
            size: Side length, must be greater than 2

        Raises:
            InvalidSizeError: If size <= 2
        """
        if not isinstance(size, (int, np.integer)) or size < MIN_BOARD_SIZE:
            raise InvalidSizeError(f"Size must be > 2, got {size!r}")
        debug.debug(f"Initializing {size}x{size} board", "board")
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @classmethod
    def from_data(cls, size: int, data: str) -> 'Board':
        """
        Build a board from its row-major text encoding.

        Raises:
            InvalidSizeError: If size <= 2
            InvalidBoardDataError: Wrong length or unknown character
        """
        board = cls(size)
        board.grid = parse_board_data(data, board.size)
        return board

    def copy(self) -> 'Board':
        new_board = Board(self.size)
        new_board.grid = self.grid.copy()
        return new_board

    def is_inside(self, row: int, col: int) -> bool:
        """Pure bounds test, never raises."""
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise OutOfBoundsError(
                f"Coordinates ({row}, {col}) out of bounds for size {self.size}")

    def get(self, row: int, col: int) -> Optional[Color]:
        """
        Get the color at a cell.

        Returns:
            The Color in the cell, or None if it is empty

        Raises:
            OutOfBoundsError: If the coordinates are outside the board
        """
        self._check_bounds(row, col)
        return Color.from_value(self.grid[row, col])

    def set(self, row: int, col: int, color: Optional[Color]) -> None:
        """
        Store a color in a cell, or clear it when color is None.

        Occupancy is not checked here; callers validate moves themselves.

        Raises:
            OutOfBoundsError: If the coordinates are outside the board
        """
        self._check_bounds(row, col)
        self.grid[row, col] = EMPTY if color is None else color.value

    def is_empty(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self.grid[row, col] == EMPTY

    def is_full(self) -> bool:
        return not np.any(self.grid == EMPTY)

    def cells_of(self, color: Color) -> List[Coord]:
        """All cells holding color, in row-major order."""
        return [(int(row), int(col)) for row, col in np.argwhere(self.grid == color.value)]

    def empty_cells(self) -> List[Coord]:
        """All empty cells, in row-major order."""
        return [(int(row), int(col)) for row, col in np.argwhere(self.grid == EMPTY)]

    def count(self, color: Optional[Color]) -> int:
        value = EMPTY if color is None else color.value
        return int(np.count_nonzero(self.grid == value))

    def get_state(self) -> np.ndarray:
        return self.grid.copy()

    def to_data(self) -> str:
        return encode_board_data(self.grid)

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        return self.render()

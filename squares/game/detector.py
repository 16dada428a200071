"""
detector.py - Square detection for Squares

A square is any four cells {A, B, C, D} with C = A + r(B - A) and
D = B + r(B - A), where r rotates a vector by 90 degrees in either direction:
r(dr, dc) = (-dc, dr) or (dc, -dr). This covers axis-aligned squares of any
size as well as tilted ones.

The detector enumerates every unordered pair of same-colored cells and tries
both rotations. Enumeration order (row-major cells, then pairs, then
(-dc, dr) before (dc, -dr)) decides which square is reported, so it must
stay stable.
"""

from itertools import combinations
from typing import Iterator, List, Optional, Sequence, Tuple

from squares.debug import debug
from squares.game.board import Board
from squares.utils import Color, Coord, Square


def _rotations(dr: int, dc: int) -> Tuple[Coord, Coord]:
    return (-dc, dr), (dc, -dr)


def iter_candidate_squares(cells: Sequence[Coord]) -> Iterator[Square]:
    """
    Yield every square that has a pair of the given cells as one side.

    Candidates may reach outside the board; callers filter with
    Board.is_inside.
    """
    for (r1, c1), (r2, c2) in combinations(cells, 2):
        dr, dc = r2 - r1, c2 - c1
        for vr, vc in _rotations(dr, dc):
            yield ((r1, c1), (r2, c2), (r1 + vr, c1 + vc), (r2 + vr, c2 + vc))


def is_square(points: Sequence[Coord]) -> bool:
    """
    Check whether four distinct points form a square of any orientation.

    Uses squared distances: a square has four equal sides and two equal
    diagonals of twice the side length.
    """
    if len(points) != 4 or len(set(points)) != 4:
        return False
    distances = sorted((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2
                       for a, b in combinations(points, 2))
    side = distances[0]
    return (side > 0 and distances[:4] == [side] * 4
            and distances[4] == distances[5] == 2 * side)


class SquareDetector:
    """Stateless square finder. Every method only reads the board."""

    def find_completed_square(self, board: Board, color: Color) -> Optional[Square]:
        """
        Find a square whose four corners are all color.

        Args:
            board: Board to inspect
            color: Color whose squares are searched

        Returns:
            The first square found as (A, B, C, D), or None
        """
        cells = board.cells_of(color)
        for square in iter_candidate_squares(cells):
            (_, _, (r3, c3), (r4, c4)) = square
            if not (board.is_inside(r3, c3) and board.is_inside(r4, c4)):
                continue
            if board.get(r3, c3) == color and board.get(r4, c4) == color:
                debug.debug(f"Completed square for {color}: {square}", "detector")
                return square
        return None

    def find_unit_one_move_win(self, board: Board, color: Color) -> Optional[Coord]:
        """
        Scan only 2x2 blocks for three corners of color and one empty corner.

        Returns:
            The empty corner of the first such block in row-major order
        """
        for row, col in self.iter_unit_origins(board):
            empty_cell = None
            empty_count = 0
            for r, c in self.unit_square(row, col):
                value = board.get(r, c)
                if value is None:
                    empty_count += 1
                    empty_cell = (r, c)
                elif value != color:
                    break
            else:
                if empty_count == 1:
                    return empty_cell
        return None

    def _find_general_one_move_win(self, board: Board, color: Color) -> Optional[Coord]:
        for square in iter_candidate_squares(board.cells_of(color)):
            empty_cell = None
            empty_count = 0
            for r, c in square:
                if not board.is_inside(r, c):
                    break
                value = board.get(r, c)
                if value is None:
                    empty_count += 1
                    empty_cell = (r, c)
                elif value != color:
                    break
            else:
                if empty_count == 1:
                    return empty_cell
        return None

    def find_one_move_win(self, board: Board, color: Color) -> Optional[Coord]:
        """
        Find an empty cell that completes a square for color.

        The general pair scan decides the answer, so the result is always
        the first one-move win in pair enumeration order. The 2x2 scan runs
        alongside it as a cross-check and only a disagreement is logged.

        Returns:
            Coordinates of the completing cell, or None
        """
        unit = self.find_unit_one_move_win(board, color)
        general = self._find_general_one_move_win(board, color)
        if unit is not None and unit != general:
            debug.debug(f"Unit scan chose {unit}, pair scan chose {general} for {color}",
                        "detector")
        return general

    @staticmethod
    def unit_square(row: int, col: int) -> List[Coord]:
        """Corners of the 2x2 block whose top-left corner is (row, col)."""
        return [(row, col), (row + 1, col), (row, col + 1), (row + 1, col + 1)]

    @staticmethod
    def iter_unit_origins(board: Board) -> Iterator[Coord]:
        for row in range(board.size - 1):
            for col in range(board.size - 1):
                yield row, col

    @staticmethod
    def unit_square_origins(board: Board, row: int, col: int) -> List[Coord]:
        """Top-left corners of every 2x2 block that contains (row, col)."""
        origins = []
        for dr in (-1, 0):
            for dc in (-1, 0):
                r, c = row + dr, col + dc
                if 0 <= r < board.size - 1 and 0 <= c < board.size - 1:
                    origins.append((r, c))
        return origins

    def unit_counts(self, board: Board, row: int, col: int, color: Color) -> Tuple[int, int]:
        """Count (color, other color) stones in the 2x2 block at (row, col)."""
        mine = theirs = 0
        for r, c in self.unit_square(row, col):
            value = board.get(r, c)
            if value == color:
                mine += 1
            elif value is not None:
                theirs += 1
        return mine, theirs

    def count_unit_threats(self, board: Board, color: Color) -> int:
        """Number of 2x2 blocks holding exactly three stones of color and no others."""
        threats = 0
        for row, col in self.iter_unit_origins(board):
            if self.unit_counts(board, row, col, color) == (3, 0):
                threats += 1
        return threats

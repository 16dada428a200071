"""
selector.py - Move selection for the automated Squares player

The MoveSelector ranks moves with a fixed priority chain and no tree search:

1. Win now: complete one of our own squares
2. Block: fill the cell that would complete an opponent square
3. Double threat: a cell that leaves two or more 2x2 blocks one move from done
4. Positional: center distance plus 2x2 block potential
5. Weighted random: center-weighted random pick among empty cells

Only step 5 is nondeterministic. The double threat step looks at 2x2 blocks
only, even though steps 1 and 2 consider squares of every size and angle.
"""

from enum import IntEnum
from typing import List, NamedTuple, Optional

import numpy as np

from squares.debug import debug
from squares.game.board import Board
from squares.game.detector import SquareDetector
from squares.utils import CENTER_WEIGHT, UNIT_SQUARE_BONUS, Color, Coord, manhattan_from_center


class MoveTier(IntEnum):
    """Which step of the priority chain produced a move."""
    WIN = 1
    BLOCK = 2
    DOUBLE_THREAT = 3
    POSITIONAL = 4
    RANDOM = 5


class MoveChoice(NamedTuple):
    row: int
    col: int
    tier: MoveTier

    @property
    def coord(self) -> Coord:
        return self.row, self.col


class MoveSelector:
    """
    Picks the automated player's move.

    The selector keeps no game state. It writes to the board only while
    probing double threats and always restores the probed cell before
    returning.
    """

    def __init__(self, seed: Optional[int] = None, detector: Optional[SquareDetector] = None):
        """
        Args:
            seed: Seed for the weighted random fallback
            detector: Square detector to use (a fresh one by default)
        """
        self.rng = np.random.default_rng(seed)
        self.detector = detector or SquareDetector()

    def choose_move(self, board: Board, my_color: Color, opp_color: Color) -> Optional[Coord]:
        """Return the chosen (row, col), or None when the board is full."""
        choice = self.select(board, my_color, opp_color)
        return None if choice is None else choice.coord

    def select(self, board: Board, my_color: Color, opp_color: Color) -> Optional[MoveChoice]:
        """
        Run the priority chain.

        Args:
            board: Current board (restored to its original state on return)
            my_color: Color of the player to move
            opp_color: Color of the opponent

        Returns:
            The move and the tier that produced it, or None on a full board
        """
        if board.is_full():
            debug.debug("Board is full, no move available", "selector")
            return None

        debug.start_timer("select")
        choice = self._select(board, my_color, opp_color)
        debug.end_timer("select", "selector")

        if choice is not None:
            debug.debug(f"{my_color} plays {choice.coord} ({choice.tier.name})", "selector")
        return choice

    def _select(self, board: Board, my_color: Color, opp_color: Color) -> Optional[MoveChoice]:
        move = self.detector.find_one_move_win(board, my_color)
        if move is not None:
            return MoveChoice(move[0], move[1], MoveTier.WIN)

        move = self.detector.find_one_move_win(board, opp_color)
        if move is not None:
            return MoveChoice(move[0], move[1], MoveTier.BLOCK)

        move = self.find_double_threat(board, my_color)
        if move is not None:
            return MoveChoice(move[0], move[1], MoveTier.DOUBLE_THREAT)

        move = self.find_positional_move(board, my_color, opp_color)
        if move is not None:
            return MoveChoice(move[0], move[1], MoveTier.POSITIONAL)

        move = self.find_weighted_random_move(board)
        if move is not None:
            return MoveChoice(move[0], move[1], MoveTier.RANDOM)
        return None

    def find_double_threat(self, board: Board, my_color: Color) -> Optional[Coord]:
        """
        First empty cell (row-major) that creates two or more 2x2 threats.

        A threat is a 2x2 block with three stones of my_color and no
        opponent stone. Each probe is undone before the next cell is tried.
        """
        for row, col in board.empty_cells():
            board.set(row, col, my_color)
            try:
                threats = self.detector.count_unit_threats(board, my_color)
            finally:
                board.set(row, col, None)
            if threats >= 2:
                debug.trace(f"Double threat at ({row}, {col}): {threats} blocks", "selector")
                return row, col
        return None

    def score_cell(self, board: Board, row: int, col: int,
                   my_color: Color, opp_color: Color) -> int:
        """
        Positional score of an empty cell.

        (size - distance from center) * 3, plus a bonus for every 2x2 block
        containing the cell depending on its (mine, opponent) stone counts.
        A block holding both colors scores nothing.
        """
        score = (board.size - manhattan_from_center(row, col, board.size)) * CENTER_WEIGHT
        for r, c in self.detector.unit_square_origins(board, row, col):
            mine, theirs = self.detector.unit_counts(board, r, c, my_color)
            score += UNIT_SQUARE_BONUS.get((mine, theirs), 0)
        return score

    def find_positional_move(self, board: Board, my_color: Color,
                             opp_color: Color) -> Optional[Coord]:
        best_score = None
        best_move = None
        for row, col in board.empty_cells():
            score = self.score_cell(board, row, col, my_color, opp_color)
            if best_score is None or score > best_score:
                best_score = score
                best_move = (row, col)
        return best_move

    def weighted_candidates(self, board: Board) -> List[Coord]:
        """
        Empty cells repeated by weight.

        Each cell appears max(1, (size - distance from center) + randint(0, 2))
        times.
        """
        candidates: List[Coord] = []
        for row, col in board.empty_cells():
            weight = board.size - manhattan_from_center(row, col, board.size)
            weight += int(self.rng.integers(0, 3))
            candidates.extend([(row, col)] * max(1, weight))
        return candidates

    def find_weighted_random_move(self, board: Board) -> Optional[Coord]:
        candidates = self.weighted_candidates(board)
        if not candidates:
            return None
        return candidates[int(self.rng.integers(len(candidates)))]

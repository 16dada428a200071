"""
rules.py - Game state management and Gymnasium environment for Squares

This module provides:
1. SquaresGame, the engine that owns the board, players, turn and result
2. SquaresEnv, a gymnasium environment that plays one color against the
   automated opponent
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from squares.ai.selector import MoveChoice, MoveSelector
from squares.debug import debug
from squares.exceptions import (CellOccupiedError, InvalidBoardDataError, InvalidSizeError,
                                NotStartedError, OutOfBoundsError, SameColorError)
from squares.game.board import Board
from squares.game.detector import SquareDetector
from squares.utils import MIN_BOARD_SIZE, Color, Coord, GameResult, Player, Square


@dataclass(frozen=True)
class MoveRecord:
    """What changed when a stone was placed."""
    color: Color
    row: int
    col: int
    result: GameResult
    winning_square: Optional[Square] = None


class SquaresGame:
    """
    Squares game engine.

    Moves are validated, applied and checked for a finished game. After each
    move the turn passes to the other player, and automated players keep
    moving until a human is on turn or the game ends. Every placed stone is
    returned as a MoveRecord so callers decide how to display it.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Seed for the automated player's random fallback
        """
        debug.debug("Initializing SquaresGame", "game")
        self.detector = SquareDetector()
        self.selector = MoveSelector(seed=seed, detector=self.detector)
        self.board: Optional[Board] = None
        self.players: List[Player] = []
        self.turn = 0
        self.result = GameResult.IN_PROGRESS
        self.winning_square: Optional[Square] = None
        self.history: List[MoveRecord] = []

    # Lifecycle

    def start_game(self, size: int, player1: Player, player2: Player) -> List[MoveRecord]:
        """
        Start a new game, replacing any game in progress.

        Args:
            size: Board side length (> 2)
            player1: Player moving first
            player2: Player moving second

        Returns:
            Records of the moves made by automated players before a human
            is on turn (empty when player1 is human)

        Raises:
            SameColorError: Both players have the same color
            InvalidSizeError: size <= 2
        """
        if player1.color == player2.color:
            raise SameColorError("Players cannot have the same color")

        self.board = Board(size)
        self.players = [player1, player2]
        self.turn = 0
        self.result = GameResult.IN_PROGRESS
        self.winning_square = None
        self.history = []
        debug.info(f"New {size}x{size} game: {player1} vs {player2}", "game")

        return self._run_automated_turns()

    def load_board(self, size: int, data: str, next_color: Union[Color, str]) -> None:
        """
        Load a position to analyze it.

        Both players are automated so the engine can answer "what would be
        played next", but no automated turns are run here. The result is
        computed straight away, so a board that already holds a square is
        finished on load.

        Args:
            size: Board side length (> 2)
            data: Row-major cell string ('.', ' ', 'W', 'B', 'w', 'b')
            next_color: Color to move next ('W'/'B' or a Color)

        Raises:
            InvalidSizeError, InvalidColorError, InvalidBoardDataError
        """
        if not isinstance(size, (int, np.integer)) or size < MIN_BOARD_SIZE:
            raise InvalidSizeError(f"Size must be > 2, got {size!r}")
        if not isinstance(data, str):
            raise InvalidBoardDataError("Board data must be a string")
        color = Color.from_symbol(next_color)

        board = Board.from_data(size, data)
        self.board = board
        self.players = [Player.automated(color), Player.automated(color.other())]
        self.turn = 0
        self.history = []
        self.result, self.winning_square = self._evaluate(board)
        debug.info(f"Loaded {size}x{size} board, {color} to move, {self.result.name}", "game")

    # Moves

    def apply_move(self, row: int, col: int) -> List[MoveRecord]:
        """
        Place the current player's color at (row, col).

        Returns:
            Records for this move followed by any automated replies

        Raises:
            NotStartedError: No game is active
            OutOfBoundsError: Coordinates outside the board
            CellOccupiedError: Cell already colored
        """
        self._require_active()
        if not self.board.is_inside(row, col):
            raise OutOfBoundsError(f"Coordinates ({row}, {col}) out of board")
        if not self.board.is_empty(row, col):
            raise CellOccupiedError(f"Cell ({row}, {col}) already occupied")

        records = [self._place(row, col)]
        if self.is_active():
            self._advance_turn()
            records.extend(self._run_automated_turns())
        return records

    def analyze_next_move(self) -> Optional[MoveChoice]:
        """Move the current player would be advised to make, with its tier."""
        self._require_active()
        return self.selector.select(self.board, self.get_current_player().color,
                                    self.get_opponent().color)

    def find_next_move(self) -> Optional[Coord]:
        """
        Suggest a move for the current player without changing the game.

        Raises:
            NotStartedError: No game is active
        """
        choice = self.analyze_next_move()
        return None if choice is None else choice.coord

    def _place(self, row: int, col: int) -> MoveRecord:
        color = self.get_current_player().color
        self.board.set(row, col, color)

        square = self.detector.find_completed_square(self.board, color)
        if square is not None:
            self.result = GameResult.win_for(color)
            self.winning_square = square
            debug.info(f"{color} wins with square {square}", "game")
        elif self.board.is_full():
            self.result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")

        record = MoveRecord(color, row, col, self.result, square)
        self.history.append(record)
        debug.debug(f"{color} ({row}, {col}) -> {self.result.name}", "game")
        return record

    def _advance_turn(self) -> None:
        self.turn = 1 - self.turn

    def _run_automated_turns(self) -> List[MoveRecord]:
        records: List[MoveRecord] = []
        while self.is_active() and self.get_current_player().is_automated:
            player = self.get_current_player()
            move = self.selector.choose_move(self.board, player.color, self.get_opponent().color)
            if move is None:
                debug.warning(f"No move found for {player.color} on an active board", "game")
                break
            records.append(self._place(*move))
            if self.is_active():
                self._advance_turn()
        return records

    # Queries

    def _require_active(self) -> None:
        if self.board is None or not self.is_active():
            raise NotStartedError("Game not started")

    def _evaluate(self, board: Board) -> Tuple[GameResult, Optional[Square]]:
        for color in (Color.WHITE, Color.BLACK):
            square = self.detector.find_completed_square(board, color)
            if square is not None:
                return GameResult.win_for(color), square
        if board.is_full():
            return GameResult.DRAW, None
        return GameResult.IN_PROGRESS, None

    def status(self) -> GameResult:
        """
        Recompute the result from the board alone.

        White squares are checked before Black ones, then fullness.
        """
        if self.board is None:
            return GameResult.IN_PROGRESS
        return self._evaluate(self.board)[0]

    def is_active(self) -> bool:
        return self.board is not None and not self.result.is_game_over()

    def get_current_player(self) -> Player:
        return self.players[self.turn]

    def get_opponent(self) -> Player:
        return self.players[1 - self.turn]

    def get_winner(self) -> Optional[Color]:
        return self.result.winner

    def render(self) -> str:
        return "" if self.board is None else self.board.render()


class SquaresEnv(gym.Env):
    """
    Squares environment following the Gymnasium interface.

    The agent plays agent_color against the automated MoveSelector. An action
    is a flat cell index row * size + col; each step applies the agent's move
    and then the opponent's reply.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, size: int = 5, agent_color: Color = Color.WHITE,
                 render_mode: Optional[str] = None, seed: Optional[int] = None):
        debug.debug(f"Initializing SquaresEnv size={size}", "env")
        if size < MIN_BOARD_SIZE:
            raise InvalidSizeError(f"Size must be > 2, got {size!r}")

        self.size = size
        self.agent_color = Color.from_symbol(agent_color)
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(size * size)
        self.observation_space = spaces.Box(low=0, high=2, shape=(size, size), dtype=np.int8)

        self.game = SquaresGame(seed=seed)
        self.last_moves: List[MoveRecord] = []

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def _players(self) -> Tuple[Player, Player]:
        agent = Player.human(self.agent_color)
        opponent = Player.automated(self.agent_color.other())
        # White always moves first
        if self.agent_color == Color.WHITE:
            return agent, opponent
        return opponent, agent

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.selector.rng = np.random.default_rng(seed)

        self.last_moves = self.game.start_game(self.size, *self._players())
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        debug.debug(f"Environment step with action {action}", "env")
        row, col = divmod(int(action), self.size)

        if (not self.game.is_active() or not self.game.board.is_inside(row, col)
                or not self.game.board.is_empty(row, col)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.last_moves = self.game.apply_move(row, col)

        reward = self.reward_step
        terminated = self.game.result.is_game_over()
        if terminated:
            winner = self.game.get_winner()
            if winner is None:
                reward = self.reward_draw
            elif winner == self.agent_color:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Episode over: {self.game.result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        board = self.game.board
        return {
            'valid_moves': [row * self.size + col for row, col in board.empty_cells()],
            'game_result': self.game.result.name,
            'winning_square': self.game.winning_square,
            'last_moves': [(m.color.symbol, m.row, m.col) for m in self.last_moves],
        }

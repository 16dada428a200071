"""
cli.py - Console interface for Squares

CommandProcessor turns text commands into engine calls and prints the
engine's move records. SimpleCLI feeds it lines from standard input.

Commands (case-insensitive):
    GAME N, TYPE C, TYPE C   start a game (TYPE user|comp, C W|B)
    MOVE X, Y                place a stone for the current player
    HELP                     show help
    EXIT                     quit
"""

import re
import sys
from typing import Iterable, List, Optional, TextIO

from squares.debug import debug
from squares.exceptions import NotStartedError, SquaresError
from squares.game.rules import MoveRecord, SquaresGame
from squares.utils import Player, format_square, render_board_ascii

HELP_TEXT = """Available commands:
GAME N, U1, U2 - start a new game
  N: board size (> 2)
  U1, U2: player parameters (TYPE C)
    TYPE: 'user' or 'comp'
    C: color ('W' or 'B')
MOVE X, Y - make a move
EXIT - exit program
HELP - show this help message"""

INCORRECT_COMMAND = "Incorrect command"
NOT_STARTED = "Game not started"


class CommandProcessor:
    """Parses one command line at a time and drives a SquaresGame."""

    def __init__(self, game: Optional[SquaresGame] = None, out: Optional[TextIO] = None):
        self.game = game or SquaresGame()
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def process(self, command: Optional[str]) -> bool:
        """
        Execute a single command.

        Returns:
            False when the command was EXIT, True otherwise
        """
        if command is None or not command.strip():
            self._print(INCORRECT_COMMAND)
            return True

        trimmed = command.strip()
        keyword = trimmed.split(None, 1)[0].upper()
        debug.debug(f"Command: {trimmed!r}", "cli")

        if keyword.startswith("GAME"):
            self._start_game(trimmed[4:])
        elif keyword == "MOVE":
            self._move(trimmed[4:])
        elif keyword == "HELP":
            self._print(HELP_TEXT)
        elif keyword == "EXIT":
            return False
        else:
            self._print(INCORRECT_COMMAND)
        return True

    def _start_game(self, args: str) -> None:
        parts = [part.strip() for part in re.split(r"\s*,\s*", args.strip())]
        if len(parts) != 3:
            self._print(INCORRECT_COMMAND)
            return

        try:
            size = int(parts[0])
            players = []
            for params in parts[1:]:
                fields = params.split()
                if len(fields) != 2:
                    raise ValueError(f"Bad player parameters: {params!r}")
                players.append(Player.parse(fields[0], fields[1]))
            records = self.game.start_game(size, players[0], players[1])
        except (ValueError, SquaresError) as e:
            debug.info(f"GAME rejected: {e}", "cli")
            self._print(INCORRECT_COMMAND)
            return

        self._print("New game started")
        self._report(records)

    def _move(self, args: str) -> None:
        if not self.game.is_active():
            self._print(NOT_STARTED)
            return

        fields = args.replace(",", " ").split()
        if len(fields) != 2:
            self._print(INCORRECT_COMMAND)
            return

        try:
            row, col = int(fields[0]), int(fields[1])
            records = self.game.apply_move(row, col)
        except NotStartedError:
            self._print(NOT_STARTED)
            return
        except (ValueError, SquaresError) as e:
            debug.info(f"MOVE rejected: {e}", "cli")
            self._print(INCORRECT_COMMAND)
            return

        self._report(records)

    def _report(self, records: List[MoveRecord]) -> None:
        """Print each placed stone, the board after it, and the final result."""
        if not records:
            return

        # Replay on a copy so each record is shown with the board as it was then
        board = self.game.board.copy()
        for record in records:
            board.set(record.row, record.col, None)
        for record in records:
            board.set(record.row, record.col, record.color)
            self._print(f"{record.color.symbol} ({record.row}, {record.col})")
            self._print(render_board_ascii(board.grid))

        last = records[-1]
        if last.result.is_game_over():
            winner = last.result.winner
            if winner is None:
                self._print("Game finished. Draw")
            else:
                self._print(f"Game finished. {winner.symbol} wins!")
                self._print(f"Winning square coordinates: {format_square(last.winning_square)} ")


class SimpleCLI:
    """Read commands from a stream until EOF or EXIT."""

    def __init__(self, processor: Optional[CommandProcessor] = None):
        self.processor = processor or CommandProcessor()

    def run(self, lines: Optional[Iterable[str]] = None) -> None:
        out = self.processor.out
        out.write("Starting SquaresGame. Enter commands (HELP for help):\n")
        source = sys.stdin if lines is None else lines
        for line in source:
            if not self.processor.process(line.rstrip("\n")):
                return
        out.write("Input closed. Exiting program.\n")

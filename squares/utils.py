"""
utils.py - Constants, enumerations and helpers shared across the Squares engine

Holds the color and result enumerations, the player type, the board text
codec helpers and the ASCII renderer used by the console interface.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from squares.exceptions import InvalidBoardDataError, InvalidColorError, InvalidPlayerError

# Board constants
MIN_BOARD_SIZE = 3
EMPTY = 0
EMPTY_SYMBOLS = ('.', ' ')

# Positional heuristic bonuses, keyed by (mine, opponent) counts in a unit square
UNIT_SQUARE_BONUS = {
    (3, 0): 100,
    (2, 0): 20,
    (0, 2): 15,
    (1, 0): 5,
}
CENTER_WEIGHT = 3

Coord = Tuple[int, int]
Square = Tuple[Coord, Coord, Coord, Coord]


class Color(Enum):
    """The two stone colors. Values are the grid codes."""
    WHITE = 1
    BLACK = 2

    def other(self) -> 'Color':
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def symbol(self) -> str:
        return "W" if self == Color.WHITE else "B"

    @classmethod
    def from_symbol(cls, symbol) -> 'Color':
        """
        Parse a color symbol, case-insensitive.

        Args:
            symbol: 'W', 'B' (or lowercase), or a Color instance

        Returns:
            The matching Color

        Raises:
            InvalidColorError: If the symbol is not a known color
        """
        if isinstance(symbol, Color):
            return symbol
        if isinstance(symbol, str):
            value = symbol.strip().upper()
            if value == "W":
                return cls.WHITE
            if value == "B":
                return cls.BLACK
        raise InvalidColorError(f"Invalid color: {symbol!r} (must be 'W' or 'B')")

    @classmethod
    def from_value(cls, value: int) -> Optional['Color']:
        """Map a grid code back to a Color, None for an empty cell."""
        if value == EMPTY:
            return None
        return cls(int(value))

    def __str__(self):
        return self.symbol


class GameResult(Enum):
    """Outcome of a game."""
    IN_PROGRESS = auto()
    WHITE_WIN = auto()
    BLACK_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Color]:
        if self == GameResult.WHITE_WIN:
            return Color.WHITE
        if self == GameResult.BLACK_WIN:
            return Color.BLACK
        return None

    @staticmethod
    def win_for(color: Color) -> 'GameResult':
        return GameResult.WHITE_WIN if color == Color.WHITE else GameResult.BLACK_WIN


class PlayerKind(Enum):
    HUMAN = "user"
    AUTOMATED = "comp"


@dataclass(frozen=True)
class Player:
    """A participant in the game: who moves and with which color."""
    kind: PlayerKind
    color: Color

    @property
    def is_automated(self) -> bool:
        return self.kind == PlayerKind.AUTOMATED

    @classmethod
    def parse(cls, kind: str, color: str) -> 'Player':
        """
        Build a player from console parameters such as ('comp', 'W').

        Raises:
            InvalidPlayerError: Unknown player type
            InvalidColorError: Unknown color symbol
        """
        try:
            player_kind = PlayerKind(kind.strip().lower())
        except (ValueError, AttributeError):
            raise InvalidPlayerError(
                f"Invalid player type: {kind!r} (must be 'user' or 'comp')") from None
        # only the first letter counts, so "White" reads as W
        return cls(player_kind, Color.from_symbol(color.strip()[:1]))

    @classmethod
    def human(cls, color: Color) -> 'Player':
        return cls(PlayerKind.HUMAN, color)

    @classmethod
    def automated(cls, color: Color) -> 'Player':
        return cls(PlayerKind.AUTOMATED, color)


def manhattan_from_center(row: int, col: int, size: int) -> int:
    """Manhattan distance from (row, col) to the board's center cell."""
    center = size // 2
    return abs(row - center) + abs(col - center)


def parse_board_data(data: str, size: int) -> np.ndarray:
    """
    Decode a row-major board string into a grid.

    Args:
        data: String of length size*size using '.', ' ', 'W', 'B', 'w', 'b'
        size: Board side length

    Returns:
        size x size int8 grid of EMPTY / Color values

    Raises:
        InvalidBoardDataError: Wrong length or unknown character
    """
    if data is None or len(data) != size * size:
        length = 0 if data is None else len(data)
        raise InvalidBoardDataError(
            f"Invalid board data length: expected {size * size}, got {length}")

    grid = np.zeros((size, size), dtype=np.int8)
    for index, char in enumerate(data):
        if char in EMPTY_SYMBOLS:
            continue
        if char.upper() not in ("W", "B"):
            raise InvalidBoardDataError(f"Invalid character in board data: {char!r}")
        grid[divmod(index, size)] = Color.from_symbol(char).value
    return grid


def encode_board_data(grid: np.ndarray) -> str:
    """Encode a grid as a row-major string of '.', 'W' and 'B'."""
    symbols = {EMPTY: ".", Color.WHITE.value: "W", Color.BLACK.value: "B"}
    return "".join(symbols[int(value)] for value in grid.flat)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid the way the console prints it.

    The header is indented by the width of the largest row index plus two,
    and every cell is followed by a space:

        Current board state:
           0 1 2
        0 W . .
        1 . . .
        2 . . B
    """
    size = grid.shape[0]
    width = len(str(size - 1))
    symbols = {EMPTY: ".", Color.WHITE.value: "W", Color.BLACK.value: "B"}

    lines: List[str] = ["Current board state:"]
    lines.append(" " * (width + 2) + "".join(f"{col} " for col in range(size)))
    for row in range(size):
        cells = "".join(f"{symbols[int(value)]} " for value in grid[row])
        lines.append(f"{row:>{width}d} " + cells)
    return "\n".join(lines)


def format_square(square: Square) -> str:
    """Format a square as '(r,c) (r,c) (r,c) (r,c)'."""
    return " ".join(f"({row},{col})" for row, col in square)

"""
squares.game - Core game mechanics for Squares

This package contains the board representation, square detection and the
game engine. The engine lives in squares.game.rules and is not imported here
because it depends on squares.ai.
"""

from squares.game.board import Board
from squares.game.detector import SquareDetector

__all__ = ['Board', 'SquareDetector']

"""
squares - Squares game engine

Two players alternately color cells on an N x N grid; the first to own all
four corners of a square (any size, axis-aligned or tilted) wins. This
package provides the board, square detection, the automated player, the game
engine and console/REST/Gymnasium front ends.
"""

__version__ = '0.1.0'

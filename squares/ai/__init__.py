"""
squares.ai - Automated player for Squares
"""

from squares.ai.selector import MoveChoice, MoveSelector, MoveTier

__all__ = ['MoveChoice', 'MoveSelector', 'MoveTier']

"""
exceptions.py - Error types raised by the Squares engine

Every error is a caller-input validation failure. They all derive from
SquaresError (itself a ValueError) so interfaces can catch them in one place.
"""


class SquaresError(ValueError):
    """Base class for all engine validation errors."""


class InvalidSizeError(SquaresError):
    """Board size is not greater than 2."""


class InvalidColorError(SquaresError):
    """A color symbol other than W or B was given."""


class SameColorError(SquaresError):
    """Both players were given the same color."""


class InvalidPlayerError(SquaresError):
    """A player type other than 'user' or 'comp' was given."""


class InvalidBoardDataError(SquaresError):
    """Board text has the wrong length or contains an unknown character."""


class OutOfBoundsError(SquaresError):
    """Coordinates fall outside the board."""


class CellOccupiedError(SquaresError):
    """The target cell already holds a color."""


class NotStartedError(SquaresError):
    """No game is currently running."""

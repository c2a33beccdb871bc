"""
Exceptions raised by the Minesweeper engine.

Only contract violations are raised. Actions the rules simply ignore
(opening an opened cell, acting on a finished game) return the
unchanged state instead.
"""


class MinesweeperError(Exception):
    """Base class for engine errors."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions, mine count or serialized data are unusable."""


class InvalidCoordinate(MinesweeperError, IndexError):
    """A point lies outside the grid or is not an (x, y) pair."""

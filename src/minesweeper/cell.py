"""
Cell module for Minesweeper game.

A cell pairs what it holds (a mine, or a safe square with its adjacent
mine count) with how the player sees it (opened, or unopened with a
flag marker). All types here are immutable values.
"""
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Union


# ============================================================================
# Constants
# ============================================================================

class Flag(Enum):
    """Marker a player may put on an unopened cell."""

    NONE = auto()
    UNSURE = auto()
    SURE = auto()


# ============================================================================
# Cell Content
# ============================================================================

@dataclass(frozen=True)
class Empty:
    """
    A safe cell.

    Attributes:
        adjacent_mines: Count of mines in neighboring cells (0-8).
    """

    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_mines <= 8:
            raise ValueError(
                f"adjacent_mines must be in [0, 8], got {self.adjacent_mines}"
            )


@dataclass(frozen=True)
class Mine:
    """A cell holding a mine."""


CellContent = Union[Empty, Mine]


# ============================================================================
# Reveal State
# ============================================================================

@dataclass(frozen=True)
class Opened:
    """The player has revealed this cell."""


@dataclass(frozen=True)
class Unopened:
    """Not yet revealed; carries the player's marker."""

    marker: Flag = Flag.NONE


RevealState = Union[Opened, Unopened]


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        content: Empty (with adjacent count) or Mine.
        state: Opened, or Unopened with a flag marker.
    """

    content: CellContent = field(default_factory=Empty)
    state: RevealState = field(default_factory=Unopened)

    def opened(self) -> "Cell":
        """Return a copy of this cell in the opened state."""
        return replace(self, state=Opened())

    def flagged(self, flag: Flag) -> "Cell":
        """Return a copy of this cell, unopened, carrying ``flag``."""
        return replace(self, state=Unopened(flag))

    def with_content(self, content: CellContent) -> "Cell":
        """Return a copy of this cell holding ``content``."""
        return replace(self, content=content)

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return isinstance(self.content, Mine)

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return isinstance(self.state, Opened)

    @property
    def flag(self) -> Flag:
        """Marker on the cell; opened cells always report NONE."""
        if isinstance(self.state, Unopened):
            return self.state.marker
        if isinstance(self.state, Opened):
            return Flag.NONE
        raise TypeError(f"Unknown reveal state: {self.state!r}")

    @property
    def adjacent_mines(self) -> int:
        """Adjacent mine count of a safe cell, 0 for a mine."""
        if isinstance(self.content, Empty):
            return self.content.adjacent_mines
        if isinstance(self.content, Mine):
            return 0
        raise TypeError(f"Unknown cell content: {self.content!r}")

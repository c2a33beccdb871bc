"""
Board module for Minesweeper game.

Implements grid generation with random mine placement, neighbor
resolution, win detection and the two player actions. Game states are
immutable: every action returns a new GameState built from the old one.
"""
import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import List, Optional, Set, Tuple

from .cell import Cell, Empty, Flag, Mine
from .errors import InvalidConfiguration, InvalidCoordinate

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Grid = Tuple[Tuple[Cell, ...], ...]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    LOST = auto()
    WON = auto()

    @property
    def is_terminal(self) -> bool:
        """Won and lost games accept no further actions."""
        return self is not GameStatus.IN_PROGRESS


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer")
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        if self.num_mines > self.total_cells:
            raise InvalidConfiguration(
                f"Too many mines (max {self.total_cells})"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Game State
# ============================================================================

@dataclass(frozen=True)
class GameState:
    """
    Snapshot of a game: its status and the grid of cells.

    The grid is indexed ``grid[row][column]``; points passed to the
    accessors are ``(x, y)`` = ``(column, row)``.
    """

    status: GameStatus
    grid: Grid

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.grid)

    @property
    def is_terminal(self) -> bool:
        """Check if game is won or lost."""
        return self.status.is_terminal

    @property
    def mine_count(self) -> int:
        """Number of cells holding a mine."""
        return sum(1 for row in self.grid for cell in row if cell.is_mine)

    @property
    def opened_count(self) -> int:
        """Number of opened cells."""
        return sum(1 for row in self.grid for cell in row if cell.is_opened)

    @property
    def flag_count(self) -> int:
        """Number of unopened cells carrying a SURE flag."""
        return sum(
            1 for row in self.grid for cell in row if cell.flag is Flag.SURE
        )

    def contains(self, point: Point) -> bool:
        """Check if point is within grid bounds."""
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, point: Point) -> Cell:
        """
        Get the cell at ``point``.

        Raises:
            InvalidCoordinate: If the point is outside the grid.
        """
        x, y = _check_point(self, point)
        return self.grid[y][x]

    def points(self) -> List[Point]:
        """All points of the grid in row-major order."""
        return [(x, y) for y in range(self.height) for x in range(self.width)]


def _check_point(state: GameState, point: Point) -> Point:
    """Validate a caller-supplied point and return it as a tuple."""
    try:
        x, y = point
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Not an (x, y) pair: {point!r}") from None
    if not all(
        isinstance(value, int) and not isinstance(value, bool) for value in (x, y)
    ):
        raise InvalidCoordinate(f"Coordinates must be integers: {point!r}")
    if not state.contains((x, y)):
        raise InvalidCoordinate(
            f"{(x, y)} is outside the {state.width}x{state.height} grid"
        )
    return x, y


def _replace_cell(grid: Grid, point: Point, cell: Cell) -> Grid:
    """Return a grid with one cell swapped; untouched rows are shared."""
    x, y = point
    row = grid[y]
    new_row = row[:x] + (cell,) + row[x + 1:]
    return grid[:y] + (new_row,) + grid[y + 1:]


# ============================================================================
# Neighbor Utilities (Low-level)
# ============================================================================

def neighbors(x: int, y: int, width: int, height: int) -> Set[Point]:
    """
    Get valid neighboring positions of ``(x, y)``.

    Returns 3 points for a corner, 5 for an edge and 8 for an interior
    cell. The point itself is never included.
    """
    return {
        (nx, ny)
        for nx in range(max(0, x - 1), min(width, x + 2))
        for ny in range(max(0, y - 1), min(height, y + 2))
        if (nx, ny) != (x, y)
    }


# ============================================================================
# Grid Generation (Low-level)
# ============================================================================

def random_coordinates(
    count: int, width: int, height: int, rng: random.Random
) -> Set[Point]:
    """
    Draw ``count`` distinct points uniformly over the grid.

    Uses rejection sampling into a set, so ``count`` must not exceed
    ``width * height``.
    """
    if count > width * height:
        raise InvalidConfiguration(
            f"Cannot draw {count} distinct points from a {width}x{height} grid"
        )
    coordinates: Set[Point] = set()
    while len(coordinates) < count:
        coordinates.add((rng.randrange(width), rng.randrange(height)))
    return coordinates


def generate(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Build the initial state of a game.

    Args:
        width: Number of columns.
        height: Number of rows.
        mine_count: Mines to place, at most ``width * height``.
        rng: Random source for mine placement; a fresh unseeded
            ``random.Random`` when omitted.

    Returns:
        An in-progress GameState with every cell unopened and unflagged.

    Raises:
        InvalidConfiguration: If the dimensions or mine count are invalid.
    """
    config = BoardConfig(width, height, mine_count)
    rng = rng if rng is not None else random.Random()

    grid = [[Cell() for _ in range(width)] for _ in range(height)]
    mines = random_coordinates(config.num_mines, width, height, rng)

    for x, y in mines:
        grid[y][x] = grid[y][x].with_content(Mine())

    for mine_x, mine_y in mines:
        for x, y in neighbors(mine_x, mine_y, width, height):
            content = grid[y][x].content
            if isinstance(content, Empty):
                grid[y][x] = grid[y][x].with_content(
                    Empty(content.adjacent_mines + 1)
                )

    logger.info(
        "Generated %dx%d board with %d mines", width, height, mine_count
    )
    return GameState(
        status=GameStatus.IN_PROGRESS,
        grid=tuple(tuple(row) for row in grid),
    )


def new_game(
    config: BoardConfig = BEGINNER, rng: Optional[random.Random] = None
) -> GameState:
    """Start a new game from a board configuration."""
    return generate(config.width, config.height, config.num_mines, rng)


# ============================================================================
# Win Detection
# ============================================================================

def is_won(grid: Grid) -> bool:
    """Check if every non-mine cell has been opened."""
    return all(cell.is_mine or cell.is_opened for row in grid for cell in row)


def _status_after(grid: Grid) -> GameStatus:
    return GameStatus.WON if is_won(grid) else GameStatus.IN_PROGRESS


# ============================================================================
# Game Actions (Mid-level)
# ============================================================================

def open_cell(state: GameState, point: Point) -> GameState:
    """
    Open the cell at ``point``.

    Opening a mine loses the game; opening the last safe cell wins it.
    Acting on a finished game or on an opened cell returns ``state``
    unchanged. Neighboring cells are never opened automatically.

    Raises:
        InvalidCoordinate: If the point is outside the grid.
    """
    if state.is_terminal:
        logger.debug("Ignoring open of %s: game is %s", point, state.status.name)
        return state

    point = _check_point(state, point)

    cell = state.grid[point[1]][point[0]]
    if cell.is_opened:
        logger.debug("Ignoring open of %s: already opened", point)
        return state

    grid = _replace_cell(state.grid, point, cell.opened())
    if isinstance(cell.content, Mine):
        status = GameStatus.LOST
    elif isinstance(cell.content, Empty):
        status = _status_after(grid)
    else:
        raise TypeError(f"Unknown cell content: {cell.content!r}")

    if status is not state.status:
        logger.debug("Opening %s moved game to %s", point, status.name)
    return replace(state, status=status, grid=grid)


def set_flag(state: GameState, point: Point, flag: Flag) -> GameState:
    """
    Put ``flag`` on the unopened cell at ``point``.

    Flags are informational: they never open a cell and never lose the
    game. Acting on a finished game or on an opened cell returns
    ``state`` unchanged.

    Raises:
        InvalidCoordinate: If the point is outside the grid.
    """
    if state.is_terminal:
        logger.debug("Ignoring flag on %s: game is %s", point, state.status.name)
        return state

    point = _check_point(state, point)
    if not isinstance(flag, Flag):
        raise TypeError(f"Expected a Flag, got {flag!r}")

    cell = state.grid[point[1]][point[0]]
    if cell.is_opened:
        logger.debug("Ignoring flag on %s: already opened", point)
        return state

    grid = _replace_cell(state.grid, point, cell.flagged(flag))
    return replace(state, status=_status_after(grid), grid=grid)

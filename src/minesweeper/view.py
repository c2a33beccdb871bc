"""
Player-facing views of a game.

Everything here shows only what a player may legally see: opened cells
show their content, unopened cells show their flag marker. Unopened
mines become visible once the game is over.
"""
from typing import List, Union

import numpy as np

from .board import GameState, GameStatus, Point
from .cell import Cell, CellContent, Empty, Flag, Mine

VisibleCell = Union[CellContent, Flag]

# Observation codes for the numpy view
HIDDEN = -1
FLAGGED_SURE = -2
FLAGGED_UNSURE = -3
MINE = 9

_FLAG_CODES = {
    Flag.NONE: HIDDEN,
    Flag.SURE: FLAGGED_SURE,
    Flag.UNSURE: FLAGGED_UNSURE,
}

_FLAG_SYMBOLS = {
    Flag.NONE: ".",
    Flag.SURE: "F",
    Flag.UNSURE: "?",
}


def visible_cell(cell: Cell, status: GameStatus) -> VisibleCell:
    """What a player sees of ``cell`` while the game is in ``status``."""
    if cell.is_opened:
        return cell.content
    if status.is_terminal and cell.is_mine:
        return cell.content
    return cell.flag


def player_view(state: GameState) -> List[List[VisibleCell]]:
    """Grid of visible cells, indexed ``[row][column]``."""
    return [[visible_cell(cell, state.status) for cell in row] for row in state.grid]


def _observation_code(visible: VisibleCell) -> int:
    if isinstance(visible, Flag):
        return _FLAG_CODES[visible]
    if isinstance(visible, Empty):
        return visible.adjacent_mines
    if isinstance(visible, Mine):
        return MINE
    raise TypeError(f"Unknown visible cell: {visible!r}")


def get_observation(state: GameState) -> np.ndarray:
    """
    Get board state as numpy array for ML agents.

    Returns:
        2D int8 array of shape (height, width) where:
            -1 = unopened, no flag
            -2 = unopened, SURE flag
            -3 = unopened, UNSURE flag
            0-8 = opened with adjacent count
            9 = visible mine (opened, or any mine after game end)
    """
    obs = np.full((state.height, state.width), HIDDEN, dtype=np.int8)
    for y, row in enumerate(player_view(state)):
        for x, visible in enumerate(row):
            obs[y, x] = _observation_code(visible)
    return obs


def _symbol(visible: VisibleCell) -> str:
    if isinstance(visible, Flag):
        return _FLAG_SYMBOLS[visible]
    if isinstance(visible, Empty):
        return str(visible.adjacent_mines) if visible.adjacent_mines else " "
    if isinstance(visible, Mine):
        return "*"
    raise TypeError(f"Unknown visible cell: {visible!r}")


def render(state: GameState) -> str:
    """Render board as ASCII string, one line per row."""
    lines = []
    for row in player_view(state):
        lines.append(" ".join(_symbol(visible) for visible in row))
    return "\n".join(lines)


def valid_actions(state: GameState) -> List[Point]:
    """
    Get points that can still be opened.

    Returns:
        List of (x, y) points, empty once the game is over.
    """
    if state.is_terminal:
        return []
    return [point for point in state.points() if not state.cell(point).is_opened]

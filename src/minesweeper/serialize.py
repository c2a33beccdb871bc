"""
JSON-safe encoding of game states.

``state_to_dict`` hides the content of unopened cells while a game is in
progress unless ``reveal`` is set, so its output can be sent to an
untrusted client. ``state_from_dict`` only accepts unredacted data.
"""
import json
from typing import Any, Dict, List

from .board import GameState, GameStatus, Grid, is_won, neighbors
from .cell import Cell, Empty, Flag, Mine, Opened, Unopened
from .errors import InvalidConfiguration


def _cell_to_dict(cell: Cell, hide_content: bool) -> Dict[str, Any]:
    if hide_content:
        content, adjacent = None, None
    elif isinstance(cell.content, Empty):
        content, adjacent = "empty", cell.content.adjacent_mines
    elif isinstance(cell.content, Mine):
        content, adjacent = "mine", None
    else:
        raise TypeError(f"Unknown cell content: {cell.content!r}")

    if isinstance(cell.state, Opened):
        reveal, flag = "opened", None
    elif isinstance(cell.state, Unopened):
        reveal, flag = "unopened", cell.state.marker.name.lower()
    else:
        raise TypeError(f"Unknown reveal state: {cell.state!r}")

    return {
        "content": content,
        "adjacent_mines": adjacent,
        "reveal": reveal,
        "flag": flag,
    }


def state_to_dict(state: GameState, reveal: bool = False) -> Dict[str, Any]:
    """
    Convert a game state to plain dicts and lists.

    Args:
        state: State to encode.
        reveal: Include the content of unopened cells even while the
            game is in progress.

    Returns:
        Dict with ``width``, ``height``, ``status`` and ``cells`` (rows of
        per-cell dicts).
    """
    hide = not reveal and not state.is_terminal
    return {
        "width": state.width,
        "height": state.height,
        "status": state.status.name.lower(),
        "cells": [
            [_cell_to_dict(cell, hide and not cell.is_opened) for cell in row]
            for row in state.grid
        ],
    }


def _cell_from_dict(data: Dict[str, Any]) -> Cell:
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Cell must be an object, got {data!r}")
    kind = data.get("content")
    if kind == "empty":
        adjacent = data.get("adjacent_mines")
        if isinstance(adjacent, bool) or not isinstance(adjacent, int):
            raise InvalidConfiguration(f"Bad adjacent_mines: {adjacent!r}")
        try:
            content = Empty(adjacent)
        except ValueError as error:
            raise InvalidConfiguration(str(error)) from error
    elif kind == "mine":
        content = Mine()
    elif kind is None:
        raise InvalidConfiguration("Cell content is hidden; need revealed data")
    else:
        raise InvalidConfiguration(f"Unknown cell content: {kind!r}")

    reveal = data.get("reveal")
    if reveal == "opened":
        state = Opened()
    elif reveal == "unopened":
        flag = data.get("flag") or "none"
        try:
            state = Unopened(Flag[str(flag).upper()])
        except KeyError:
            raise InvalidConfiguration(f"Unknown flag: {flag!r}") from None
    else:
        raise InvalidConfiguration(f"Unknown reveal state: {reveal!r}")

    return Cell(content, state)


def _check_counts(grid: Grid) -> None:
    """Every safe cell must count the mines around it."""
    height, width = len(grid), len(grid[0])
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell.is_mine:
                continue
            expected = sum(
                1 for nx, ny in neighbors(x, y, width, height) if grid[ny][nx].is_mine
            )
            if cell.adjacent_mines != expected:
                raise InvalidConfiguration(
                    f"Cell {(x, y)} has adjacent_mines={cell.adjacent_mines}, "
                    f"expected {expected}"
                )


def _check_status(status: GameStatus, grid: Grid) -> None:
    """The status must be one the transitions could have reached."""
    opened_mines = sum(1 for row in grid for cell in row if cell.is_mine and cell.is_opened)
    has_safe_cells = any(not cell.is_mine for row in grid for cell in row)

    if status is GameStatus.LOST:
        consistent = opened_mines == 1
    elif status is GameStatus.WON:
        consistent = opened_mines == 0 and is_won(grid)
    elif status is GameStatus.IN_PROGRESS:
        # an all-mine board starts in progress although nothing is left to open
        consistent = opened_mines == 0 and (not is_won(grid) or not has_safe_cells)
    else:
        raise TypeError(f"Unknown game status: {status!r}")

    if not consistent:
        raise InvalidConfiguration(
            f"Status {status.name} does not match the grid"
        )


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a game state from ``state_to_dict(state, reveal=True)`` output.

    Raises:
        InvalidConfiguration: If the data is redacted or malformed, its
            dimensions do not match, an adjacent count is wrong, or the
            status disagrees with the grid.
    """
    try:
        width = data["width"]
        height = data["height"]
        status_name = data["status"]
        rows: List[List[Dict[str, Any]]] = data["cells"]
    except (KeyError, TypeError) as error:
        raise InvalidConfiguration(f"Missing field: {error}") from error

    try:
        status = GameStatus[str(status_name).upper()]
    except KeyError:
        raise InvalidConfiguration(f"Unknown status: {status_name!r}") from None

    if not all(
        isinstance(value, int) and not isinstance(value, bool)
        for value in (width, height)
    ):
        raise InvalidConfiguration("Board dimensions must be integers")
    if width < 1 or height < 1:
        raise InvalidConfiguration("Board dimensions must be positive")
    if not isinstance(rows, list) or len(rows) != height or any(
        not isinstance(row, list) or len(row) != width for row in rows
    ):
        raise InvalidConfiguration(
            f"Cells do not form a {width}x{height} grid"
        )

    grid = tuple(tuple(_cell_from_dict(cell) for cell in row) for row in rows)
    _check_counts(grid)
    _check_status(status, grid)
    return GameState(status=status, grid=grid)


def dumps(state: GameState, reveal: bool = False) -> str:
    """Encode a game state as a JSON string."""
    return json.dumps(state_to_dict(state, reveal=reveal))


def loads(text: str) -> GameState:
    """Decode a game state from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise InvalidConfiguration(f"Invalid JSON: {error}") from error
    return state_from_dict(data)

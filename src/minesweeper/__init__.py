"""
Minesweeper engine package.

Provides immutable game states, mine placement, win detection and the
open/flag transitions, plus player views and a Gymnasium wrapper.
"""
from .cell import Cell, CellContent, Empty, Flag, Mine, Opened, RevealState, Unopened
from .board import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    BoardConfig,
    GameState,
    GameStatus,
    Grid,
    Point,
    generate,
    is_won,
    neighbors,
    new_game,
    open_cell,
    random_coordinates,
    set_flag,
)
from .errors import InvalidConfiguration, InvalidCoordinate, MinesweeperError
from .view import get_observation, player_view, render, valid_actions, visible_cell
from .serialize import dumps, loads, state_from_dict, state_to_dict
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellContent",
    "Empty",
    "Flag",
    "Mine",
    "Opened",
    "RevealState",
    "Unopened",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "BoardConfig",
    "GameState",
    "GameStatus",
    "Grid",
    "Point",
    "generate",
    "is_won",
    "neighbors",
    "new_game",
    "open_cell",
    "random_coordinates",
    "set_flag",
    "InvalidConfiguration",
    "InvalidCoordinate",
    "MinesweeperError",
    "get_observation",
    "player_view",
    "render",
    "valid_actions",
    "visible_cell",
    "dumps",
    "loads",
    "state_from_dict",
    "state_to_dict",
    "MinesweeperEnv",
    "make_vec_env",
]

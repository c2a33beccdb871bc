"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Add src and the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from minesweeper import (
    BoardConfig,
    Cell,
    Empty,
    GameState,
    GameStatus,
    Mine,
    neighbors,
)


def build_state(layout: List[str]) -> GameState:
    """
    Build an in-progress state from rows of ``*`` (mine) and ``.`` (safe).

    Adjacent counts are computed from the layout.
    """
    height = len(layout)
    width = len(layout[0])
    mines = {
        (x, y)
        for y, row in enumerate(layout)
        for x, char in enumerate(row)
        if char == "*"
    }
    grid = []
    for y in range(height):
        row = []
        for x in range(width):
            if (x, y) in mines:
                row.append(Cell(Mine()))
            else:
                count = len(neighbors(x, y, width, height) & mines)
                row.append(Cell(Empty(count)))
        grid.append(tuple(row))
    return GameState(status=GameStatus.IN_PROGRESS, grid=tuple(grid))


# ============================================================================
# State Fixtures
# ============================================================================

@pytest.fixture
def make_state() -> Callable[[List[str]], GameState]:
    """Factory building hand-laid boards."""
    return build_state


@pytest.fixture
def small_state() -> GameState:
    """3x3 board with a single mine in the top-left corner."""
    return build_state([
        "*..",
        "...",
        "...",
    ])


@pytest.fixture
def mine_free_state() -> GameState:
    """2x2 board with no mines."""
    return build_state([
        "..",
        "..",
    ])


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def tiny_config() -> BoardConfig:
    """3x3 board with one mine."""
    return BoardConfig(3, 3, 1)

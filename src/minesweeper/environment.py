"""
Gymnasium environment wrapper for Minesweeper.

Drives the immutable game engine through a standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, GameState, GameStatus, Point, new_game, open_cell
from .view import FLAGGED_UNSURE, MINE, get_observation, render, valid_actions


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array, see ``view.get_observation``.

    Actions:
        Discrete action space of size width * height.
        Action i opens the cell at (i % width, i // width).

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already opened)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self._rng = random.Random()
        self.state: GameState = new_game(self.config, self._rng)

        self.observation_space = spaces.Box(
            low=FLAGGED_UNSURE,
            high=MINE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.state = new_game(self.config, self._rng)
        self._steps = 0

        return get_observation(self.state), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        point = self._action_to_point(int(action))
        self._steps += 1

        reward = self._apply(point)

        observation = get_observation(self.state)
        terminated = self.state.is_terminal
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_point(self, action: int) -> Point:
        """Convert flat action index to (x, y) point."""
        return action % self.config.width, action // self.config.width

    def _apply(self, point: Point) -> float:
        """Open ``point`` and return the reward for doing so."""
        previous = self.state
        self.state = open_cell(previous, point)

        if self.state is previous:
            return -0.1
        if self.state.status is GameStatus.WON:
            return 10.0
        if self.state.status is GameStatus.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "opened": self.state.opened_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.state.status.name,
            "valid_actions": len(valid_actions(self.state)),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render(self.state)
        if self.render_mode == "human":
            print(render(self.state))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in valid_actions(self.state):
            mask[y * self.config.width + x] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
    asynchronous: bool = True,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel training.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.
        asynchronous: Run each environment in its own process.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    env_fns = [make_env for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)

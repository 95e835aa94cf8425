"""
Gymnasium environment wrapper for Minesweeper.

Plays a game session headlessly through a standard RL interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .render import render_board, render_stats
from .session import MISSED, REVEALED_MINE, GameSession


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = missed mine (after a loss)
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        the second half toggles a flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for losing the game
        - -0.1 for an ignored action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Game configuration (default: 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.session = GameSession()
        self.render_mode = render_mode

        self._num_cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=MISSED,
            high=REVEALED_MINE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_cells)

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
            options: ``{"snapshot": dict}`` replays a saved game instead
                of planting a new one.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session.rng = self.np_random

        snapshot = (options or {}).get("snapshot")
        if snapshot is None:
            self.session.new_game(self.config)
        else:
            shape = (snapshot.get("rows"), snapshot.get("cols"))
            if shape != (self.config.rows, self.config.cols):
                raise ValueError(
                    f"Snapshot is {shape[0]}x{shape[1]}, environment is "
                    f"{self.config.rows}x{self.config.cols}"
                )
            self.session.restore(snapshot)
        self._steps = 0

        return self.session.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal, or cell index + rows * cols to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._apply_action(int(action))

        observation = self.session.observation()
        terminated = not self.session.is_active
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_move(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        is_flag = action >= self._num_cells
        cell = action % self._num_cells
        return is_flag, cell // self.config.cols, cell % self.config.cols

    def _apply_action(self, action: int) -> float:
        """Perform the move and score it."""
        is_flag, row, col = self._action_to_move(action)
        if is_flag:
            result = self.session.toggle_flag(row, col)
        else:
            result = self.session.reveal(row, col)

        if not result.accepted:
            return -0.1
        if result.outcome is not None:
            return 10.0 if result.outcome.is_win else -10.0
        return 0.0 if is_flag else 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        if self.session.result is not None:
            game_state = self.session.result.outcome.name
        else:
            game_state = "PLAYING"

        return {
            "steps": self._steps,
            "revealed": len(self.session.revealed),
            "flagged": len(self.session.flagged),
            "mines_remaining": board.mines_remaining,
            "game_state": game_state,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.session.is_active:
            return mask

        for row, col in self.session.board.positions():
            action = row * self.config.cols + col
            if (row, col) in self.session.revealed:
                continue
            if (row, col) not in self.session.flagged:
                mask[action] = True
            mask[action + self._num_cells] = True
        return mask

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_board(self.session) + "\n" + render_stats(self.session)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

"""
Gymnasium environment wrapper for the minesweeper game.

Provides a standard step interface so agents can drive MineGame.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, MineBoard, generate_layout
from .console import render_board
from .errors import ContractViolation
from .game import GameState, MineGame, TurnResult


# ============================================================================
# Rewards
# ============================================================================

SAFE_REWARD = 1.0
WIN_REWARD = 10.0
LOSS_REWARD = -10.0
FLAG_REWARD = 0.0
INVALID_REWARD = -0.1


# ============================================================================
# Floodsweep Environment
# ============================================================================

class FloodsweepEnv(gym.Env):
    """
    Gymnasium environment for the minesweeper game.

    Observation:
        (height, width) int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = selected cell (never left pending between steps)
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals (i % width, i // width);
        the remaining actions toggle a flag on the same positions.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9, 12% mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self._num_tiles = self.config.area

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_tiles)

        self._steps = 0
        self.game = self._new_game()

    def _new_game(self) -> MineGame:
        return MineGame(MineBoard(generate_layout(self.config, self.np_random)))

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a freshly generated layout.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game = self._new_game()
        self._steps = 0
        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Select a tile and confirm the chosen action on it.

        Args:
            action: Encoded reveal or flag action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y, flag = self._decode_action(int(action))
        self._steps += 1

        try:
            self.game.select_tile(x, y)
        except ContractViolation:
            reward = INVALID_REWARD
        else:
            if flag:
                self.game.confirm_flag()
                reward = FLAG_REWARD
            else:
                reward = self._reveal_reward(self.game.confirm_reveal())

        terminated = not self.game.is_playing
        return self.game.get_observation(), reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[int, int, bool]:
        """Convert flat action index to (x, y, is_flag)."""
        flag = action >= self._num_tiles
        index = action % self._num_tiles
        return index % self.config.width, index // self.config.width, flag

    @staticmethod
    def _reveal_reward(result: TurnResult) -> float:
        if result.refused:
            return INVALID_REWARD
        if result.state == GameState.WON:
            return WIN_REWARD
        if result.state == GameState.LOST:
            return LOSS_REWARD
        return SAFE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "unrevealed": self.game.num_unrevealed,
            "flagged": self.game.num_flagged,
            "game_state": self.game.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.game.is_playing:
            return mask
        obs = self.game.get_observation().ravel()
        mask[: self._num_tiles] = obs == -1
        mask[self._num_tiles:] = (obs == -1) | (obs == -2)
        return mask

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.game.visible_board)
        if self.render_mode == "human":
            print(render_board(self.game.visible_board))
        return None

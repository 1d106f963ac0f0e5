"""
Unit tests for the Gymnasium environment.

Tests spaces, reset/step semantics, rewards and the action mask.
"""
import pytest
from floodsweep import BoardConfig, FloodsweepEnv, MineBoard, MineGame
from floodsweep.environment import (
    FLAG_REWARD, INVALID_REWARD, LOSS_REWARD, SAFE_REWARD, WIN_REWARD,
)


@pytest.fixture
def env() -> FloodsweepEnv:
    """Create a 5x3 environment with a fixed layout."""
    environment = FloodsweepEnv(BoardConfig(5, 3, 20), render_mode="ansi")
    environment.reset(seed=0)
    environment.game = MineGame(MineBoard.from_rows([
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
    ]))
    return environment


def action_for(env: FloodsweepEnv, x: int, y: int, flag: bool = False) -> int:
    index = y * env.config.width + x
    return index + (env.config.area if flag else 0)


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(self) -> None:
        """There is one reveal and one flag action per tile."""
        env = FloodsweepEnv(BoardConfig(4, 3, 10))
        assert env.action_space.n == 24

    def test_reset_observation_in_space(self) -> None:
        """The reset observation fits the observation space."""
        env = FloodsweepEnv(BoardConfig(4, 3, 10))
        obs, info = env.reset(seed=1)
        assert env.observation_space.contains(obs)
        assert obs.shape == (3, 4)
        assert info["game_state"] == "PLAYING"

    def test_seeded_reset_is_reproducible(self) -> None:
        """The same seed gives the same mine layout."""
        first = FloodsweepEnv(BoardConfig(6, 6, 20))
        second = FloodsweepEnv(BoardConfig(6, 6, 20))
        first.reset(seed=42)
        second.reset(seed=42)
        assert first.game.board.mine_positions() == second.game.board.mine_positions()

    def test_selected_code_in_space(self, env: FloodsweepEnv) -> None:
        """A pending selection shows as -3 and still fits the space."""
        env.game.select_tile(1, 1)
        obs = env.game.get_observation()
        assert obs[1, 1] == -3
        assert env.observation_space.contains(obs)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test step rewards and termination."""

    def test_safe_reveal_reward(self, env: FloodsweepEnv) -> None:
        """Revealing a safe tile earns the safe reward."""
        obs, reward, terminated, truncated, info = env.step(action_for(env, 0, 1))
        assert reward == SAFE_REWARD
        assert terminated is False
        assert truncated is False
        assert obs[1, 1] == 3
        assert info["unrevealed"] == 9

    def test_mine_reveal_terminates(self, env: FloodsweepEnv) -> None:
        """Revealing a mine ends the episode with the loss reward."""
        _, reward, terminated, _, info = env.step(action_for(env, 2, 0))
        assert reward == LOSS_REWARD
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_win_reward(self, env: FloodsweepEnv) -> None:
        """Clearing both sides wins."""
        env.step(action_for(env, 0, 0))
        _, reward, terminated, _, _ = env.step(action_for(env, 4, 0))
        assert reward == WIN_REWARD
        assert terminated is True

    def test_flag_action(self, env: FloodsweepEnv) -> None:
        """Flag actions toggle a flag without reward."""
        obs, reward, _, _, info = env.step(action_for(env, 2, 1, flag=True))
        assert reward == FLAG_REWARD
        assert obs[1, 2] == -2
        assert info["flagged"] == 1

    def test_revealing_flag_is_invalid(self, env: FloodsweepEnv) -> None:
        """A flagged tile cannot be revealed."""
        env.step(action_for(env, 2, 1, flag=True))
        _, reward, terminated, _, _ = env.step(action_for(env, 2, 1))
        assert reward == INVALID_REWARD
        assert terminated is False

    def test_repeat_reveal_is_invalid(self, env: FloodsweepEnv) -> None:
        """Revealing an already revealed tile is penalised."""
        env.step(action_for(env, 1, 1))
        _, reward, _, _, _ = env.step(action_for(env, 1, 1))
        assert reward == INVALID_REWARD


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test the valid action mask."""

    def test_new_game_mask(self, env: FloodsweepEnv) -> None:
        """Every action is valid on a fresh board."""
        assert env.get_action_mask().all()

    def test_revealed_tiles_masked(self, env: FloodsweepEnv) -> None:
        """Revealed tiles cannot be revealed or flagged."""
        env.step(action_for(env, 0, 1))
        mask = env.get_action_mask()
        assert not mask[action_for(env, 0, 1)]
        assert not mask[action_for(env, 0, 1, flag=True)]
        assert mask[action_for(env, 4, 1)]

    def test_flagged_tile_can_only_be_unflagged(self, env: FloodsweepEnv) -> None:
        """A flagged tile allows the flag action only."""
        env.step(action_for(env, 3, 0, flag=True))
        mask = env.get_action_mask()
        assert not mask[action_for(env, 3, 0)]
        assert mask[action_for(env, 3, 0, flag=True)]

    def test_mask_empty_after_game_over(self, env: FloodsweepEnv) -> None:
        """No action is valid once the game has ended."""
        env.step(action_for(env, 2, 2))
        assert not env.get_action_mask().any()


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test ansi rendering."""

    def test_ansi_render(self, env: FloodsweepEnv) -> None:
        """ansi mode returns the bordered board text."""
        text = env.render()
        assert text.splitlines()[1] == "│-----│"

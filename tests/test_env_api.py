"""
Tests for Gymnasium environment API.
"""

from pathlib import Path

import pytest
import numpy as np
import yaml

from raftrush.raft_core import config_loader
from raftrush.raft_core.config_loader import load_config
from raftrush.raft_core.entities import Rock
from raftrush.raft_core.env_gym import RaftEnv


STAY = np.array([0, 0], dtype=np.int8)
LEFT = np.array([1, 0], dtype=np.int8)
RIGHT = np.array([0, 1], dtype=np.int8)
BOTH = np.array([1, 1], dtype=np.int8)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = RaftEnv()
    yield env
    env.close()


@pytest.fixture
def short_config_path(tmp_path):
    """Config copy with a very short episode cap."""
    path = Path(config_loader.__file__).parent.parent / "game_config.yaml"
    with open(path) as f:
        raw = yaml.safe_load(f)
    raw["caps"]["max_frames"] = 30
    out = tmp_path / "game_config.yaml"
    out.write_text(yaml.safe_dump(raw))
    return str(out)


class TestRaftEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        for key in ("raft_x", "raft_y", "score", "game_over", "rock_count",
                    "nearest_rock_dx", "nearest_rock_dy"):
            assert key in obs

        max_rocks = env.config.caps.max_rocks
        assert obs["rock_x"].shape == (max_rocks,)
        assert obs["rock_y"].shape == (max_rocks,)
        assert obs["rock_mask"].shape == (max_rocks,)
        assert "board_rgb" not in obs

    def test_initial_observation(self, env):
        """Fresh episode: centered raft, no rocks, score 0."""
        obs, _ = env.reset(seed=42)

        assert obs["raft_x"] == 120
        assert obs["raft_y"] == 370
        assert obs["score"] == 0
        assert obs["game_over"] == 0
        assert obs["rock_count"] == 0
        assert not obs["rock_mask"].any()
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(STAY)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, (int, float))
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert isinstance(info, dict)

    def test_reward_is_always_zero(self, env):
        """Environment reward should always be 0.0."""
        env.reset(seed=42)

        for _ in range(100):
            _, reward, terminated, truncated, _ = env.step(env.action_space.sample())
            assert reward == 0.0

            if terminated or truncated:
                env.reset()

    def test_info_contains_score(self, env):
        """Info dict should contain score and delta_score."""
        env.reset(seed=42)

        _, _, _, _, info = env.step(STAY)

        assert "score" in info
        assert "delta_score" in info
        assert "collided" in info

    def test_actions_move_raft(self, env):
        """Left and right flags steer; both together cancel."""
        env.reset(seed=42)

        obs, *_ = env.step(LEFT)
        assert obs["raft_x"] == 115
        obs, *_ = env.step(RIGHT)
        assert obs["raft_x"] == 120
        obs, *_ = env.step(BOTH)
        assert obs["raft_x"] == 120

    def test_list_action_accepted(self, env):
        env.reset(seed=42)
        obs, *_ = env.step([0, 1])
        assert obs["raft_x"] == 125

    def test_invalid_action(self, env):
        """Actions must carry exactly two flags."""
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step([1, 0, 1])

    def test_rocks_arrive_over_time(self, env, config):
        """The spawn timer advances with each frame."""
        env.reset(seed=42)
        env.game.raft.x = 0

        frames = int(config.spawn.interval_ms / config.timing.frame_ms) + 5
        for _ in range(frames):
            obs, _, terminated, _, _ = env.step(STAY)
            if terminated:
                break

        assert env.game.spawner.spawned >= 1

    def test_collision_terminates(self, env):
        """A hit ends the episode."""
        env.reset(seed=42)
        env.game.rocks.append(Rock(x=125, y=367, width=70, height=70, speed=3))

        obs, _, terminated, truncated, info = env.step(STAY)

        assert terminated
        assert not truncated
        assert info["collided"]
        assert obs["game_over"] == 1

    def test_truncation_at_frame_cap(self, short_config_path):
        """Episodes are cut off at caps.max_frames."""
        env = RaftEnv(config_path=short_config_path)
        env.reset(seed=42)

        truncated = False
        steps = 0
        while not truncated:
            _, _, terminated, truncated, _ = env.step(STAY)
            assert not terminated
            steps += 1

        assert steps == 30
        env.close()

    def test_reset_after_game_over(self, env):
        """Reset starts a fresh run even from GameOver."""
        env.reset(seed=42)
        env.game.rocks.append(Rock(x=125, y=367, width=70, height=70, speed=3))
        env.step(STAY)

        obs, info = env.reset(seed=1)

        assert obs["game_over"] == 0
        assert obs["rock_count"] == 0
        assert info["frames"] == 0

    def test_deterministic_with_seed(self):
        """Same seed and actions give the same rocks."""
        env1 = RaftEnv()
        env2 = RaftEnv()
        env1.reset(seed=123)
        env2.reset(seed=123)

        for _ in range(200):
            obs1, _, t1, tr1, _ = env1.step(LEFT)
            obs2, _, t2, tr2, _ = env2.step(LEFT)

            np.testing.assert_array_equal(obs1["rock_x"], obs2["rock_x"])
            np.testing.assert_array_equal(obs1["rock_y"], obs2["rock_y"])
            assert t1 == t2

            if t1 or tr1:
                break

        env1.close()
        env2.close()

    def test_image_observation(self):
        """image_obs adds an RGB frame of the requested size."""
        env = RaftEnv(image_obs=True, image_width=160, image_height=240)
        obs, _ = env.reset(seed=0)

        assert obs["board_rgb"].shape == (240, 160, 3)
        assert obs["board_rgb"].dtype == np.uint8
        env.close()

    def test_rgb_array_render(self):
        env = RaftEnv(render_mode="rgb_array")
        env.reset(seed=0)

        frame = env.render()

        assert frame.shape == (480, 320, 3)
        env.close()

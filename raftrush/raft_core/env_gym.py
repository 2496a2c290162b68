"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the raft game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from raftrush.raft_core.config_loader import GameConfig, load_config
from raftrush.raft_core.driver import SpawnTimer
from raftrush.raft_core.events import InputIntent
from raftrush.raft_core.game import CoreGame
from raftrush.raft_core.state_snapshot import SnapshotBuilder


class RaftEnv(gym.Env):
    """
    Raft dodging game as a Gymnasium environment.

    Action Space:
        MultiBinary(2): [move_left, move_right]. Both flags are independent;
        holding both cancels out.

    Observation Space:
        Dict with raft position, score, phase and padded rock arrays.

    Step:
        One rendered frame. The spawn timer advances by 1000 / target_fps ms,
        so rocks arrive at the same rate as in the interactive game.

    Reward:
        Always 0.0. Use info["delta_score"].
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            image_width: Observation image width. Field width if None.
            image_height: Observation image height. Field height if None.
            debug: If True, prints per-step details.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._debug = debug

        self._img_width = image_width or self._config.field.width
        self._img_height = image_height or self._config.field.height

        self._game = CoreGame(config=self._config)
        self._spawn_timer = SpawnTimer(self._config.spawn.interval_ms)
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._frame_ms = self._config.timing.frame_ms

        # Renderers (lazy)
        self._renderer = None
        self._window = None
        self._window_renderer = None
        self._clock = None

        self.action_space = spaces.MultiBinary(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] RaftEnv initialized")
            print(f"[DEBUG]   Field: {self._config.field.width}x{self._config.field.height}")
            print(f"[DEBUG]   Spawn interval: {self._config.spawn.interval_ms} ms")
            print(f"[DEBUG]   Frame: {self._frame_ms:.2f} ms")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_rocks = self._config.caps.max_rocks
        field = self._config.field
        far = float(max(field.width, field.height) * 2)

        obs_dict = {
            "raft_x": spaces.Box(low=0, high=field.width, shape=(), dtype=np.float32),
            "raft_y": spaces.Box(low=0, high=field.height, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "game_over": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "rock_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),

            "field_width": spaces.Box(low=0, high=10000, shape=(), dtype=np.float32),
            "field_height": spaces.Box(low=0, high=10000, shape=(), dtype=np.float32),

            "nearest_rock_dx": spaces.Box(low=-far, high=far, shape=(), dtype=np.float32),
            "nearest_rock_dy": spaces.Box(low=-far, high=far, shape=(), dtype=np.float32),

            "rock_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_rocks,), dtype=np.float32),
            "rock_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_rocks,), dtype=np.float32),
            "rock_mask": spaces.MultiBinary(max_rocks),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for rock placement.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        state = self._game.reset(seed=seed)
        self._spawn_timer = SpawnTimer(self._config.spawn.interval_ms)

        obs = self._state_to_obs(state)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[np.ndarray, Tuple[int, int], list]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: [move_left, move_right] flags.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        intent = self._action_to_intent(action)
        self._game.intent.left = intent.left
        self._game.intent.right = intent.right

        for _ in range(self._spawn_timer.advance(self._frame_ms)):
            self._game.tick_spawn()

        result = self._game.tick_frame()

        terminated = self._game.is_over
        truncated = (not terminated) and self._game.frames >= self._config.caps.max_frames

        obs = self._state_to_obs(self._game.state)
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["collided"] = result.collided

        if self._debug:
            print(f"[DEBUG] Frame {self._game.frames}: action=({int(intent.left)}, {int(intent.right)}), "
                  f"raft_x={self._game.raft.x:.1f}, rocks={len(self._game.rocks)}, "
                  f"delta_score={result.delta_score}")
            if terminated:
                print(f"[DEBUG] TERMINATED: collision, score={self._game.score}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    @staticmethod
    def _action_to_intent(action) -> InputIntent:
        flags = np.asarray(action).reshape(-1)
        if flags.shape[0] != 2:
            raise ValueError(f"Action must have 2 flags [left, right], got shape {np.shape(action)}")
        return InputIntent(left=bool(flags[0]), right=bool(flags[1]))

    def _state_to_obs(self, state) -> Dict[str, np.ndarray]:
        board_rgb = self._render_to_array() if self._image_obs else None
        return self._snapshot_builder.build(state, board_rgb=board_rgb).to_obs_dict()

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._renderer is None:
            from raftrush.raft_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            import pygame
            from raftrush.raft_core.render_pygame import PygameRenderer
            from raftrush.raft_core.sprite_loader import AssetLoader

            if self._window_renderer is None:
                pygame.init()
                self._window = pygame.display.set_mode(
                    (self._config.field.width, self._config.field.height)
                )
                assets = AssetLoader(self._config)
                assets.load()
                self._window_renderer = PygameRenderer(self._config, assets, show_controls=False)
                pygame.display.set_caption("Raft Rush")
                self._clock = pygame.time.Clock()

            pygame.event.pump()
            intent = self._game.intent
            self._window_renderer.render(
                self._window,
                self._game.get_render_data(),
                held=(intent.left, intent.right)
            )
            pygame.display.flip()
            self._clock.tick(self.metadata["render_fps"])
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
        if self._window_renderer is not None:
            import pygame
            self._window_renderer.close()
            self._window_renderer = None
            self._window = None
            pygame.display.quit()

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

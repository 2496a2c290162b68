"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.state import GameState


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Rock arrays are fixed-size with a mask. Rocks beyond the array width are
    dropped from the observation (lowest rocks first are kept).
    """
    raft_x: float
    raft_y: float
    score: int
    game_over: bool
    rock_count: int

    # Field info (for normalization)
    field_width: float
    field_height: float

    # Derived
    nearest_rock_dx: float        # Horizontal gap from raft center to closest threat
    nearest_rock_dy: float        # Vertical gap from rock bottom to raft top

    # Rock arrays (fixed size, padded)
    rock_x: np.ndarray            # (MAX_ROCKS,) float32
    rock_y: np.ndarray            # (MAX_ROCKS,) float32
    rock_mask: np.ndarray         # (MAX_ROCKS,) bool

    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "raft_x": np.array(self.raft_x, dtype=np.float32),
            "raft_y": np.array(self.raft_y, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "game_over": np.array(int(self.game_over), dtype=np.int8),
            "rock_count": np.array(self.rock_count, dtype=np.int32),

            "field_width": np.array(self.field_width, dtype=np.float32),
            "field_height": np.array(self.field_height, dtype=np.float32),

            "nearest_rock_dx": np.array(self.nearest_rock_dx, dtype=np.float32),
            "nearest_rock_dy": np.array(self.nearest_rock_dy, dtype=np.float32),

            "rock_x": self.rock_x,
            "rock_y": self.rock_y,
            "rock_mask": self.rock_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds game state snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_rocks = config.caps.max_rocks

    @property
    def max_rocks(self) -> int:
        return self._max_rocks

    def build(
        self,
        state: GameState,
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot of the current state.

        Args:
            state: Game state to capture.
            board_rgb: Optional rendered frame.

        Returns:
            GameSnapshot with fresh arrays.
        """
        field = self._config.field
        raft = state.raft

        rock_x = np.zeros(self._max_rocks, dtype=np.float32)
        rock_y = np.zeros(self._max_rocks, dtype=np.float32)
        rock_mask = np.zeros(self._max_rocks, dtype=bool)

        # Closest to the raft first
        rocks = sorted(state.rocks, key=lambda r: -r.y)[:self._max_rocks]
        for i, rock in enumerate(rocks):
            rock_x[i] = rock.x
            rock_y[i] = rock.y
            rock_mask[i] = True

        dx, dy = self._nearest_threat(state)

        return GameSnapshot(
            raft_x=raft.x,
            raft_y=raft.y,
            score=state.score,
            game_over=state.is_over,
            rock_count=len(state.rocks),
            field_width=float(field.width),
            field_height=float(field.height),
            nearest_rock_dx=dx,
            nearest_rock_dy=dy,
            rock_x=rock_x,
            rock_y=rock_y,
            rock_mask=rock_mask,
            board_rgb=board_rgb
        )

    def _nearest_threat(self, state: GameState):
        """
        Offset to the lowest rock still above the raft's bottom edge.

        Returns (0, field_height) when nothing is approaching.
        """
        raft = state.raft
        raft_center = raft.x + raft.width / 2
        raft_bottom = raft.y + raft.height

        approaching = [r for r in state.rocks if r.y < raft_bottom]
        if not approaching:
            return 0.0, float(self._config.field.height)

        rock = max(approaching, key=lambda r: r.y)
        dx = (rock.x + rock.width / 2) - raft_center
        dy = raft.y - (rock.y + rock.height)
        return float(dx), float(dy)

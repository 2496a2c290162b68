"""
Test suite for the observation snapshot.

Ensures snapshots are correctly shaped and typed, and that rock arrays
and the nearest-threat offsets follow the game state.
"""

import numpy as np
import pytest

from raftrush.raft_core.config_loader import load_config
from raftrush.raft_core.entities import Rock
from raftrush.raft_core.state import GameState, Phase
from raftrush.raft_core.state_snapshot import SnapshotBuilder


def rock_at(x, y):
    return Rock(x=x, y=y, width=70, height=70, speed=3)


class TestObservationAPI:
    """Verify all observation elements."""

    @pytest.fixture
    def config(self):
        return load_config()

    @pytest.fixture
    def builder(self, config):
        return SnapshotBuilder(config)

    @pytest.fixture
    def state(self, config):
        return GameState.initial(config)

    # =========================================================================
    # Scalars
    # =========================================================================

    def test_scalar_dtypes(self, builder, state):
        """Scalars are 0-d arrays with fixed dtypes."""
        obs = builder.build(state).to_obs_dict()

        assert obs["raft_x"].dtype == np.float32
        assert obs["raft_x"].shape == ()
        assert obs["score"].dtype == np.int64
        assert obs["game_over"].dtype == np.int8
        assert obs["rock_count"].dtype == np.int32

    def test_game_over_flag(self, builder, state):
        state.phase = Phase.GAME_OVER
        obs = builder.build(state).to_obs_dict()
        assert int(obs["game_over"]) == 1

    # =========================================================================
    # Rock arrays
    # =========================================================================

    def test_rock_arrays_padded(self, builder, state):
        """Unused slots are zero and masked out."""
        state.rocks.append(rock_at(10, 20))
        obs = builder.build(state).to_obs_dict()

        assert obs["rock_mask"].sum() == 1
        assert obs["rock_x"][0] == 10
        assert obs["rock_y"][0] == 20
        assert not obs["rock_x"][1:].any()

    def test_lowest_rock_first(self, builder, state):
        """Rocks are ordered closest to the raft first."""
        state.rocks.extend([rock_at(0, -70), rock_at(100, 200), rock_at(200, 50)])
        obs = builder.build(state).to_obs_dict()

        assert list(obs["rock_y"][:3]) == [200, 50, -70]

    def test_overflow_truncated(self, builder, state, config):
        """Rocks beyond max_rocks are dropped from the arrays but counted."""
        extra = config.caps.max_rocks + 3
        state.rocks.extend(rock_at(0, y) for y in range(extra))
        obs = builder.build(state).to_obs_dict()

        assert obs["rock_mask"].all()
        assert int(obs["rock_count"]) == extra

    # =========================================================================
    # Nearest threat
    # =========================================================================

    def test_no_threat(self, builder, state, config):
        """With nothing above the raft, dx is 0 and dy is the field height."""
        obs = builder.build(state).to_obs_dict()

        assert float(obs["nearest_rock_dx"]) == 0.0
        assert float(obs["nearest_rock_dy"]) == config.field.height

    def test_nearest_threat_offsets(self, builder, state):
        """Offsets point from the raft to the lowest approaching rock."""
        state.rocks.extend([rock_at(0, 0), rock_at(200, 100)])
        obs = builder.build(state).to_obs_dict()

        # Rock center 235, raft center 160; rock bottom 170, raft top 370
        assert float(obs["nearest_rock_dx"]) == 75.0
        assert float(obs["nearest_rock_dy"]) == 200.0

    def test_passed_rock_ignored(self, builder, state):
        """Rocks already below the raft are not threats."""
        state.rocks.extend([rock_at(0, 460), rock_at(160, 100)])
        obs = builder.build(state).to_obs_dict()

        assert float(obs["nearest_rock_dx"]) == 35.0

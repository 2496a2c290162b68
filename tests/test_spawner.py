"""
Tests for rock placement and the bounded retry policy.
"""

import pytest

from raftrush.raft_core.config_loader import load_config
from raftrush.raft_core.entities import Rock
from raftrush.raft_core.spawner import RockSpawner, bounded_retry
from raftrush.raft_core.state import GameState, Phase


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def state(config):
    return GameState.initial(config)


@pytest.fixture
def spawner(config):
    return RockSpawner(config, seed=42)


def rock_at(x, y):
    return Rock(x=x, y=y, width=70, height=70, speed=3)


class TestBoundedRetry:
    """Test the retry combinator."""

    def test_first_candidate_accepted(self):
        """No retry when the first draw passes."""
        result = bounded_retry(lambda: 5, lambda v: True, max_attempts=10)
        assert result.candidate == 5
        assert result.attempts == 1
        assert result.accepted

    def test_retries_until_accepted(self):
        """Keeps drawing until the predicate holds."""
        values = iter([1, 2, 3, 4])
        result = bounded_retry(lambda: next(values), lambda v: v >= 3, max_attempts=10)
        assert result.candidate == 3
        assert result.attempts == 3
        assert result.accepted

    def test_exhaustion_returns_last_candidate(self):
        """After max_attempts the last draw is returned, not an error."""
        values = iter(range(100))
        result = bounded_retry(lambda: next(values), lambda v: False, max_attempts=10)
        assert result.candidate == 9
        assert result.attempts == 10
        assert not result.accepted

    def test_invalid_bound(self):
        """At least one attempt is required."""
        with pytest.raises(ValueError):
            bounded_retry(lambda: 0, lambda v: True, max_attempts=0)


class TestRockSpawner:
    """Test spawn placement."""

    def test_spawns_at_top_edge(self, spawner, state, config):
        """New rock sits just above the field with configured size and speed."""
        rock = spawner.spawn(state)

        assert rock is not None
        assert rock.y == -config.rock.height
        assert rock.width == config.rock.width
        assert rock.speed == config.rock.speed
        assert state.rocks == [rock]

    def test_x_within_range(self, spawner, config):
        """Spawn X stays within [0, field_width - rock_width]."""
        for _ in range(200):
            state = GameState.initial(config)
            rock = spawner.spawn(state)
            assert 0 <= rock.x <= config.rock_max_x

    def test_no_horizontal_motion(self, spawner, state):
        """Spawned rocks keep their X (speed is vertical only)."""
        rock = spawner.spawn(state)
        x = rock.x
        for _ in range(10):
            rock.advance()
        assert rock.x == x

    def test_deterministic_with_seed(self, config):
        """Same seed should produce the same placements."""
        s1, s2 = RockSpawner(config, seed=7), RockSpawner(config, seed=7)
        st1, st2 = GameState.initial(config), GameState.initial(config)

        xs1 = [s1.spawn(st1).x for _ in range(20)]
        xs2 = [s2.spawn(st2).x for _ in range(20)]
        assert xs1 == xs2

    def test_no_spawn_while_game_over(self, spawner, state):
        """Spawner is a no-op in GameOver."""
        state.phase = Phase.GAME_OVER
        assert spawner.spawn(state) is None
        assert state.rocks == []
        assert spawner.spawned == 0

    def test_keeps_distance_from_fresh_rocks(self, config):
        """Accepted placements are at least one rock width from rocks in the top band."""
        for seed in range(50):
            spawner = RockSpawner(config, seed=seed)
            state = GameState.initial(config)
            state.rocks.append(rock_at(125, -70))

            rock = spawner.spawn(state)
            if spawner.forced == 0:
                assert abs(rock.x - 125) >= config.rock.width

    def test_rocks_below_band_do_not_block(self, spawner, config):
        """Rocks at y >= rock_height are ignored by the separation rule."""
        state = GameState.initial(config)
        for x in range(0, 260, 10):
            state.rocks.append(rock_at(x, 70))

        placement = spawner.choose_x(state.rocks)
        assert placement.accepted
        assert placement.attempts == 1

    def test_full_band_still_spawns(self, spawner, config):
        """If every spot is blocked the last candidate is used anyway."""
        state = GameState.initial(config)
        for x in range(0, 260, 50):
            state.rocks.append(rock_at(x, 0))

        placement = spawner.choose_x(state.rocks)
        assert not placement.accepted
        assert placement.attempts == config.spawn.max_attempts

        before = len(state.rocks)
        rock = spawner.spawn(state)
        assert rock is not None
        assert len(state.rocks) == before + 1
        assert spawner.forced == 1

    def test_reset_reseeds(self, config):
        """Reset with a seed restarts the placement sequence."""
        spawner = RockSpawner(config, seed=3)
        first = [spawner.spawn(GameState.initial(config)).x for _ in range(5)]

        spawner.reset(seed=3)
        again = [spawner.spawn(GameState.initial(config)).x for _ in range(5)]

        assert first == again
        assert spawner.spawned == 5

"""
Rock Spawner
============

Places new rocks along the top edge of the field, trying to keep them
apart from rocks that have only just entered.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.entities import Rock
from raftrush.raft_core.state import GameState

T = TypeVar("T")


@dataclass(frozen=True)
class RetryResult(Generic[T]):
    """Outcome of a bounded retry."""
    candidate: T
    attempts: int
    accepted: bool


def bounded_retry(
    generate: Callable[[], T],
    accept: Callable[[T], bool],
    max_attempts: int
) -> RetryResult[T]:
    """
    Draw candidates until one is accepted or attempts run out.

    Args:
        generate: Produces a new candidate.
        accept: Predicate a candidate must satisfy.
        max_attempts: Upper bound on draws (at least 1).

    Returns:
        The first accepted candidate, otherwise the last one drawn
        with accepted=False.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    candidate = generate()
    attempts = 1
    while not accept(candidate):
        if attempts >= max_attempts:
            return RetryResult(candidate, attempts, False)
        candidate = generate()
        attempts += 1
    return RetryResult(candidate, attempts, True)


class RockSpawner:
    """
    Spawns one rock per call at y = -rock_height.

    X is uniform in [0, field_width - rock_width). A candidate is rejected
    when a rock still inside the top band (y < rock_height) sits less than
    one rock width away horizontally. After max_attempts the last candidate
    is used anyway, so spawning never stalls.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._rock_width = config.rock.width
        self._rock_height = config.rock.height
        self._max_x = config.rock_max_x
        self._max_attempts = config.spawn.max_attempts

        self._spawned: int = 0
        self._forced: int = 0

    @property
    def spawned(self) -> int:
        """Rocks spawned since the last reset."""
        return self._spawned

    @property
    def forced(self) -> int:
        """Spawns that fell back to an overlapping position."""
        return self._forced

    def _is_clear(self, x: float, rocks: Iterable[Rock]) -> bool:
        """True if no freshly spawned rock is within one rock width of x."""
        for rock in rocks:
            if rock.y < self._rock_height and abs(rock.x - x) < self._rock_width:
                return False
        return True

    def choose_x(self, rocks: Iterable[Rock]) -> RetryResult[float]:
        """Pick a spawn X for the next rock."""
        rocks = list(rocks)
        return bounded_retry(
            generate=lambda: self._rng.random() * self._max_x,
            accept=lambda x: self._is_clear(x, rocks),
            max_attempts=self._max_attempts
        )

    def spawn(self, state: GameState) -> Optional[Rock]:
        """
        Add one rock to the state.

        Args:
            state: Shared game state. Mutated in place.

        Returns:
            The new rock, or None while the game is over.
        """
        if state.is_over:
            return None

        placement = self.choose_x(state.rocks)
        if not placement.accepted:
            self._forced += 1

        rock = Rock(
            x=placement.candidate,
            y=-float(self._rock_height),
            width=self._rock_width,
            height=self._rock_height,
            speed=self._config.rock.speed
        )
        state.rocks.append(rock)
        self._spawned += 1
        return rock

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset counters, optionally reseeding.

        Args:
            seed: New random seed. Keeps current stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._spawned = 0
        self._forced = 0

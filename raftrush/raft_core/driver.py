"""
Frame Driver
============

Runs the two game clocks on one thread: the spawn timer (fixed interval)
and the frame tick (once per rendered frame), then hands off to rendering.
"""

from __future__ import annotations

from typing import Callable, Optional

from raftrush.raft_core.engine import TickResult
from raftrush.raft_core.game import CoreGame


class SpawnTimer:
    """
    Fixed-interval timer driven by elapsed time.

    Never stopped once started; the spawner itself ignores ticks while the
    game is over. At most one tick fires per advance; time owed from a long
    stall carries over to the following calls.
    """

    def __init__(self, interval_ms: float):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval = float(interval_ms)
        self._accumulator = 0.0
        self._fired = 0

    @property
    def interval_ms(self) -> float:
        return self._interval

    @property
    def fired(self) -> int:
        """Total ticks fired."""
        return self._fired

    @property
    def pending_ms(self) -> float:
        """Time accumulated toward the next tick."""
        return self._accumulator

    def advance(self, elapsed_ms: float) -> int:
        """
        Add elapsed time.

        Returns:
            1 if a tick fell due, else 0.
        """
        self._accumulator += max(0.0, elapsed_ms)
        if self._accumulator < self._interval:
            return 0
        self._accumulator -= self._interval
        self._fired += 1
        return 1


class FrameDriver:
    """
    Owns the game timers and the frame hand-off.

    Nothing ticks until notify_assets_ready() has been called. Each frame:
    a due spawn tick runs first, then one simulation tick, then render(game)
    synchronously.
    """

    def __init__(
        self,
        game: CoreGame,
        render: Optional[Callable[[CoreGame], None]] = None
    ):
        self._game = game
        self._render = render
        self._spawn_timer = SpawnTimer(game.config.spawn.interval_ms)
        self._started = False

    @property
    def game(self) -> CoreGame:
        return self._game

    @property
    def started(self) -> bool:
        return self._started

    @property
    def spawn_timer(self) -> SpawnTimer:
        return self._spawn_timer

    def notify_assets_ready(self) -> None:
        """Start the timers. Further calls have no effect."""
        self._started = True

    def frame(self, elapsed_ms: float) -> Optional[TickResult]:
        """
        Run one frame.

        Args:
            elapsed_ms: Wall time since the previous frame.

        Returns:
            The engine result, or None before assets are ready.
        """
        if not self._started:
            return None

        for _ in range(self._spawn_timer.advance(elapsed_ms)):
            self._game.tick_spawn()

        result = self._game.tick_frame()

        if self._render is not None:
            self._render(self._game)

        return result

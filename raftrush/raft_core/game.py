"""
Core Game
=========

Main game orchestrator combining spawning, motion, collision, state
transitions, input events and music hooks.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Optional

from raftrush.raft_core.audio import MusicController
from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.engine import MotionEngine, TickResult
from raftrush.raft_core.entities import Raft, Rect, Rock, point_in_rect
from raftrush.raft_core.events import (
    GameEvent,
    InputIntent,
    MovePressed,
    MoveReleased,
    PointerPressed,
    RestartRequested,
    UserGesture,
)
from raftrush.raft_core.layout import restart_button_rect
from raftrush.raft_core.spawner import RockSpawner
from raftrush.raft_core.state import GameState, GameStateMachine, Phase


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Game state and the Playing/GameOver state machine
    - Rock spawner
    - Motion engine and collision detection
    - Input events and held movement intent
    - Music start/stop on restart and game over

    tick_frame() runs once per rendered frame, tick_spawn() once per spawn
    timer interval. Both are no-ops for the simulation while the game is over.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        music: Optional[MusicController] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for rock placement.
            music: Music hooks. Silent controller if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        # Initialize subsystems
        self._state = GameState.initial(config)
        self._machine = GameStateMachine(self._state, config)
        self._spawner = RockSpawner(config, seed)
        self._engine = MotionEngine(config)
        self._music = music if music is not None else MusicController()
        self._intent = InputIntent()
        self._events: Deque[GameEvent] = deque()

        self._machine.on_game_over(self._music.stop)
        self._machine.on_restart(self._music.start)

        self._frames: int = 0
        self._runs: int = 1

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> GameState:
        """Shared game state (read by renderers)."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def is_over(self) -> bool:
        """True while in GameOver."""
        return self._state.is_over

    @property
    def score(self) -> int:
        """Current score."""
        return self._state.score

    @property
    def raft(self) -> Raft:
        return self._state.raft

    @property
    def rocks(self) -> List[Rock]:
        return self._state.rocks

    @property
    def intent(self) -> InputIntent:
        """Held movement flags."""
        return self._intent

    @property
    def machine(self) -> GameStateMachine:
        return self._machine

    @property
    def spawner(self) -> RockSpawner:
        return self._spawner

    @property
    def music(self) -> MusicController:
        return self._music

    @property
    def frames(self) -> int:
        """Frames simulated in the current run."""
        return self._frames

    @property
    def runs(self) -> int:
        """Number of runs started, including the current one."""
        return self._runs

    def post_event(self, event: GameEvent) -> None:
        """Queue an input event for the next frame."""
        self._events.append(event)

    def process_events(self) -> None:
        """Apply all queued events in arrival order."""
        while self._events:
            self._handle_event(self._events.popleft())

    def _handle_event(self, event: GameEvent) -> None:
        if isinstance(event, UserGesture):
            self._music.unlock()
        elif isinstance(event, MovePressed):
            if self._state.is_playing:
                self._intent.set(event.direction, True)
        elif isinstance(event, MoveReleased):
            self._intent.set(event.direction, False)
        elif isinstance(event, RestartRequested):
            self.restart()
        elif isinstance(event, PointerPressed):
            if self._state.is_over and point_in_rect(event.x, event.y, self.restart_button):
                self.restart()

    @property
    def restart_button(self) -> Rect:
        """Hit region of the overlay restart button, in field coordinates."""
        return restart_button_rect(self._config.field.width, self._config.field.height)

    def tick_frame(self) -> TickResult:
        """
        Advance one frame: apply queued events, then update the simulation.

        Returns:
            TickResult from the engine (skipped while GameOver).
        """
        self.process_events()

        result = self._engine.update(self._state, self._intent)
        if not result.skipped:
            self._frames += 1
        if result.collided:
            self._machine.game_over()

        return result

    def tick_spawn(self) -> Optional[Rock]:
        """Spawn timer callback. Returns the new rock, or None while GameOver."""
        return self._spawner.spawn(self._state)

    def restart(self) -> bool:
        """Restart from GameOver. No-op (returns False) while Playing."""
        restarted = self._machine.restart()
        if restarted:
            self._frames = 0
            self._runs += 1
        return restarted

    def reset(self, seed: Optional[int] = None) -> GameState:
        """
        Reset to a fresh run regardless of phase.

        Args:
            seed: New random seed. Uses previous if None.

        Returns:
            The (same, reset in place) game state.
        """
        if seed is not None:
            self._seed = seed

        self._machine.hard_reset()
        self._spawner.reset(self._seed)
        self._intent.clear()
        self._events.clear()
        self._frames = 0
        return self._state

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "phase": self._state.phase.value,
            "frames": self._frames,
            "rock_count": len(self._state.rocks),
            "rocks_spawned": self._spawner.spawned,
            "forced_spawns": self._spawner.forced,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with field size, raft and rock rectangles, score and phase.
        """
        raft = self._state.raft
        button = self.restart_button
        return {
            "field_width": self._config.field.width,
            "field_height": self._config.field.height,
            "raft": {"x": raft.x, "y": raft.y, "width": raft.width, "height": raft.height},
            "rocks": [
                {"x": r.x, "y": r.y, "width": r.width, "height": r.height}
                for r in self._state.rocks
            ],
            "score": self._state.score,
            "game_over": self._state.is_over,
            "restart_button": (button.x, button.y, button.w, button.h),
        }

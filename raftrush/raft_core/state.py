"""
Game State
==========

Shared game state and the Playing / GameOver state machine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.entities import Raft, Rock


class Phase(Enum):
    """Game lifecycle phase."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """
    Mutable game state shared by the engine, spawner, renderer and input.

    Created once per game and reset in place on restart.
    """
    phase: Phase
    score: int
    raft: Raft
    rocks: List[Rock] = field(default_factory=list)

    @classmethod
    def initial(cls, config: GameConfig) -> "GameState":
        """Fresh state: centered raft, no rocks, score 0, Playing."""
        raft = Raft(
            x=config.raft_start_x,
            y=config.raft_y,
            width=config.raft.width,
            height=config.raft.height,
            speed=config.raft.speed
        )
        return cls(phase=Phase.PLAYING, score=0, raft=raft, rocks=[])

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


class GameStateMachine:
    """
    Owns phase transitions.

    - Playing -> GameOver: game_over(), called on collision
    - GameOver -> Playing: restart(), clears rocks, zeroes score, recenters raft

    Listeners fire after the transition has been applied.
    """

    def __init__(self, state: GameState, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._state = state
        self._config = config
        self._game_over_listeners: List[Callable[[], None]] = []
        self._restart_listeners: List[Callable[[], None]] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def on_game_over(self, callback: Callable[[], None]) -> None:
        """Register a callback for the Playing -> GameOver transition."""
        self._game_over_listeners.append(callback)

    def on_restart(self, callback: Callable[[], None]) -> None:
        """Register a callback for the GameOver -> Playing transition."""
        self._restart_listeners.append(callback)

    def game_over(self) -> bool:
        """
        End the run.

        Returns:
            True if the phase changed, False if already over.
        """
        if self._state.phase is Phase.GAME_OVER:
            return False

        self._state.phase = Phase.GAME_OVER
        for callback in self._game_over_listeners:
            callback()
        return True

    def restart(self) -> bool:
        """
        Start a new run from GameOver.

        Returns:
            True if restarted, False if the game was still Playing.
        """
        if self._state.phase is not Phase.GAME_OVER:
            return False

        self._state.rocks.clear()
        self._state.score = 0
        self._state.raft.x = self._config.raft_start_x
        self._state.phase = Phase.PLAYING

        for callback in self._restart_listeners:
            callback()
        return True

    def hard_reset(self) -> None:
        """Reset to a fresh run regardless of phase. Fires no listeners."""
        self._state.rocks.clear()
        self._state.score = 0
        self._state.raft.x = self._config.raft_start_x
        self._state.phase = Phase.PLAYING

"""
Motion Engine
=============

Advances the raft and the rocks by one frame, removes rocks that left the
field, and detects the collision that ends the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from raftrush.raft_core.collision import CollisionDetector
from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.entities import Rock
from raftrush.raft_core.events import InputIntent
from raftrush.raft_core.state import GameState


@dataclass
class TickResult:
    """Result of a single engine update."""
    removed: List[Rock] = field(default_factory=list)
    delta_score: int = 0
    collided_with: Optional[Rock] = None
    skipped: bool = False

    @property
    def collided(self) -> bool:
        return self.collided_with is not None


class MotionEngine:
    """
    Per-frame update, in fixed order:

    1. Move the raft by its speed for each held direction, then clamp
    2. Advance every rock by its own speed
    3. Drop rocks below the field, one point each
    4. Test the remaining rocks against the raft (padded hitboxes,
       first hit wins)

    Rocks removed in step 3 never take part in step 4.
    The engine reports a hit; the caller owns the phase change.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize engine.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._field_width = config.field.width
        self._field_height = config.field.height
        self._detector = CollisionDetector(config.collision.padding)

    def update(self, state: GameState, intent: InputIntent) -> TickResult:
        """
        Run one frame.

        Args:
            state: Shared game state. Mutated in place.
            intent: Held movement flags. Read only.

        Returns:
            TickResult. skipped=True and nothing changed while the game is over.
        """
        if state.is_over:
            return TickResult(skipped=True)

        self._move_raft(state, intent)

        for rock in state.rocks:
            rock.advance()

        removed = self._remove_exited(state)
        state.score += len(removed)

        hit = self._detector.first_hit(state.raft, state.rocks)

        return TickResult(
            removed=removed,
            delta_score=len(removed),
            collided_with=hit
        )

    def _move_raft(self, state: GameState, intent: InputIntent) -> None:
        raft = state.raft
        if intent.left:
            raft.x -= raft.speed
        if intent.right:
            raft.x += raft.speed
        raft.clamp_to(self._field_width)

    def _remove_exited(self, state: GameState) -> List[Rock]:
        """Split rocks into kept and exited in a single pass."""
        kept: List[Rock] = []
        removed: List[Rock] = []
        for rock in state.rocks:
            if rock.has_exited(self._field_height):
                removed.append(rock)
            else:
                kept.append(rock)
        state.rocks[:] = kept
        return removed

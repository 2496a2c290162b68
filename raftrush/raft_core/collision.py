"""
Collision Detection
===================

Padded axis-aligned rectangle tests between the raft and the rocks.
"""

from __future__ import annotations

from typing import Iterable, Optional

from raftrush.raft_core.entities import Entity, Rect, Rock


class CollisionDetector:
    """
    Raft-vs-rock collision detector.

    Both hitboxes are shrunk by the same padding before the overlap test so
    that sprites can visually graze each other without ending the run.
    """

    def __init__(self, padding: float):
        self._padding = padding

    @property
    def padding(self) -> float:
        return self._padding

    def padded_rect(self, entity: Entity) -> Rect:
        """Hitbox used for collision tests."""
        return entity.rect.shrink(self._padding)

    def overlaps(self, a: Entity, b: Entity) -> bool:
        """True if the padded hitboxes of a and b intersect."""
        return self.padded_rect(a).intersects(self.padded_rect(b))

    def first_hit(self, raft: Entity, rocks: Iterable[Rock]) -> Optional[Rock]:
        """
        Find the first rock hitting the raft.

        Args:
            raft: The player raft.
            rocks: Active rocks, in collection order.

        Returns:
            The first overlapping rock, or None. Later rocks are not checked.
        """
        raft_box = self.padded_rect(raft)
        for rock in rocks:
            if raft_box.intersects(self.padded_rect(rock)):
                return rock
        return None

"""
Entities
========

Axis-aligned rectangles for the raft and the rocks.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle (top-left origin, Y grows downward)."""
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def shrink(self, padding: float) -> "Rect":
        """Return this rectangle pulled inward by padding on every side."""
        return Rect(
            x=self.x + padding,
            y=self.y + padding,
            w=self.w - padding * 2,
            h=self.h - padding * 2
        )

    def intersects(self, other: "Rect") -> bool:
        """
        Strict overlap test.

        Rectangles that only share an edge do not intersect.
        """
        return (
            self.x < other.x + other.w
            and self.x + self.w > other.x
            and self.y < other.y + other.h
            and self.y + self.h > other.y
        )


def point_in_rect(px: float, py: float, rect: Rect) -> bool:
    """Hit test for buttons, inclusive on all four edges."""
    return rect.x <= px <= rect.x + rect.w and rect.y <= py <= rect.y + rect.h


@dataclass
class Entity:
    """
    A moving rectangle.

    speed is horizontal for the raft and vertical for rocks.
    """
    x: float
    y: float
    width: float
    height: float
    speed: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class Raft(Entity):
    """Player raft. Only ever moves horizontally."""

    def clamp_to(self, field_width: float) -> None:
        """Keep the raft inside [0, field_width - width]."""
        self.x = max(0.0, min(field_width - self.width, self.x))


@dataclass
class Rock(Entity):
    """Falling obstacle. X is fixed after spawn."""

    def advance(self) -> None:
        self.y += self.speed

    def has_exited(self, field_height: float) -> bool:
        """True once the rock's top edge is below the field."""
        return self.y > field_height

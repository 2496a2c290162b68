"""
Input Events
============

Event types delivered by the input collaborator and consumed by the game
once per frame, plus the held-direction intent read by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MovePressed:
    """A left/right control went down (key, touch or mouse)."""
    direction: Direction


@dataclass(frozen=True)
class MoveReleased:
    """A left/right control went up or the pointer left the button."""
    direction: Direction


@dataclass(frozen=True)
class RestartRequested:
    """Explicit restart. Only honored while the game is over."""


@dataclass(frozen=True)
class PointerPressed:
    """Click or tap on the field, in field coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class UserGesture:
    """Any first-party interaction; unlocks audio the first time."""


GameEvent = Union[MovePressed, MoveReleased, RestartRequested, PointerPressed, UserGesture]


@dataclass
class InputIntent:
    """
    Held movement flags.

    The flags are independent: holding both cancels out.
    """
    left: bool = False
    right: bool = False

    def set(self, direction: Direction, held: bool) -> None:
        if direction is Direction.LEFT:
            self.left = held
        else:
            self.right = held

    def clear(self) -> None:
        self.left = False
        self.right = False

"""
Overlay Layout
==============

Geometry of the game over overlay, shared by the renderer (to draw the
restart button) and the input handling (to hit-test it).
"""

from __future__ import annotations

from raftrush.raft_core.entities import Rect

BOX_MAX_WIDTH = 340
BOX_MARGIN = 40
BOX_HEIGHT = 180
BUTTON_WIDTH = 160
BUTTON_HEIGHT = 48
BUTTON_BOTTOM_GAP = 70  # Button top, measured up from the box bottom


def game_over_box(field_width: float, field_height: float) -> Rect:
    """Centered dialog box behind the game over text."""
    box_w = min(BOX_MAX_WIDTH, field_width - BOX_MARGIN)
    box_x = (field_width - box_w) / 2
    box_y = (field_height - BOX_HEIGHT) / 2
    return Rect(box_x, box_y, box_w, BOX_HEIGHT)


def restart_button_rect(field_width: float, field_height: float) -> Rect:
    """Restart button inside the game over box."""
    box = game_over_box(field_width, field_height)
    return Rect(
        x=field_width / 2 - BUTTON_WIDTH / 2,
        y=box.y + box.h - BUTTON_BOTTOM_GAP,
        w=BUTTON_WIDTH,
        h=BUTTON_HEIGHT
    )

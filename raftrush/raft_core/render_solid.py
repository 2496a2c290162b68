"""
Solid Renderer
==============

Fast numpy-based renderer that draws the raft and rocks as solid rectangles.
Used for headless RGB observations; no pygame required.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from raftrush.raft_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the field as flat-colored rectangles.

    Features:
    - River gradient background
    - Raft and rocks at sprite size, with the padded hitbox outlined
    - Darkened field and a restart button block when the game is over
    """

    def __init__(self, config: Optional[GameConfig] = None, show_hitboxes: bool = True):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            show_hitboxes: Whether to outline the padded collision boxes.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._show_hitboxes = show_hitboxes
        self._padding = config.collision.padding

        self._bg_top = np.array([79, 195, 247], dtype=np.float32)
        self._bg_bottom = np.array([2, 136, 209], dtype=np.float32)
        self._raft_color = np.array([150, 100, 50], dtype=np.uint8)
        self._rock_color = np.array([110, 110, 120], dtype=np.uint8)
        self._hitbox_color = np.array([255, 230, 80], dtype=np.uint8)
        self._button_color = np.array([255, 255, 255], dtype=np.uint8)

        self._bg_cache: Dict[tuple, np.ndarray] = {}

    def _background(self, width: int, height: int) -> np.ndarray:
        key = (width, height)
        if key not in self._bg_cache:
            t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]
            column = self._bg_top * (1 - t) + self._bg_bottom * t
            self._bg_cache[key] = np.repeat(column[:, None, :], width, axis=1).astype(np.uint8)
        return self._bg_cache[key]

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = self._background(width, height).copy()

        sx = width / render_data["field_width"]
        sy = height / render_data["field_height"]

        for rock in render_data["rocks"]:
            self._draw_entity(img, rock, sx, sy, self._rock_color)

        self._draw_entity(img, render_data["raft"], sx, sy, self._raft_color)

        if render_data.get("game_over"):
            img[:] = (img * 0.5).astype(np.uint8)
            bx, by, bw, bh = render_data["restart_button"]
            self._fill_rect(img, bx * sx, by * sy, bw * sx, bh * sy, self._button_color)

        return img

    def _draw_entity(
        self,
        img: np.ndarray,
        entity: Dict[str, float],
        sx: float,
        sy: float,
        color: np.ndarray
    ) -> None:
        x, y = entity["x"] * sx, entity["y"] * sy
        w, h = entity["width"] * sx, entity["height"] * sy
        self._fill_rect(img, x, y, w, h, color)

        if self._show_hitboxes:
            pad_x, pad_y = self._padding * sx, self._padding * sy
            self._outline_rect(
                img, x + pad_x, y + pad_y, w - 2 * pad_x, h - 2 * pad_y, self._hitbox_color
            )

    @staticmethod
    def _clip(img: np.ndarray, x: float, y: float, w: float, h: float):
        """Convert to integer pixel bounds clipped to the image."""
        img_h, img_w = img.shape[:2]
        x0 = max(0, int(round(x)))
        y0 = max(0, int(round(y)))
        x1 = min(img_w, int(round(x + w)))
        y1 = min(img_h, int(round(y + h)))
        return x0, y0, x1, y1

    def _fill_rect(self, img, x, y, w, h, color) -> None:
        x0, y0, x1, y1 = self._clip(img, x, y, w, h)
        if x1 > x0 and y1 > y0:
            img[y0:y1, x0:x1] = color

    def _outline_rect(self, img, x, y, w, h, color) -> None:
        x0, y0, x1, y1 = self._clip(img, x, y, w, h)
        if x1 <= x0 or y1 <= y0:
            return
        img[y0, x0:x1] = color
        img[y1 - 1, x0:x1] = color
        img[y0:y1, x0] = color
        img[y0:y1, x1 - 1] = color

    def close(self) -> None:
        self._bg_cache.clear()

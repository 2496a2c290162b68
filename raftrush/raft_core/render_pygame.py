"""
Pygame Renderer
===============

Draws the river, raft, rocks, score and the game over overlay to a pygame
surface. Below the field sits a strip with on-screen left/right buttons for
mouse and touch play.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from raftrush.raft_core.config_loader import GameConfig, get_config
from raftrush.raft_core.events import Direction
from raftrush.raft_core.layout import game_over_box
from raftrush.raft_core.sprite_loader import AssetLoader

CONTROL_STRIP_HEIGHT = 70


class PygameRenderer:
    """
    Renders a CoreGame to a window.

    Field coordinates are multiplied by a scale factor so the
    320x480 field can be shown larger on desktop screens.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        assets: Optional[AssetLoader] = None,
        scale: float = 1.0,
        show_controls: bool = True
    ):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            assets: Loaded sprites. Fallback sprites are generated if None.
            scale: Field-to-screen scale factor.
            show_controls: Whether to draw the on-screen arrow buttons.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = get_config()

        self._config = config
        self._assets = assets if assets is not None else AssetLoader(config)
        self._scale = scale
        self._show_controls = show_controls

        self._field_w = int(config.field.width * scale)
        self._field_h = int(config.field.height * scale)
        strip = CONTROL_STRIP_HEIGHT if show_controls else 0
        self._window_size = (self._field_w, self._field_h + strip)

        # Colors
        self._bg_top = (79, 195, 247)       # #4FC3F7
        self._bg_bottom = (2, 136, 209)     # #0288D1
        self._strip_color = (1, 87, 155)
        self._button_fill = (255, 255, 255)
        self._button_pressed = (200, 230, 255)
        self._text_light = (255, 255, 255)
        self._text_dark = (0, 0, 0)
        self._box_fill = (34, 34, 34)       # #222

        pygame.font.init()
        self._font_title = pygame.font.Font(None, int(44 * scale))
        self._font_overlay_score = pygame.font.Font(None, int(26 * scale))
        self._font_hud = pygame.font.Font(None, int(28 * scale))

        self._bg_surface = self._create_gradient_background()

        # On-screen controls, split the strip in two halves
        half = self._field_w // 2
        pad = 10
        self._left_button = pygame.Rect(pad, self._field_h + pad, half - 2 * pad, strip - 2 * pad)
        self._right_button = pygame.Rect(half + pad, self._field_h + pad, half - 2 * pad, strip - 2 * pad)

    @property
    def window_size(self) -> Tuple[int, int]:
        return self._window_size

    def _create_gradient_background(self) -> pygame.Surface:
        """Vertical river gradient covering the field."""
        surface = pygame.Surface((self._field_w, self._field_h))
        for y in range(self._field_h):
            t = y / self._field_h
            color = tuple(
                int(top * (1 - t) + bottom * t)
                for top, bottom in zip(self._bg_top, self._bg_bottom)
            )
            pygame.draw.line(surface, color, (0, y), (self._field_w, y))
        return surface

    def render(
        self,
        screen: pygame.Surface,
        render_data: Dict[str, Any],
        held: Tuple[bool, bool] = (False, False)
    ) -> None:
        """
        Render the complete scene.

        Args:
            screen: Target surface (the window).
            render_data: Data from CoreGame.get_render_data().
            held: (left, right) flags, used to highlight the buttons.
        """
        screen.blit(self._bg_surface, (0, 0))

        raft = render_data["raft"]
        self._draw_entity(screen, "raft", raft)
        for rock in render_data["rocks"]:
            self._draw_entity(screen, "rock", rock)

        score = self._font_hud.render(f"Score: {render_data['score']}", True, self._text_light)
        screen.blit(score, (int(10 * self._scale), int(10 * self._scale)))

        if self._show_controls:
            self._draw_controls(screen, held)

        if render_data["game_over"]:
            self._draw_game_over(screen, render_data)

    def _draw_entity(self, screen: pygame.Surface, name: str, entity: Dict[str, float]) -> None:
        w = max(1, int(entity["width"] * self._scale))
        h = max(1, int(entity["height"] * self._scale))
        sprite = self._assets.get_sprite(name, w, h)
        screen.blit(sprite, (int(entity["x"] * self._scale), int(entity["y"] * self._scale)))

    def _draw_controls(self, screen: pygame.Surface, held: Tuple[bool, bool]) -> None:
        """Draw the arrow buttons strip."""
        strip = pygame.Rect(0, self._field_h, self._field_w, CONTROL_STRIP_HEIGHT)
        pygame.draw.rect(screen, self._strip_color, strip)

        for rect, pressed, pointing_left in (
            (self._left_button, held[0], True),
            (self._right_button, held[1], False),
        ):
            fill = self._button_pressed if pressed else self._button_fill
            pygame.draw.rect(screen, fill, rect, border_radius=10)

            cx, cy = rect.center
            size = rect.height // 3
            if pointing_left:
                points = [(cx - size, cy), (cx + size, cy - size), (cx + size, cy + size)]
            else:
                points = [(cx + size, cy), (cx - size, cy - size), (cx - size, cy + size)]
            pygame.draw.polygon(screen, self._strip_color, points)

    def _draw_game_over(self, screen: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw game over overlay with the restart button."""
        overlay = pygame.Surface((self._field_w, self._field_h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        screen.blit(overlay, (0, 0))

        box = game_over_box(render_data["field_width"], render_data["field_height"])
        box_rect = self._to_screen_rect(box.x, box.y, box.w, box.h)
        pygame.draw.rect(screen, self._box_fill, box_rect, border_radius=int(12 * self._scale))

        center_x = self._field_w // 2

        title = self._font_title.render("GAME OVER", True, self._text_light)
        screen.blit(title, title.get_rect(center=(center_x, box_rect.y + int(45 * self._scale))))

        score = self._font_overlay_score.render(f"Score: {render_data['score']}", True, self._text_light)
        screen.blit(score, score.get_rect(center=(center_x, box_rect.y + int(85 * self._scale))))

        button_rect = self._to_screen_rect(*render_data["restart_button"])
        pygame.draw.rect(screen, self._button_fill, button_rect, border_radius=int(8 * self._scale))
        label = self._font_hud.render("Restart", True, self._text_dark)
        screen.blit(label, label.get_rect(center=button_rect.center))

    def _to_screen_rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        s = self._scale
        return pygame.Rect(int(x * s), int(y * s), int(w * s), int(h * s))

    def screen_to_field(self, screen_x: int, screen_y: int) -> Tuple[float, float]:
        """Convert window pixel coordinates to field coordinates."""
        return screen_x / self._scale, screen_y / self._scale

    def in_field(self, screen_x: int, screen_y: int) -> bool:
        return 0 <= screen_x < self._field_w and 0 <= screen_y < self._field_h

    def control_at(self, screen_x: int, screen_y: int) -> Optional[Direction]:
        """Which on-screen arrow button, if any, lies under the pointer."""
        if not self._show_controls:
            return None
        if self._left_button.collidepoint(screen_x, screen_y):
            return Direction.LEFT
        if self._right_button.collidepoint(screen_x, screen_y):
            return Direction.RIGHT
        return None

    def close(self) -> None:
        pass

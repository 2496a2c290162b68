"""
Tests for the pygame renderer and its screen/field mapping.
"""

import pytest

pygame = pytest.importorskip("pygame")

from raftrush.raft_core.config_loader import load_config
from raftrush.raft_core.events import Direction
from raftrush.raft_core.game import CoreGame
from raftrush.raft_core.render_pygame import CONTROL_STRIP_HEIGHT, PygameRenderer


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def renderer(config):
    renderer = PygameRenderer(config)
    yield renderer
    renderer.close()


@pytest.fixture
def game(config):
    return CoreGame(config=config, seed=0)


def draw(renderer, game):
    screen = pygame.Surface(renderer.window_size)
    renderer.render(screen, game.get_render_data())
    return screen


class TestPygameRenderer:
    """Test drawing and hit-testing."""

    def test_window_includes_control_strip(self, renderer, config):
        assert renderer.window_size == (config.field.width, config.field.height + CONTROL_STRIP_HEIGHT)

    def test_playing_frame_shows_river(self, renderer, game):
        """Top-right corner is the untouched top of the river gradient."""
        screen = draw(renderer, game)
        assert screen.get_at((310, 2))[:3] == (79, 195, 247)

    def test_game_over_overlay(self, renderer, game):
        """Overlay shades the field and draws a white Restart button."""
        game.machine.game_over()
        screen = draw(renderer, game)

        shaded = screen.get_at((310, 2))
        assert shaded.b < 247

        bx, by, bw, bh = game.get_render_data()["restart_button"]
        assert screen.get_at((int(bx) + 4, int(by + bh / 2)))[:3] == (255, 255, 255)

    def test_controls_hit_testing(self, renderer, config):
        strip_y = config.field.height + CONTROL_STRIP_HEIGHT // 2
        assert renderer.control_at(40, strip_y) is Direction.LEFT
        assert renderer.control_at(config.field.width - 40, strip_y) is Direction.RIGHT
        assert renderer.control_at(40, 100) is None

    def test_screen_to_field_scaled(self, config):
        renderer = PygameRenderer(config, scale=2.0)
        assert renderer.screen_to_field(200, 520) == (100.0, 260.0)
        assert renderer.in_field(639, 959)
        assert not renderer.in_field(100, 960)

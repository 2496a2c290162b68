"""
Tests for sprite loading, fallbacks and the ready signal.
"""

import pytest

pygame = pytest.importorskip("pygame")

from raftrush.raft_core.config_loader import load_config
from raftrush.raft_core.sprite_loader import AssetLoader


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def assets_dir(tmp_path, config):
    """Directory holding a raft sprite only."""
    raft = pygame.Surface((16, 16), pygame.SRCALPHA)
    raft.fill((150, 100, 50, 255))
    pygame.image.save(raft, str(tmp_path / config.assets.raft_sprite))
    return tmp_path


class TestAssetLoader:
    """Test loading and the ready callbacks."""

    def test_missing_sprite_uses_fallback(self, config, assets_dir, capsys):
        """A missing rock image warns and still yields a sprite of the asked size."""
        loader = AssetLoader(config, assets_dir)

        assert not loader.load()
        assert "using fallback" in capsys.readouterr().out

        rock = loader.get_sprite("rock", 70, 70)
        assert rock.get_size() == (70, 70)

    def test_loaded_sprite_is_scaled(self, config, assets_dir):
        loader = AssetLoader(config, assets_dir)
        loader.load()

        raft = loader.get_sprite("raft", 80, 80)

        assert raft.get_size() == (80, 80)
        assert raft.get_at((40, 40))[:3] == (150, 100, 50)

    def test_scaled_sprites_cached(self, config, assets_dir):
        loader = AssetLoader(config, assets_dir)
        loader.load()

        assert loader.get_sprite("raft", 80, 80) is loader.get_sprite("raft", 80, 80)

    def test_ready_fires_once(self, config, assets_dir):
        """Callbacks run on the first load; late subscribers run immediately."""
        loader = AssetLoader(config, assets_dir)
        calls = []
        loader.on_ready(lambda: calls.append("early"))

        assert not loader.ready
        loader.load()
        loader.load()
        loader.on_ready(lambda: calls.append("late"))

        assert loader.ready
        assert calls == ["early", "late"]

    def test_music_path_missing(self, config, assets_dir):
        assert AssetLoader(config, assets_dir).music_path is None

    def test_music_path_found(self, config, assets_dir):
        (assets_dir / config.assets.music).write_bytes(b"")
        assert AssetLoader(config, assets_dir).music_path == assets_dir / config.assets.music

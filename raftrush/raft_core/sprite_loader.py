"""
Asset Loader
============

Loads the raft and rock sprites and locates the music file. Signals "ready"
once every visual asset is available; missing images are replaced by
generated fallback sprites so the game can always start.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from raftrush.raft_core.config_loader import GameConfig, get_config

ASSETS_DIR = Path(__file__).parent.parent / "assets"

SPRITE_NAMES = ("raft", "rock")


class AssetLoader:
    """
    Loads and caches game sprites.

    Handles loading, scaling to entity size, and fallback generation.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        assets_dir: Optional[Path] = None
    ):
        """
        Initialize asset loader.

        Args:
            config: Game configuration. Uses default if None.
            assets_dir: Directory holding sprites and music. Uses default if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required for sprite loading. Install: pip install pygame")

        if config is None:
            config = get_config()

        self._config = config
        self._assets_dir = Path(assets_dir) if assets_dir is not None else ASSETS_DIR
        self._sprites: Dict[str, pygame.Surface] = {}
        self._scaled_cache: Dict[Tuple[str, int, int], pygame.Surface] = {}
        self._ready = False
        self._ready_callbacks: List[Callable[[], None]] = []

    @property
    def ready(self) -> bool:
        """True once load() has completed."""
        return self._ready

    @property
    def assets_dir(self) -> Path:
        return self._assets_dir

    @property
    def music_path(self) -> Optional[Path]:
        """Path to the music file, or None if it is missing."""
        path = self._assets_dir / self._config.assets.music
        return path if path.exists() else None

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Run callback once assets are loaded (immediately if already ready)."""
        if self._ready:
            callback()
        else:
            self._ready_callbacks.append(callback)

    def load(self) -> bool:
        """
        Load all sprites, then fire the ready callbacks.

        Returns:
            True when every sprite came from disk, False if any fallback was used.
        """
        files = {
            "raft": self._config.assets.raft_sprite,
            "rock": self._config.assets.rock_sprite,
        }

        all_loaded = True
        for name, filename in files.items():
            sprite = self._load_image(self._assets_dir / filename)
            if sprite is None:
                print(f"[WARN] Sprite not found, using fallback: {self._assets_dir / filename}")
                all_loaded = False
            else:
                self._sprites[name] = sprite

        if not self._ready:
            self._ready = True
            for callback in self._ready_callbacks:
                callback()
            self._ready_callbacks.clear()

        return all_loaded

    def _load_image(self, path: Path) -> Optional[pygame.Surface]:
        if not path.exists():
            return None
        try:
            image = pygame.image.load(str(path))
            if pygame.display.get_surface() is not None:
                image = image.convert_alpha()
            return image
        except pygame.error:
            return None

    def get_sprite(self, name: str, width: int, height: int) -> pygame.Surface:
        """
        Get a sprite stretched to the given size.

        Args:
            name: "raft" or "rock".
            width: Target width in pixels.
            height: Target height in pixels.

        Returns:
            Scaled sprite surface, or a generated fallback.
        """
        cache_key = (name, width, height)
        if cache_key in self._scaled_cache:
            return self._scaled_cache[cache_key]

        if name in self._sprites:
            surface = pygame.transform.smoothscale(self._sprites[name], (width, height))
        else:
            surface = self._create_fallback_sprite(name, width, height)

        self._scaled_cache[cache_key] = surface
        return surface

    def _create_fallback_sprite(self, name: str, width: int, height: int) -> pygame.Surface:
        """Draw a simple stand-in for a missing sprite."""
        surface = pygame.Surface((width, height), pygame.SRCALPHA)

        if name == "raft":
            # Log planks with lashings
            plank_color = (150, 100, 50)
            edge_color = (100, 65, 30)
            planks = 5
            plank_w = width / planks
            for i in range(planks):
                rect = pygame.Rect(int(i * plank_w), 0, int(plank_w) - 1, height)
                pygame.draw.rect(surface, plank_color, rect, border_radius=6)
                pygame.draw.rect(surface, edge_color, rect, 2, border_radius=6)
            for y in (height // 4, height * 3 // 4):
                pygame.draw.line(surface, (210, 190, 140), (0, y), (width, y), 3)
        else:
            # Boulder with a highlight
            base = (110, 110, 120)
            pygame.draw.ellipse(surface, base, surface.get_rect())
            pygame.draw.ellipse(surface, (80, 80, 90), surface.get_rect(), 3)
            highlight = pygame.Rect(width // 5, height // 6, width // 3, height // 4)
            pygame.draw.ellipse(surface, (160, 160, 170), highlight)

        return surface

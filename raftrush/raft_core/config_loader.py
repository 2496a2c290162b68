"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class FieldConfig:
    """Play field size in pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class RaftConfig:
    """Player raft geometry and steering speed."""
    width: int
    height: int
    speed: float          # Pixels per frame
    bottom_offset: int    # Distance from raft top edge to field bottom


@dataclass(frozen=True)
class RockConfig:
    """Falling rock geometry and speed."""
    width: int
    height: int
    speed: float          # Pixels per frame


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn timer and placement parameters."""
    interval_ms: int
    max_attempts: int


@dataclass(frozen=True)
class CollisionConfig:
    """Hitbox forgiveness."""
    padding: float


@dataclass(frozen=True)
class TimingConfig:
    """Frame pacing."""
    target_fps: int

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.target_fps


@dataclass(frozen=True)
class CapsConfig:
    """Headless episode limits."""
    max_frames: int
    max_rocks: int


@dataclass(frozen=True)
class AssetConfig:
    """Asset file names, relative to the asset directory."""
    raft_sprite: str
    rock_sprite: str
    music: str


@dataclass(frozen=True)
class AudioConfig:
    """Background music settings."""
    volume: float
    loop: bool


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    field: FieldConfig
    raft: RaftConfig
    rock: RockConfig
    spawn: SpawnConfig
    collision: CollisionConfig
    timing: TimingConfig
    caps: CapsConfig
    assets: AssetConfig
    audio: AudioConfig

    @property
    def raft_start_x(self) -> float:
        """Centered raft X position."""
        return self.field.width / 2 - self.raft.width / 2

    @property
    def raft_y(self) -> float:
        """Fixed raft Y position."""
        return float(self.field.height - self.raft.bottom_offset)

    @property
    def raft_max_x(self) -> float:
        """Largest X the raft may occupy."""
        return float(self.field.width - self.raft.width)

    @property
    def rock_max_x(self) -> float:
        """Upper bound of the spawn X range."""
        return float(self.field.width - self.rock.width)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.field.width <= 0 or config.field.height <= 0:
        raise ValueError(f"Field size must be positive, got {config.field.width}x{config.field.height}")

    for name, size in (("raft", config.raft), ("rock", config.rock)):
        if size.width <= 0 or size.height <= 0:
            raise ValueError(f"{name} size must be positive, got {size.width}x{size.height}")
        if size.speed <= 0:
            raise ValueError(f"{name} speed must be positive, got {size.speed}")
        if size.width > config.field.width:
            raise ValueError(
                f"{name} width ({size.width}) exceeds field width ({config.field.width})"
            )

    if not 0 <= config.raft_y <= config.field.height - config.raft.height:
        raise ValueError(
            f"raft.bottom_offset ({config.raft.bottom_offset}) places the raft outside the field"
        )

    if config.spawn.interval_ms <= 0:
        raise ValueError(f"spawn.interval_ms must be positive, got {config.spawn.interval_ms}")
    if config.spawn.max_attempts < 1:
        raise ValueError(f"spawn.max_attempts must be at least 1, got {config.spawn.max_attempts}")

    # Padded hitboxes must keep a positive area
    pad = config.collision.padding
    smallest_side = min(config.raft.width, config.raft.height, config.rock.width, config.rock.height)
    if pad < 0 or pad * 2 >= smallest_side:
        raise ValueError(
            f"collision.padding ({pad}) must be >= 0 and leave a positive hitbox "
            f"(smallest side is {smallest_side})"
        )

    if config.timing.target_fps <= 0:
        raise ValueError(f"timing.target_fps must be positive, got {config.timing.target_fps}")
    if config.caps.max_rocks < 1:
        raise ValueError(f"caps.max_rocks must be at least 1, got {config.caps.max_rocks}")

    if not 0.0 <= config.audio.volume <= 1.0:
        raise ValueError(f"audio.volume must be in [0, 1], got {config.audio.volume}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        width=int(field_data["width"]),
        height=int(field_data["height"])
    )

    raft_data = raw["raft"]
    raft = RaftConfig(
        width=int(raft_data["width"]),
        height=int(raft_data["height"]),
        speed=float(raft_data["speed"]),
        bottom_offset=int(raft_data.get("bottom_offset", 110))
    )

    rock_data = raw["rock"]
    rock = RockConfig(
        width=int(rock_data["width"]),
        height=int(rock_data["height"]),
        speed=float(rock_data["speed"])
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        interval_ms=int(spawn_data["interval_ms"]),
        max_attempts=int(spawn_data.get("max_attempts", 10))
    )

    collision = CollisionConfig(
        padding=float(raw.get("collision", {}).get("padding", 12))
    )

    timing = TimingConfig(
        target_fps=int(raw.get("timing", {}).get("target_fps", 60))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_frames=int(caps_data.get("max_frames", 20000)),
        max_rocks=int(caps_data.get("max_rocks", 16))
    )

    # Optional sections
    assets_data = raw.get("assets", {})
    assets = AssetConfig(
        raft_sprite=str(assets_data.get("raft_sprite", "raft.png")),
        rock_sprite=str(assets_data.get("rock_sprite", "rock.png")),
        music=str(assets_data.get("music", "behula.mp3"))
    )

    audio_data = raw.get("audio", {})
    audio = AudioConfig(
        volume=float(audio_data.get("volume", 1.0)),
        loop=bool(audio_data.get("loop", True))
    )

    config = GameConfig(
        field=field,
        raft=raft,
        rock=rock,
        spawn=spawn,
        collision=collision,
        timing=timing,
        caps=caps,
        assets=assets,
        audio=audio
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config

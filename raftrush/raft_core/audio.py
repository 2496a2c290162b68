"""
Audio
=====

Background music with a one-time unlock: nothing plays until the player has
interacted with the game at least once.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False


class AudioPlaybackError(Exception):
    """Playback was refused by the platform (device busy, file unreadable...)."""


class UnlockState(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


class AudioUnlock:
    """One-shot gate. Goes from LOCKED to UNLOCKED once and stays there."""

    def __init__(self):
        self._state = UnlockState.LOCKED

    @property
    def state(self) -> UnlockState:
        return self._state

    @property
    def unlocked(self) -> bool:
        return self._state is UnlockState.UNLOCKED

    def unlock(self) -> bool:
        """Returns True only on the call that performed the unlock."""
        if self._state is UnlockState.UNLOCKED:
            return False
        self._state = UnlockState.UNLOCKED
        return True


class NullMusicBackend:
    """Silent backend for headless runs and --mute."""

    def play(self) -> None:
        pass

    def rewind_and_stop(self) -> None:
        pass


class PygameMusicBackend:
    """
    Streams one music file through pygame.mixer.music.

    Any pygame failure while playing is raised as AudioPlaybackError.
    """

    def __init__(self, music_path: Path, volume: float = 1.0, loop: bool = True):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required for audio. Install: pip install pygame")

        self._path = Path(music_path)
        self._volume = volume
        self._loops = -1 if loop else 0
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init()
            pygame.mixer.music.load(str(self._path))
            pygame.mixer.music.set_volume(self._volume)
        except pygame.error as e:
            raise AudioPlaybackError(f"could not load {self._path}: {e}") from e
        self._loaded = True

    def play(self) -> None:
        self._ensure_loaded()
        try:
            pygame.mixer.music.play(loops=self._loops, start=0.0)
        except pygame.error as e:
            raise AudioPlaybackError(str(e)) from e

    def rewind_and_stop(self) -> None:
        if not self._loaded:
            return
        try:
            pygame.mixer.music.stop()
            pygame.mixer.music.rewind()
        except pygame.error as e:
            raise AudioPlaybackError(str(e)) from e


class MusicController:
    """
    start()/stop() hooks for the state machine.

    start() is ignored until unlock() has been called once. Playback errors
    are reported and swallowed here so they never reach game state or timers.
    """

    def __init__(self, backend=None, unlock: Optional[AudioUnlock] = None):
        self._backend = backend if backend is not None else NullMusicBackend()
        self._unlock = unlock if unlock is not None else AudioUnlock()
        self._playing = False
        self._failures = 0

    @property
    def unlocked(self) -> bool:
        return self._unlock.unlocked

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def failures(self) -> int:
        """Number of refused playback attempts."""
        return self._failures

    def unlock(self) -> None:
        """First user gesture: open the gate and start the music."""
        if self._unlock.unlock():
            self.start()

    def start(self) -> None:
        """Restart the track from the beginning."""
        if not self._unlock.unlocked:
            return
        try:
            self._backend.play()
            self._playing = True
        except AudioPlaybackError as e:
            self._failures += 1
            self._playing = False
            print(f"[WARN] Music blocked: {e}")

    def stop(self) -> None:
        """Pause and rewind."""
        self._playing = False
        try:
            self._backend.rewind_and_stop()
        except AudioPlaybackError as e:
            self._failures += 1
            print(f"[WARN] Music stop failed: {e}")

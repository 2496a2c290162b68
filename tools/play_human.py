"""
Human Play Mode
===============

Play Raft Rush interactively in a pygame window.

Controls:
    - Left/Right or A/D: Steer the raft
    - On-screen arrow buttons (mouse or touch): Steer the raft
    - Any key or the Restart button: Restart after game over
    - ESC: Quit

Music starts after the first key press, click or touch.

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--scale SCALE]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Set

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from raftrush.raft_core.audio import MusicController, NullMusicBackend, PygameMusicBackend
from raftrush.raft_core.config_loader import GameConfig, load_config
from raftrush.raft_core.driver import FrameDriver
from raftrush.raft_core.events import (
    Direction,
    GameEvent,
    MovePressed,
    MoveReleased,
    PointerPressed,
    RestartRequested,
    UserGesture,
)
from raftrush.raft_core.game import CoreGame
from raftrush.raft_core.render_pygame import PygameRenderer
from raftrush.raft_core.sprite_loader import AssetLoader

if PYGAME_AVAILABLE:
    KEY_DIRECTIONS = {
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }
else:
    KEY_DIRECTIONS = {}


class InputTranslator:
    """
    Turns pygame events into game events.

    Keyboard, mouse and touch all map onto the same move/restart events.
    While the game is over any key press means restart. Pointer presses on
    the arrow buttons hold a direction until released or dragged off.
    """

    def __init__(self, game: CoreGame, renderer: PygameRenderer):
        self._game = game
        self._renderer = renderer
        self._pointer_held: Set[Direction] = set()
        self._window_size = renderer.window_size

    def translate(self, event) -> List[GameEvent]:
        """Game events for one pygame event (possibly none)."""
        if event.type == pygame.KEYDOWN:
            return self._key_down(event)
        if event.type == pygame.KEYUP:
            direction = KEY_DIRECTIONS.get(event.key)
            return [MoveReleased(direction)] if direction is not None else []

        # Touch arrives as both FINGER* and synthesized mouse events
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
            return self._pointer_down(*event.pos)
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, "touch", False):
            return self._pointer_up()
        if event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
            return self._pointer_move(*event.pos)
        if event.type == pygame.FINGERDOWN:
            return self._pointer_down(*self._finger_pos(event))
        if event.type == pygame.FINGERUP:
            return self._pointer_up()
        if event.type == pygame.FINGERMOTION:
            return self._pointer_move(*self._finger_pos(event))
        return []

    def _key_down(self, event) -> List[GameEvent]:
        events: List[GameEvent] = [UserGesture()]
        if self._game.is_over:
            events.append(RestartRequested())
            return events
        direction = KEY_DIRECTIONS.get(event.key)
        if direction is not None:
            events.append(MovePressed(direction))
        return events

    def _finger_pos(self, event):
        width, height = self._window_size
        return int(event.x * width), int(event.y * height)

    def _pointer_down(self, x: int, y: int) -> List[GameEvent]:
        events: List[GameEvent] = [UserGesture()]
        direction = self._renderer.control_at(x, y)
        if direction is not None:
            if not self._game.is_over:
                self._pointer_held.add(direction)
                events.append(MovePressed(direction))
        elif self._renderer.in_field(x, y):
            fx, fy = self._renderer.screen_to_field(x, y)
            events.append(PointerPressed(fx, fy))
        return events

    def _pointer_up(self) -> List[GameEvent]:
        events: List[GameEvent] = [MoveReleased(d) for d in sorted(self._pointer_held, key=lambda d: d.value)]
        self._pointer_held.clear()
        return events

    def _pointer_move(self, x: int, y: int) -> List[GameEvent]:
        """Release a held button once the pointer leaves it."""
        if not self._pointer_held:
            return []
        under = self._renderer.control_at(x, y)
        left = [d for d in self._pointer_held if d is not under]
        for direction in left:
            self._pointer_held.discard(direction)
        return [MoveReleased(d) for d in left]


class HumanPlayer:
    """
    Human-playable raft game.

    Hosts the frame driver: one simulation tick per rendered frame, spawn
    ticks on a fixed interval, both started once the sprites are loaded.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None,
        scale: float = 1.5,
        assets_dir: Optional[Path] = None,
        mute: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps or config.timing.target_fps

        pygame.init()

        # Assets
        self._assets = AssetLoader(config, assets_dir)

        # Renderer and window
        self._renderer = PygameRenderer(config, self._assets, scale=scale)
        self._screen = pygame.display.set_mode(self._renderer.window_size)
        pygame.display.set_caption("Raft Rush")
        self._clock = pygame.time.Clock()

        # Music
        music_path = self._assets.music_path
        if mute or music_path is None:
            if not mute:
                print(f"[WARN] Music file not found in {self._assets.assets_dir}, playing silently")
            backend = NullMusicBackend()
        else:
            backend = PygameMusicBackend(music_path, config.audio.volume, config.audio.loop)
        music = MusicController(backend)

        # Game and driver
        self._game = CoreGame(config=config, seed=seed, music=music)
        self._game.machine.on_game_over(self._announce_game_over)
        self._game.machine.on_restart(self._announce_restart)
        self._driver = FrameDriver(self._game, render=self._render)
        self._input = InputTranslator(self._game, self._renderer)

        self._assets.on_ready(self._driver.notify_assets_ready)
        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        print("=== Raft Rush ===")
        print("Left/Right or A/D to steer, ESC to quit")
        print()

        self._assets.load()
        self._clock.tick()

        while self._running:
            elapsed_ms = self._clock.tick(self._target_fps)
            self._handle_events()
            self._driver.frame(elapsed_ms)

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False
            else:
                for game_event in self._input.translate(event):
                    self._game.post_event(game_event)

    def _announce_game_over(self) -> None:
        print(f"GAME OVER - Score: {self._game.score}")

    def _announce_restart(self) -> None:
        print("\n=== Game Restarted ===\n")

    def _render(self, game: CoreGame) -> None:
        """Render the game."""
        intent = game.intent
        self._renderer.render(
            self._screen,
            game.get_render_data(),
            held=(intent.left, intent.right)
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Raft Rush interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--scale", type=float, default=1.5, help="Window scale (default: 1.5)")
    parser.add_argument("--assets", type=str, default=None, help="Directory with raft.png, rock.png and music")
    parser.add_argument("--mute", action="store_true", help="Disable music")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            scale=args.scale,
            assets_dir=Path(args.assets) if args.assets else None,
            mute=args.mute
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

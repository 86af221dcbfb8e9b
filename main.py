"""
Main entry point for Neon Missile Defense.

Initializes pygame, runs the frame loop, and provides the presentation
side of the simulation: a render bridge that draws entities with pygame
primitives, pointer-to-world projection, the HUD, and audio.

Usage:
    python main.py [OPTIONS]

Options:
    --fullscreen         Launch in fullscreen mode
    --scale N            Window scale (1-3, default: 1)
    --debug              Enable debug overlay and debug logging
    --mute               Start with audio muted
    --seed N             Seed the simulation's random source
    --scores-file PATH   High-score file (default: highscore.json)

Controls:
    Left click   – launch from the nearest base with ammo
    1 / 2 / 3    – launch from the left / center / right base at the pointer
    Enter        – start (or restart) a mission
    M            – mute / unmute
    ESC          – quit
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from neondefense.bridges import HudSnapshot, RenderBridge, VisualKind
from neondefense.config import (
    DEFAULT_SCORES_FILE,
    MAX_BASE_AMMO,
    UPDATE_RATE,
    WORLD_BOTTOM,
    WORLD_LEFT,
    WORLD_RIGHT,
    WORLD_TOP,
)
from neondefense.game import Game
from neondefense.models.city import City
from neondefense.models.defense import LaunchBase
from neondefense.models.explosion import Explosion
from neondefense.state import GameState
from neondefense.ui.audio import AudioManager
from neondefense.ui.high_scores import HighScoreStore
from neondefense.utils.input_handler import GameAction, InputEvent

logger = logging.getLogger("neondefense.app")


# ── Constants ───────────────────────────────────────────────────────────────

FRAME_TIME: float = 1.0 / UPDATE_RATE

# Screen margins around the world rectangle, in unscaled pixels
MARGIN_TOP: int = 40
MARGIN_BOTTOM: int = 30
VIEW_WIDTH: int = int(WORLD_RIGHT - WORLD_LEFT)
VIEW_HEIGHT: int = int(WORLD_TOP - WORLD_BOTTOM) + MARGIN_TOP + MARGIN_BOTTOM

DEFAULT_SCALE: int = 1
MIN_SCALE: int = 1
MAX_SCALE: int = 3

BACKGROUND = (2, 6, 17)
GROUND = (10, 36, 49)
HUD_COLOR = (200, 240, 255)

VISUAL_COLORS: dict[VisualKind, tuple[int, int, int]] = {
    VisualKind.CITY: (0x69, 0xFF, 0xED),
    VisualKind.BASE: (0x79, 0xFF, 0xF3),
    VisualKind.ENEMY_MISSILE: (0xFF, 0xD5, 0x74),
    VisualKind.SPLIT_MISSILE: (0xFF, 0x8D, 0xE1),
    VisualKind.PLAYER_MISSILE: (0x90, 0xF7, 0xFF),
    VisualKind.WARHEAD_EXPLOSION: (0xFF, 0x7C, 0x3F),
    VisualKind.DEFENSE_EXPLOSION: (0x42, 0xF8, 0xFF),
}
DEAD_COLOR = (0x3A, 0x3A, 0x3A)


# ── Argument parsing ───────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Neon Missile Defense – defend the cities",
    )
    parser.add_argument(
        "--fullscreen", action="store_true",
        help="Launch in fullscreen mode",
    )
    parser.add_argument(
        "--scale", type=int, default=DEFAULT_SCALE,
        choices=range(MIN_SCALE, MAX_SCALE + 1),
        metavar="N",
        help=f"Window scale ({MIN_SCALE}-{MAX_SCALE}, default: {DEFAULT_SCALE})",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug overlay and debug logging",
    )
    parser.add_argument(
        "--mute", action="store_true",
        help="Start with audio muted",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        metavar="N",
        help="Seed the random source for a replayable mission",
    )
    parser.add_argument(
        "--scores-file", default=DEFAULT_SCORES_FILE,
        metavar="PATH",
        help=f"High-score file (default: {DEFAULT_SCORES_FILE})",
    )
    return parser.parse_args(argv)


# ── Projection ─────────────────────────────────────────────────────────────


def world_to_screen(x: float, y: float, scale: int = 1) -> tuple[int, int]:
    """Project a world point to window pixels (y axis flipped)."""
    sx = (x - WORLD_LEFT) * scale
    sy = (WORLD_TOP - y + MARGIN_TOP) * scale
    return (int(round(sx)), int(round(sy)))


def screen_to_world(px: int, py: int, scale: int = 1) -> tuple[float, float]:
    """Inverse of :func:`world_to_screen` for pointer input."""
    return (px / scale + WORLD_LEFT, WORLD_TOP + MARGIN_TOP - py / scale)


# ── Render bridge ──────────────────────────────────────────────────────────


@dataclass
class Sprite:
    """Presentation handle the simulation stores on each entity."""
    kind: VisualKind
    color: tuple[int, int, int]
    dirty: bool = True


@dataclass
class PygameRenderBridge(RenderBridge):
    """Hands out sprites and keeps a count of live visuals."""

    live: int = 0

    def on_entity_created(self, entity: Any, visual_kind: VisualKind) -> Sprite:
        self.live += 1
        return Sprite(kind=visual_kind, color=VISUAL_COLORS[visual_kind])

    def on_entity_updated(self, entity: Any) -> None:
        sprite = getattr(entity, "visual", None)
        if isinstance(sprite, Sprite):
            sprite.dirty = True
            if isinstance(entity, (City, LaunchBase)) and not entity.alive:
                sprite.color = DEAD_COLOR

    def on_entity_removed(self, entity: Any) -> None:
        self.live = max(0, self.live - 1)


# ── Application ─────────────────────────────────────────────────────────────


@dataclass
class NeonDefenseApp:
    """Top-level application wrapper.

    Owns the pygame display, the game, and the main loop.
    """

    scale: int = DEFAULT_SCALE
    fullscreen: bool = False
    debug: bool = False
    muted: bool = False
    seed: Optional[int] = None
    scores_file: str = DEFAULT_SCORES_FILE

    # Runtime state (initialized in ``init``)
    screen: object = field(default=None, repr=False)
    clock: object = field(default=None, repr=False)
    font: object = field(default=None, repr=False)
    renderer: PygameRenderBridge = field(default_factory=PygameRenderBridge)
    audio: AudioManager = field(default_factory=AudioManager)
    game: Optional[Game] = None
    hud: Optional[HudSnapshot] = None
    running: bool = False
    fps: float = 0.0

    def __post_init__(self) -> None:
        if self.game is None:
            self.game = self._build_game()

    def _build_game(self) -> Game:
        return Game(
            rng=random.Random(self.seed),
            render=self.renderer,
            audio=self.audio,
            persistence=HighScoreStore(self.scores_file),
            hud_listener=self._on_hud,
        )

    def _on_hud(self, snapshot: HudSnapshot) -> None:
        self.hud = snapshot

    # ── Initialisation ──────────────────────────────────────────────────

    def init(self) -> bool:
        """Initialise pygame and create the display surface.

        Returns True on success, False on failure.
        """
        if pygame is None:
            print("Error: pygame is required. Install with: pip install pygame",
                  file=sys.stderr)
            return False

        try:
            pygame.init()
        except Exception as exc:
            print(f"Error initialising pygame: {exc}", file=sys.stderr)
            return False

        flags = pygame.FULLSCREEN if self.fullscreen else 0
        try:
            self.screen = pygame.display.set_mode(
                (VIEW_WIDTH * self.scale, VIEW_HEIGHT * self.scale), flags,
            )
        except Exception as exc:
            print(f"Error creating display: {exc}", file=sys.stderr)
            pygame.quit()
            return False

        pygame.display.set_caption("Neon Missile Defense")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 22 * self.scale)

        self.audio.init()
        self.audio.set_muted(self.muted)

        self.running = True
        return True

    # ── Main loop ───────────────────────────────────────────────────────

    def run(self) -> None:
        """Execute the main loop until the window closes."""
        if not self.running:
            return

        try:
            while self.running:
                frame_start = time.perf_counter()
                delta = self.clock.tick(UPDATE_RATE) / 1000.0

                self._handle_events()
                self.game.update(delta)
                self._render()

                elapsed = time.perf_counter() - frame_start
                self.fps = self.clock.get_fps()
                if elapsed > FRAME_TIME * 2:
                    logger.debug("slow frame: %.1f ms", elapsed * 1000)
        except KeyboardInterrupt:
            pass
        finally:
            self.shutdown()

    # ── Event handling ──────────────────────────────────────────────────

    def _pointer_event(self, pos: tuple[int, int], base_index: Optional[int] = None) -> InputEvent:
        aim_x, aim_y = screen_to_world(pos[0], pos[1], self.scale)
        return InputEvent(GameAction.LAUNCH, aim_x, aim_y, base_index)

    def translate_event(self, event: Any) -> Optional[InputEvent]:
        """Map a pygame event to a game input event (or None)."""
        if event.type == pygame.QUIT:
            return InputEvent(GameAction.QUIT)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self._pointer_event(event.pos)
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return InputEvent(GameAction.QUIT)
            if event.key == pygame.K_RETURN:
                return InputEvent(GameAction.START_MISSION)
            if event.key == pygame.K_m:
                return InputEvent(GameAction.TOGGLE_MUTE)
            if event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                index = event.key - pygame.K_1
                return self._pointer_event(pygame.mouse.get_pos(), index)
        return None

    def dispatch(self, event: InputEvent) -> None:
        """Apply an input event to the app or the game."""
        if event.action is GameAction.QUIT:
            self.running = False
        elif event.action is GameAction.TOGGLE_MUTE:
            self.muted = not self.muted
            self.audio.set_muted(self.muted)
        else:
            self.game.handle_event(event)

    def _handle_events(self) -> None:
        for raw in pygame.event.get():
            event = self.translate_event(raw)
            if event is not None:
                self.dispatch(event)

    # ── Rendering ───────────────────────────────────────────────────────

    def _render(self) -> None:
        """Draw the world, the HUD and any overlay."""
        if self.screen is None:
            return

        self.screen.fill(BACKGROUND)
        self._render_ground()
        registry = self.game.registry
        for city in registry.cities:
            self._render_city(city)
        for base in registry.bases:
            self._render_base(base)
        for missile in (*registry.enemy_missiles, *registry.player_missiles):
            self._render_missile(missile)
        for explosion in registry.explosions:
            self._render_explosion(explosion)
        self._render_hud()
        if self.debug:
            self._render_debug()
        pygame.display.flip()

    def _render_ground(self) -> None:
        top = world_to_screen(WORLD_LEFT, WORLD_BOTTOM + 10, self.scale)
        width = VIEW_WIDTH * self.scale
        height = VIEW_HEIGHT * self.scale - top[1]
        pygame.draw.rect(self.screen, GROUND, (0, top[1], width, height))

    def _render_city(self, city: City) -> None:
        sprite = city.visual
        cx, cy = world_to_screen(city.position_x, city.position_y, self.scale)
        w, h = 70 * self.scale, (22 if city.alive else 8) * self.scale
        pygame.draw.rect(self.screen, sprite.color, (cx - w // 2, cy - h // 2, w, h))

    def _render_base(self, base: LaunchBase) -> None:
        sprite = base.visual
        pos = world_to_screen(base.position_x, base.position_y, self.scale)
        pygame.draw.circle(self.screen, sprite.color, pos, 18 * self.scale, 2 * self.scale)
        # One pip per interceptor left
        for i in range(base.ammo):
            px = pos[0] + (-18 + i * 4) * self.scale
            pygame.draw.rect(
                self.screen, (0xFF, 0xD7, 0x6A),
                (px, pos[1] - 28 * self.scale, 3 * self.scale, 5 * self.scale),
            )

    def _render_missile(self, missile: Any) -> None:
        sprite = missile.visual
        start = world_to_screen(*missile.start, self.scale)
        head = world_to_screen(*missile.position, self.scale)
        pygame.draw.line(self.screen, sprite.color, start, head, max(1, self.scale))
        pygame.draw.circle(self.screen, sprite.color, head, 3 * self.scale)

    def _render_explosion(self, explosion: Explosion) -> None:
        sprite = explosion.visual
        pos = world_to_screen(*explosion.position, self.scale)
        radius = max(1, int(explosion.radius * self.scale))
        pygame.draw.circle(self.screen, sprite.color, pos, radius, max(1, 2 * self.scale))

    def _render_hud(self) -> None:
        hud = self.hud or self.game.hud_snapshot()
        line = (
            f"SCORE {hud.score:,}   HIGH {hud.high_score:,}   "
            f"WAVE {hud.wave or 1}   CITIES {hud.alive_city_count}"
        )
        self.screen.blit(self.font.render(line, True, HUD_COLOR), (10, 8))
        status = self.font.render(hud.status_message, True, HUD_COLOR)
        x = (VIEW_WIDTH * self.scale - status.get_width()) // 2
        self.screen.blit(status, (x, VIEW_HEIGHT * self.scale - status.get_height() - 6))
        if self.game.state is GameState.WAVE_TRANSITION:
            banner = self.font.render(
                f"WAVE {self.game.wave} CLEAR  +{self.game.mission.last_bonus}",
                True, HUD_COLOR,
            )
            bx = (VIEW_WIDTH * self.scale - banner.get_width()) // 2
            self.screen.blit(banner, (bx, VIEW_HEIGHT * self.scale // 3))

    def _render_debug(self) -> None:
        """Draw debug overlays (FPS, entity counts)."""
        registry = self.game.registry
        texts = [
            f"FPS: {self.fps:.1f}",
            f"Enemy: {len(registry.enemy_missiles)}",
            f"Player: {len(registry.player_missiles)}",
            f"Explosions: {len(registry.explosions)}",
            f"Spawned: {self.game.mission.enemy_spawned}/{self.game.mission.enemy_to_spawn}",
            f"Ammo: {registry.total_ammo}/{MAX_BASE_AMMO * len(registry.bases)}",
        ]
        y = 32 * self.scale
        for text in texts:
            surface = self.font.render(text, True, (0, 255, 0))
            self.screen.blit(surface, (10, y))
            y += surface.get_height()

    # ── Shutdown ────────────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Clean up and quit pygame."""
        self.running = False
        self.audio.shutdown()
        if pygame is not None:
            try:
                pygame.quit()
            except Exception:
                pass


# ── Entry point ─────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Application entry point.  Returns exit code."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = NeonDefenseApp(
        scale=args.scale,
        fullscreen=args.fullscreen,
        debug=args.debug,
        muted=args.mute,
        seed=args.seed,
        scores_file=args.scores_file,
    )

    if not app.init():
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Core game logic for Neon Missile Defense.

Owns the mission state and drives the per-tick update: wave phase
checks, enemy spawning, missile and explosion motion, collision
resolution, wave completion and game over.

Phases::

    IDLE ──start_mission()──> RUNNING ──wave cleared──> WAVE_TRANSITION
                                 ^                            │
                                 └──────cutscene elapsed──────┘
    RUNNING / WAVE_TRANSITION ──no cities left──> GAME_OVER ──start_mission()──> RUNNING
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from neondefense.bridges import (
    HudListener,
    HudSnapshot,
    NullHighScoreStore,
    RenderBridge,
    SilentAudio,
    safe_call,
)
from neondefense.collisions import CollisionEngine
from neondefense.config import (
    CUTSCENE_DURATION,
    MAX_DELTA,
    MIN_SPAWN_DISTANCE,
    PLAYER_LAUNCH_HEIGHT,
    PLAYER_SPEED_BASE,
    PLAYER_SPEED_PER_WAVE,
)
from neondefense.models.defense import LaunchBase, pick_launch_base
from neondefense.models.explosion import ExplosionKind
from neondefense.models.missile import PlayerMissile
from neondefense.models.registry import EntityRegistry
from neondefense.spawner import SpawnController
from neondefense.state import GameState, MissionState
from neondefense.ui.audio import SoundEvent
from neondefense.ui.text import ScoreDisplay
from neondefense.utils.functions import (
    calculate_wave_bonus,
    clamp,
    clamp_aim_point,
    distance_2d,
)
from neondefense.utils.input_handler import GameAction, InputEvent, LaunchResult

logger = logging.getLogger(__name__)

NO_AMMO_MESSAGE = "No interceptor missiles available in active bases."
IDLE_MESSAGE = "Start a mission, then defend the cities with your mouse."


# ── Game ────────────────────────────────────────────────────────────────────


@dataclass
class Game:
    """Top-level simulation controller.

    Collaborators (render, audio, persistence, HUD) are injected; the
    defaults do nothing, which is what tests and headless runs want.
    Pass a seeded ``random.Random`` as *rng* for a replayable mission.
    """

    rng: random.Random = field(default_factory=random.Random)
    render: RenderBridge = field(default_factory=RenderBridge)
    audio: Any = field(default_factory=SilentAudio)
    persistence: Any = field(default_factory=NullHighScoreStore)
    hud_listener: HudListener = None

    state: GameState = GameState.IDLE
    mission: MissionState = field(default_factory=MissionState)

    # Subsystems, wired in __post_init__
    registry: EntityRegistry = field(init=False)
    score_display: ScoreDisplay = field(init=False)
    spawner: SpawnController = field(init=False)
    collisions: CollisionEngine = field(init=False)

    def __post_init__(self) -> None:
        self.registry = EntityRegistry(render=self.render)
        self.score_display = ScoreDisplay(
            high_score=self._load_high_score(),
            on_new_high_score=self._save_high_score,
        )
        self.spawner = SpawnController(self.registry, self.rng, self._cue)
        self.collisions = CollisionEngine(
            self.registry, self.score_display, self.rng, self._cue,
        )
        self._reset_mission()
        self._set_status(IDLE_MESSAGE)

    # ── Collaborators ───────────────────────────────────────────────────

    def _cue(self, event: SoundEvent, **params: Any) -> None:
        safe_call(self.audio.play, event, **params)

    def _load_high_score(self) -> int:
        loaded = safe_call(self.persistence.load_high_score)
        if isinstance(loaded, int) and loaded > 0:
            return loaded
        return 0

    def _save_high_score(self, score: int) -> None:
        safe_call(self.persistence.save_high_score, score)

    def _set_status(self, message: str) -> None:
        self.mission.status_message = message

    def hud_snapshot(self) -> HudSnapshot:
        return HudSnapshot(
            score=self.score,
            high_score=self.high_score,
            wave=self.mission.wave,
            alive_city_count=len(self.registry.alive_cities()),
            status_message=self.mission.status_message,
        )

    def _publish_hud(self) -> None:
        if self.hud_listener is not None:
            safe_call(self.hud_listener, self.hud_snapshot())

    # ── Queries ─────────────────────────────────────────────────────────

    @property
    def score(self) -> int:
        return self.score_display.player_score

    @property
    def high_score(self) -> int:
        return self.score_display.high_score

    @property
    def wave(self) -> int:
        return self.mission.wave

    @property
    def running(self) -> bool:
        """True while a mission is in progress (combat or cutscene)."""
        return self.state in (GameState.RUNNING, GameState.WAVE_TRANSITION)

    @property
    def wave_transition(self) -> bool:
        return self.state is GameState.WAVE_TRANSITION

    # ── Mission lifecycle ───────────────────────────────────────────────

    def _reset_mission(self) -> None:
        """Return every entity and counter to its initial state."""
        self.mission = MissionState()
        self.score_display.reset()
        self.registry.reset()
        self.collisions.scoring = False
        self.state = GameState.IDLE

    def start_mission(self) -> None:
        """Reset everything and begin wave 1, whatever the current phase."""
        self._cue(SoundEvent.NEW_MISSION)
        self._reset_mission()
        self.mission.high_score_before_mission = self.high_score
        self.collisions.scoring = True
        logger.info("mission started (high score %d)", self.high_score)
        self._begin_next_wave()
        self._publish_hud()

    # ── Wave lifecycle ──────────────────────────────────────────────────

    def _begin_next_wave(self) -> None:
        """Advance to the next wave: re-arm bases and reload spawn pacing."""
        self.mission.wave += 1
        self.mission.transition_timer = 0.0
        self.state = GameState.RUNNING

        for base in self.registry.bases:
            if base.alive:
                base.rearm()
                self.registry.touch(base)

        self.spawner.begin_wave(self.mission)
        self._set_status(
            f"Wave {self.mission.wave} incoming. Defend all remaining cities."
        )
        logger.info(
            "wave %d: %d enemies, spawn rate %.3f",
            self.mission.wave, self.mission.enemy_to_spawn, self.mission.spawn_rate,
        )
        self._cue(SoundEvent.WAVE_START, wave=self.mission.wave)

    def _complete_wave(self) -> int:
        """Enter the post-wave cutscene and award the survival bonus."""
        bonus = calculate_wave_bonus(
            len(self.registry.alive_cities()),
            self.registry.total_ammo,
        )
        if bonus > 0:
            self.score_display.add(bonus)

        self.mission.last_bonus = bonus
        self.mission.transition_timer = CUTSCENE_DURATION
        self.state = GameState.WAVE_TRANSITION
        self._set_status(
            f"Wave {self.mission.wave} cleared. Bonus {bonus}. Re-arming silos..."
        )
        logger.info("wave %d cleared, bonus %d", self.mission.wave, bonus)
        self._cue(SoundEvent.WAVE_CLEAR, wave=self.mission.wave, bonus=bonus)
        return bonus

    def _game_over(self) -> None:
        self.state = GameState.GAME_OVER
        self.mission.transition_timer = 0.0
        self.collisions.scoring = False
        if self.score > self.mission.high_score_before_mission:
            message = f"Mission failed. New high score: {self.high_score:,}."
        else:
            message = (
                f"Mission failed. Score {self.score:,}. High {self.high_score:,}."
            )
        self._set_status(f"{message} Start a new mission to play again.")
        logger.info("game over at wave %d, score %d", self.mission.wave, self.score)
        self._cue(SoundEvent.GAME_OVER)

    # ── Per-tick update ─────────────────────────────────────────────────

    def update(self, delta: float) -> GameState:
        """Advance the simulation by *delta* seconds.

        *delta* is clamped to ``MAX_DELTA`` so a stalled frame cannot skip
        over collisions.  Returns the state after the update.
        """
        delta = clamp(delta, 0.0, MAX_DELTA)

        if self.running:
            if self.state is GameState.WAVE_TRANSITION:
                self.mission.transition_timer -= delta
                if self.mission.transition_timer <= 0:
                    self._begin_next_wave()

            if self.state is GameState.RUNNING:
                self.spawner.update(self.mission, delta)

            self._advance(delta)

            if not self.registry.alive_cities():
                self._game_over()
            elif (
                self.state is GameState.RUNNING
                and self.mission.all_spawned
                and self.registry.dynamic_count == 0
            ):
                self._complete_wave()
        else:
            # Leftover missiles and blasts wind down; nothing spawns or scores
            self._advance(delta)

        self._publish_hud()
        return self.state

    def _advance(self, delta: float) -> None:
        """Move every missile and explosion, resolving collisions.

        Entities created during this pass are appended and first move on
        the next tick.
        """
        registry = self.registry

        enemies = registry.enemy_missiles
        for i in range(len(enemies) - 1, -1, -1):
            missile = enemies[i]
            arrived = missile.update(delta)
            if missile.ready_to_split and self.state is GameState.RUNNING:
                self.spawner.split(missile, self.mission.wave)
            if arrived:
                self.collisions.impact(missile)
            else:
                registry.touch(missile)

        interceptors = registry.player_missiles
        for i in range(len(interceptors) - 1, -1, -1):
            missile = interceptors[i]
            if missile.update(delta):
                registry.remove_at(interceptors, i)
                self.collisions.spawn_explosion(ExplosionKind.DEFENSE, missile.end)
            else:
                registry.touch(missile)

        explosions = registry.explosions
        for i in range(len(explosions) - 1, -1, -1):
            explosion = explosions[i]
            if not explosion.update(delta):
                registry.remove_at(explosions, i)
                continue
            registry.touch(explosion)
            self.collisions.apply_explosion(explosion)

    # ── Player actions ──────────────────────────────────────────────────

    def _selected_base(self, base_index: int) -> Optional[LaunchBase]:
        if 0 <= base_index < len(self.registry.bases):
            base = self.registry.bases[base_index]
            if base.can_fire():
                return base
        return None

    def launch(
        self, aim_x: float, aim_y: float, base_index: Optional[int] = None
    ) -> LaunchResult:
        """Fire an interceptor at the world point (*aim_x*, *aim_y*).

        Without *base_index* the nearest living base with ammo (by
        horizontal distance) fires.  The aim point is clamped into the
        reachable world.
        """
        if self.state is not GameState.RUNNING:
            return LaunchResult.IGNORED

        target = clamp_aim_point(aim_x, aim_y)
        if base_index is None:
            base = pick_launch_base(self.registry.bases, target[0])
        else:
            base = self._selected_base(base_index)

        if base is None:
            self._set_status(NO_AMMO_MESSAGE)
            self._cue(SoundEvent.NO_AMMO)
            self._publish_hud()
            return LaunchResult.NO_AMMO_AVAILABLE

        start = (base.position_x, base.position_y + PLAYER_LAUNCH_HEIGHT)
        if distance_2d(start, target) <= MIN_SPAWN_DISTANCE:
            return LaunchResult.IGNORED

        base.take_round()
        self.registry.touch(base)
        self.registry.add(PlayerMissile(
            start=start,
            end=target,
            speed=PLAYER_SPEED_BASE + self.mission.wave * PLAYER_SPEED_PER_WAVE,
            base_index=base.index,
        ))
        self._cue(SoundEvent.PLAYER_LAUNCH)
        self._publish_hud()
        return LaunchResult.LAUNCHED

    def handle_event(self, event: InputEvent) -> Optional[LaunchResult]:
        """Dispatch an input event.  Returns the launch outcome, if any."""
        if event.action is GameAction.LAUNCH:
            return self.launch(event.aim_x, event.aim_y, event.base_index)
        if event.action is GameAction.START_MISSION:
            self.start_mission()
        return None

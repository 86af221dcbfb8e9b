"""
Enemy spawn controller for Neon Missile Defense.

Schedules enemy warheads for the active wave, chooses their targets and
builds split fragments.  All randomness comes from the injected
``random.Random`` so a seeded or scripted source replays exactly.

Target weighting: every living city appears twice in the candidate list
and every living base once, so cities are twice as likely to be hit.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from neondefense.config import (
    BASE_TARGET_WEIGHT,
    CITY_TARGET_WEIGHT,
    ENEMY_ENTRY_ALT_MAX,
    ENEMY_ENTRY_ALT_MIN,
    ENEMY_ENTRY_MARGIN_X,
    ENEMY_SPEED_MAX,
    ENEMY_SPEED_MIN,
    ENEMY_SPEED_PER_WAVE,
    GROUND_TARGET_MARGIN_X,
    GROUND_TARGET_Y,
    MIN_SPAWN_DISTANCE,
    SPAWN_JITTER_HIGH,
    SPAWN_JITTER_LOW,
    SPAWN_TIMER_INITIAL,
    SPLIT_AT_MAX,
    SPLIT_AT_MIN,
    SPLIT_CHILDREN,
    SPLIT_MIN_WAVE,
    WORLD_LEFT,
    WORLD_RIGHT,
)
from neondefense.models.missile import EnemyMissile, Target
from neondefense.models.registry import EntityRegistry
from neondefense.state import MissionState
from neondefense.ui.audio import SoundEvent
from neondefense.utils.functions import (
    Point,
    distance_2d,
    get_enemy_count,
    get_spawn_rate,
    get_split_probability,
    rand_range,
)

logger = logging.getLogger(__name__)


def _no_cue(event: SoundEvent, **params: Any) -> None:
    pass


@dataclass
class SpawnController:
    """Creates enemy missiles on a jittered timer."""

    registry: EntityRegistry
    rng: random.Random = field(default_factory=random.Random)
    cue: Callable[..., None] = _no_cue

    # ── Wave setup ──────────────────────────────────────────────────────

    def begin_wave(self, state: MissionState) -> None:
        """Load the pacing parameters for ``state.wave``."""
        state.enemy_spawned = 0
        state.enemy_to_spawn = get_enemy_count(state.wave)
        state.spawn_rate = get_spawn_rate(state.wave)
        state.spawn_timer = SPAWN_TIMER_INITIAL

    # ── Per-tick update ─────────────────────────────────────────────────

    def update(self, state: MissionState, delta: float) -> Optional[EnemyMissile]:
        """Count down the spawn timer and launch at most one missile.

        A degenerate launch still uses up its slot in the wave.
        """
        state.spawn_timer -= delta
        if state.all_spawned or state.spawn_timer > 0:
            return None
        missile = self.spawn_enemy(state.wave)
        state.enemy_spawned += 1
        state.spawn_timer = rand_range(
            self.rng,
            state.spawn_rate * SPAWN_JITTER_LOW,
            state.spawn_rate * SPAWN_JITTER_HIGH,
        )
        return missile

    # ── Targeting ───────────────────────────────────────────────────────

    def pick_target(self) -> Target:
        """Choose a target among the structures still standing."""
        weighted: list[Any] = []
        for city in self.registry.alive_cities():
            weighted.extend([city] * CITY_TARGET_WEIGHT)
        for base in self.registry.alive_bases():
            weighted.extend([base] * BASE_TARGET_WEIGHT)

        if not weighted:
            x = rand_range(
                self.rng,
                WORLD_LEFT + GROUND_TARGET_MARGIN_X,
                WORLD_RIGHT - GROUND_TARGET_MARGIN_X,
            )
            return Target.ground(x, GROUND_TARGET_Y)
        return Target.of(self.rng.choice(weighted))

    def _entry_point(self) -> Point:
        return (
            rand_range(
                self.rng,
                WORLD_LEFT + ENEMY_ENTRY_MARGIN_X,
                WORLD_RIGHT - ENEMY_ENTRY_MARGIN_X,
            ),
            rand_range(self.rng, ENEMY_ENTRY_ALT_MIN, ENEMY_ENTRY_ALT_MAX),
        )

    # ── Construction ────────────────────────────────────────────────────

    def spawn_enemy(
        self, wave: int, origin: Optional[Point] = None
    ) -> Optional[EnemyMissile]:
        """Create one enemy missile and register it.

        Missiles launched from *origin* are split fragments and are never
        allowed to split again.  Returns None for a degenerate launch
        whose path is too short to fly.
        """
        target = self.pick_target()
        start = origin if origin is not None else self._entry_point()
        if distance_2d(start, target.position) <= MIN_SPAWN_DISTANCE:
            return None

        speed = rand_range(self.rng, ENEMY_SPEED_MIN, ENEMY_SPEED_MAX) + wave * ENEMY_SPEED_PER_WAVE
        from_split = origin is not None
        can_split = (
            wave >= SPLIT_MIN_WAVE
            and not from_split
            and self.rng.random() < get_split_probability(wave)
        )
        split_at = rand_range(self.rng, SPLIT_AT_MIN, SPLIT_AT_MAX) if can_split else 0.0

        missile = EnemyMissile(
            start=start,
            end=target.position,
            speed=speed,
            target=target,
            can_split=can_split,
            split_at=split_at,
            from_split=from_split,
        )
        self.registry.add(missile)
        self.cue(SoundEvent.ENEMY_LAUNCH)
        return missile

    def split(self, missile: EnemyMissile, wave: int) -> list[EnemyMissile]:
        """Fragment *missile* into two new warheads at its current position.

        The parent is marked as split and keeps flying to its own target.
        """
        missile.did_split = True
        children = []
        for _ in range(SPLIT_CHILDREN):
            child = self.spawn_enemy(wave, origin=missile.position)
            if child is not None:
                children.append(child)
        logger.debug("warhead split into %d fragments", len(children))
        return children

"""
Collision engine for Neon Missile Defense.

Resolves explosion-vs-missile interceptions, warhead splash damage against
cities and bases, and direct ground impacts.

Scoring:
    - 30 points when a defense explosion (player interceptor) catches a warhead
    - 18 points when a warhead explosion sets off another warhead (chain)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable

from neondefense.config import (
    POINTS_PER_CHAIN_DETONATION,
    POINTS_PER_INTERCEPT,
    SPLASH_RADIUS_FACTOR,
    SPLASH_RADIUS_MIN,
)
from neondefense.models.city import City
from neondefense.models.defense import LaunchBase
from neondefense.models.explosion import Explosion, ExplosionKind
from neondefense.models.missile import EnemyMissile, TargetKind
from neondefense.models.registry import EntityRegistry
from neondefense.ui.audio import SoundEvent
from neondefense.ui.text import ScoreDisplay
from neondefense.utils.functions import Point, distance_2d

logger = logging.getLogger(__name__)


def _no_cue(event: SoundEvent, **params: Any) -> None:
    pass


def splash_radius(explosion: Explosion) -> float:
    """Ground damage radius of a warhead explosion at its current size."""
    return max(SPLASH_RADIUS_MIN, explosion.radius * SPLASH_RADIUS_FACTOR)


def intercept_points(explosion: Explosion) -> int:
    if explosion.kind is ExplosionKind.DEFENSE:
        return POINTS_PER_INTERCEPT
    return POINTS_PER_CHAIN_DETONATION


@dataclass
class CollisionEngine:
    """Applies damage and awards points.

    ``scoring`` is switched off by the game once the mission has stopped,
    so leftover blasts can still play out without changing the score.
    """

    registry: EntityRegistry
    score: ScoreDisplay
    rng: random.Random = field(default_factory=random.Random)
    cue: Callable[..., None] = _no_cue
    scoring: bool = True

    # ── Explosions ──────────────────────────────────────────────────────

    def spawn_explosion(self, kind: ExplosionKind, position: Point) -> Explosion:
        explosion = Explosion.create(kind, position, self.rng)
        self.registry.add(explosion)
        return explosion

    def apply_explosion(self, explosion: Explosion) -> int:
        """Resolve everything *explosion* touches this tick.

        Returns the number of enemy missiles it detonated.
        """
        missiles = self.registry.enemy_missiles
        detonated = 0
        # Backwards so removals do not shift unvisited indices
        for i in range(len(missiles) - 1, -1, -1):
            if explosion.contains(missiles[i].position):
                self.detonate(i, intercept_points(explosion))
                detonated += 1

        if explosion.can_damage_ground:
            self._apply_splash(explosion)
        return detonated

    def _apply_splash(self, explosion: Explosion) -> None:
        radius = splash_radius(explosion)
        for city in self.registry.cities:
            if city.alive and distance_2d(city.position, explosion.position) <= radius:
                self.destroy_city(city)
        for base in self.registry.bases:
            if base.alive and distance_2d(base.position, explosion.position) <= radius:
                self.destroy_base(base)

    # ── Missiles ────────────────────────────────────────────────────────

    def detonate(self, index: int, points: int) -> None:
        """Blow up the enemy missile at *index* in mid-air."""
        missile = self.registry.remove_at(self.registry.enemy_missiles, index)
        self.spawn_explosion(ExplosionKind.WARHEAD, missile.position)
        if points > 0 and self.scoring:
            self.score.add(points)
            self.cue(SoundEvent.INTERCEPT)

    def impact(self, missile: EnemyMissile) -> None:
        """Handle a warhead reaching the end of its path.

        The named target is destroyed outright if it is still standing;
        the warhead explosion then splashes nearby structures on later
        ticks.
        """
        self.spawn_explosion(ExplosionKind.WARHEAD, missile.end)
        target = missile.target
        if target.kind is TargetKind.CITY and target.ref is not None:
            self.destroy_city(target.ref)
        elif target.kind is TargetKind.BASE and target.ref is not None:
            self.destroy_base(target.ref)
        self.cue(SoundEvent.ENEMY_IMPACT)
        self.registry.remove(missile)

    # ── Structures ──────────────────────────────────────────────────────

    def destroy_city(self, city: City) -> bool:
        if not city.destroy():
            return False
        logger.debug("city %d destroyed", city.index)
        self.registry.touch(city)
        self.cue(SoundEvent.STRUCTURE_DESTROYED)
        return True

    def destroy_base(self, base: LaunchBase) -> bool:
        if not base.destroy():
            return False
        logger.debug("base %d destroyed", base.index)
        self.registry.touch(base)
        self.cue(SoundEvent.STRUCTURE_DESTROYED)
        return True

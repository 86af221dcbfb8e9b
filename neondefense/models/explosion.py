"""
Explosion model for Neon Missile Defense.

Explosions are circles that grow to ``max_radius``, then shrink at 72 % of
their growth rate until they vanish.  Warhead explosions (enemy impacts and
chain detonations) can damage structures; defense explosions (player
interceptors) only destroy missiles.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from neondefense.config import (
    DEFENSE_GROWTH,
    DEFENSE_RADIUS_MAX,
    DEFENSE_RADIUS_MIN,
    EXPLOSION_SHRINK_FACTOR,
    EXPLOSION_START_RADIUS,
    WARHEAD_GROWTH,
    WARHEAD_RADIUS_MAX,
    WARHEAD_RADIUS_MIN,
)
from neondefense.utils.functions import Point, distance_2d, rand_range


class ExplosionKind(Enum):
    WARHEAD = "warhead"
    DEFENSE = "defense"


# ── Explosion ──────────────────────────────────────────────────────────────


@dataclass
class Explosion:
    """A single expanding/contracting blast.

    ``shrinking`` flips from False to True exactly once, when the radius
    reaches ``max_radius``.
    """

    kind: ExplosionKind
    position: Point
    max_radius: float
    growth: float
    radius: float = EXPLOSION_START_RADIUS
    shrinking: bool = False
    visual: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def create(
        cls, kind: ExplosionKind, position: Point, rng: random.Random
    ) -> "Explosion":
        """Build an explosion with the size and growth rate for *kind*."""
        if kind is ExplosionKind.DEFENSE:
            max_radius = rand_range(rng, DEFENSE_RADIUS_MIN, DEFENSE_RADIUS_MAX)
            growth = DEFENSE_GROWTH
        else:
            max_radius = rand_range(rng, WARHEAD_RADIUS_MIN, WARHEAD_RADIUS_MAX)
            growth = WARHEAD_GROWTH
        return cls(kind=kind, position=position, max_radius=max_radius, growth=growth)

    @property
    def can_damage_ground(self) -> bool:
        return self.kind is ExplosionKind.WARHEAD

    @property
    def finished(self) -> bool:
        return self.radius <= 0

    def update(self, delta: float) -> bool:
        """Advance one tick.  Returns True while the explosion is still visible."""
        if not self.shrinking:
            self.radius += self.growth * delta
            if self.radius >= self.max_radius:
                self.radius = self.max_radius
                self.shrinking = True
        else:
            self.radius -= self.growth * delta * EXPLOSION_SHRINK_FACTOR
        return not self.finished

    def contains(self, point: Point) -> bool:
        """Return True if *point* lies inside the current blast radius."""
        return distance_2d(point, self.position) <= self.radius

"""
Entity registry for Neon Missile Defense.

Owns the static city/base arrays and the three live collections (enemy
missiles, player missiles, explosions).  Appends are O(1); removal
compacts the list.  Order inside a collection carries no meaning.

The registry is the only place that talks to the render bridge about
entity lifecycles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from neondefense.bridges import RenderBridge, VisualKind, safe_call
from neondefense.models.city import City, build_cities
from neondefense.models.defense import LaunchBase, build_bases
from neondefense.models.explosion import Explosion, ExplosionKind
from neondefense.models.missile import EnemyMissile, PlayerMissile

logger = logging.getLogger(__name__)

Entity = Union[City, LaunchBase, EnemyMissile, PlayerMissile, Explosion]


def visual_kind_for(entity: Entity) -> VisualKind:
    """Map an entity record to the presentation category it needs."""
    if isinstance(entity, City):
        return VisualKind.CITY
    if isinstance(entity, LaunchBase):
        return VisualKind.BASE
    if isinstance(entity, EnemyMissile):
        return VisualKind.SPLIT_MISSILE if entity.can_split else VisualKind.ENEMY_MISSILE
    if isinstance(entity, PlayerMissile):
        return VisualKind.PLAYER_MISSILE
    if isinstance(entity, Explosion):
        if entity.kind is ExplosionKind.DEFENSE:
            return VisualKind.DEFENSE_EXPLOSION
        return VisualKind.WARHEAD_EXPLOSION
    raise TypeError(f"not a simulation entity: {entity!r}")


@dataclass
class EntityRegistry:
    """Holds every entity of the current mission."""

    render: RenderBridge = field(default_factory=RenderBridge)
    cities: list[City] = field(default_factory=list)
    bases: list[LaunchBase] = field(default_factory=list)
    enemy_missiles: list[EnemyMissile] = field(default_factory=list)
    player_missiles: list[PlayerMissile] = field(default_factory=list)
    explosions: list[Explosion] = field(default_factory=list)

    # ── Lifecycle ───────────────────────────────────────────────────────

    def _collection_for(self, entity: Entity) -> list[Any]:
        if isinstance(entity, EnemyMissile):
            return self.enemy_missiles
        if isinstance(entity, PlayerMissile):
            return self.player_missiles
        if isinstance(entity, Explosion):
            return self.explosions
        if isinstance(entity, City):
            return self.cities
        if isinstance(entity, LaunchBase):
            return self.bases
        raise TypeError(f"not a simulation entity: {entity!r}")

    def add(self, entity: Entity) -> Entity:
        """Append *entity* to its collection and create its visual."""
        self._collection_for(entity).append(entity)
        entity.visual = safe_call(
            self.render.on_entity_created, entity, visual_kind_for(entity)
        )
        return entity

    def remove_at(self, collection: list[Any], index: int) -> Entity:
        """Remove and return the entity at *index* of *collection*."""
        entity = collection.pop(index)
        self._release(entity)
        return entity

    def remove(self, entity: Entity) -> bool:
        """Remove *entity* by identity.  Returns False if it is not present."""
        collection = self._collection_for(entity)
        for i, candidate in enumerate(collection):
            if candidate is entity:
                self.remove_at(collection, i)
                return True
        return False

    def touch(self, entity: Entity) -> None:
        """Tell the render bridge that *entity* changed."""
        safe_call(self.render.on_entity_updated, entity)

    def _release(self, entity: Entity) -> None:
        safe_call(self.render.on_entity_removed, entity)
        entity.visual = None

    # ── Mission reset ───────────────────────────────────────────────────

    def clear_dynamic(self) -> None:
        """Drop every missile and explosion."""
        for collection in (self.enemy_missiles, self.player_missiles, self.explosions):
            for entity in collection:
                self._release(entity)
            collection.clear()

    def seed_structures(self) -> None:
        """Rebuild all cities and bases in their initial state."""
        for entity in (*self.cities, *self.bases):
            self._release(entity)
        self.cities.clear()
        self.bases.clear()
        for city in build_cities():
            self.add(city)
        for base in build_bases():
            self.add(base)
        logger.debug(
            "seeded %d cities and %d bases", len(self.cities), len(self.bases)
        )

    def reset(self) -> None:
        self.clear_dynamic()
        self.seed_structures()

    # ── Queries ─────────────────────────────────────────────────────────

    def alive_cities(self) -> list[City]:
        return [c for c in self.cities if c.alive]

    def alive_bases(self) -> list[LaunchBase]:
        return [b for b in self.bases if b.alive]

    def alive_bases_with_ammo(self) -> list[LaunchBase]:
        return [b for b in self.bases if b.can_fire()]

    @property
    def dynamic_count(self) -> int:
        """Missiles and explosions still in play."""
        return (
            len(self.enemy_missiles)
            + len(self.player_missiles)
            + len(self.explosions)
        )

    @property
    def total_ammo(self) -> int:
        """Interceptors held by living bases."""
        return sum(b.ammo for b in self.bases if b.alive)

"""
Missile types for Neon Missile Defense.

Both enemy warheads and player interceptors fly a straight line from
``start`` to ``end``.  Motion is a normalised ``progress`` value advanced
by ``speed * delta / distance`` each tick and converted back to a position
by linear interpolation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from neondefense.models.city import City
from neondefense.models.defense import LaunchBase
from neondefense.utils.functions import Point, distance_2d, lerp_point


# ── Targets ────────────────────────────────────────────────────────────────


class TargetKind(Enum):
    CITY = "city"
    BASE = "base"
    GROUND = "ground"


@dataclass(frozen=True)
class Target:
    """What an enemy warhead is aimed at.

    ``position`` is a snapshot taken at launch, so the aim point does not
    move if the referenced structure is destroyed in the meantime.
    ``ref`` is None for ground targets.
    """

    kind: TargetKind
    position: Point
    ref: Optional[Union[City, LaunchBase]] = None

    @classmethod
    def of(cls, structure: Union[City, LaunchBase]) -> "Target":
        kind = TargetKind.CITY if isinstance(structure, City) else TargetKind.BASE
        return cls(kind=kind, position=structure.position, ref=structure)

    @classmethod
    def ground(cls, x: float, y: float) -> "Target":
        return cls(kind=TargetKind.GROUND, position=(x, y))


# ── Motion helpers ─────────────────────────────────────────────────────────


def advance_progress(progress: float, speed: float, delta: float, distance: float) -> float:
    """Return *progress* advanced by one tick of length *delta*."""
    return progress + (speed * delta) / distance


# ── Enemy missile ──────────────────────────────────────────────────────────


@dataclass
class EnemyMissile:
    """Incoming warhead.

    A missile with ``can_split`` fragments once, when ``progress`` reaches
    ``split_at``; the parent keeps flying to its own target.  Missiles
    created by a split (``from_split``) never split themselves.
    """

    start: Point
    end: Point
    speed: float
    target: Target
    can_split: bool = False
    split_at: float = 0.0
    from_split: bool = False

    # Runtime state
    position: Point = (0.0, 0.0)
    distance: float = 0.0
    progress: float = 0.0
    did_split: bool = False
    visual: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.position = self.start
        self.distance = distance_2d(self.start, self.end)

    @property
    def arrived(self) -> bool:
        return self.progress >= 1.0

    @property
    def ready_to_split(self) -> bool:
        return self.can_split and not self.did_split and self.progress >= self.split_at

    def update(self, delta: float) -> bool:
        """Advance one tick.  Returns True once the warhead has arrived."""
        self.progress = advance_progress(self.progress, self.speed, delta, self.distance)
        self.position = lerp_point(self.start, self.end, min(self.progress, 1.0))
        return self.arrived


# ── Player missile ─────────────────────────────────────────────────────────


@dataclass
class PlayerMissile:
    """Interceptor launched from a base toward the player's aim point.

    It does no damage itself: on arrival it is replaced by a defense
    explosion at ``end``.
    """

    start: Point
    end: Point
    speed: float
    base_index: int = 0

    position: Point = (0.0, 0.0)
    distance: float = 0.0
    progress: float = 0.0
    visual: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.position = self.start
        self.distance = distance_2d(self.start, self.end)

    @property
    def arrived(self) -> bool:
        return self.progress >= 1.0

    def update(self, delta: float) -> bool:
        """Advance one tick.  Returns True once the interceptor has arrived."""
        self.progress = advance_progress(self.progress, self.speed, delta, self.distance)
        self.position = lerp_point(self.start, self.end, min(self.progress, 1.0))
        return self.arrived

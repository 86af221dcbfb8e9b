"""
Launch base model for Neon Missile Defense.

Each base holds up to ``MAX_BASE_AMMO`` interceptors.  Ammo is refilled at
the start of every wave for bases that are still standing; a destroyed
base is emptied and never refilled within the mission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from neondefense.config import BASE_POSITIONS_X, MAX_BASE_AMMO, STRUCTURE_Y


# ── Launch Base ─────────────────────────────────────────────────────────────


@dataclass
class LaunchBase:
    """A single interceptor launch base.

    Properties:
        index: 0 = left, 1 = center, 2 = right
        position: (x, y) world coordinates
        ammo: current interceptor supply (0-10)
        alive: False once hit by a warhead
    """

    index: int
    position_x: float
    position_y: float = STRUCTURE_Y
    ammo: int = MAX_BASE_AMMO
    alive: bool = True
    visual: Any = field(default=None, repr=False, compare=False)

    @property
    def position(self) -> tuple[float, float]:
        return (self.position_x, self.position_y)

    def can_fire(self) -> bool:
        """Return True if this base can launch an interceptor."""
        return self.alive and self.ammo > 0

    def take_round(self) -> bool:
        """Remove one interceptor from the magazine.

        Returns False, leaving ammo untouched, if the base cannot fire.
        """
        if not self.can_fire():
            return False
        self.ammo -= 1
        return True

    def rearm(self) -> None:
        """Refill to capacity; a destroyed base stays empty."""
        if self.alive:
            self.ammo = MAX_BASE_AMMO

    def destroy(self) -> bool:
        """Destroy the base and empty it.  Returns False if already dead."""
        if not self.alive:
            return False
        self.alive = False
        self.ammo = 0
        return True


def build_bases() -> list[LaunchBase]:
    """Create the default three bases from configuration."""
    return [LaunchBase(index=i, position_x=x) for i, x in enumerate(BASE_POSITIONS_X)]


def pick_launch_base(
    bases: Sequence[LaunchBase], target_x: float
) -> Optional[LaunchBase]:
    """Return the firing-capable base horizontally nearest to *target_x*.

    Ties go to the base that comes first in *bases*.  Returns None when
    no base can fire.
    """
    best: Optional[LaunchBase] = None
    best_dist = float("inf")
    for base in bases:
        if not base.can_fire():
            continue
        d = abs(base.position_x - target_x)
        if d < best_dist:
            best_dist = d
            best = base
    return best

"""
City model for Neon Missile Defense.

Cities sit on the ground line at fixed positions.  A destroyed city stays
destroyed for the rest of the mission; only a mission reset rebuilds it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from neondefense.config import CITY_POSITIONS_X, STRUCTURE_Y


@dataclass
class City:
    """A single city on the ground line."""

    index: int
    position_x: float
    position_y: float = STRUCTURE_Y
    alive: bool = True
    visual: Any = field(default=None, repr=False, compare=False)

    @property
    def position(self) -> tuple[float, float]:
        return (self.position_x, self.position_y)

    def destroy(self) -> bool:
        """Mark the city as destroyed.  Returns False if it already was."""
        if not self.alive:
            return False
        self.alive = False
        return True


def build_cities() -> list[City]:
    """Create the default row of cities from configuration."""
    return [City(index=i, position_x=x) for i, x in enumerate(CITY_POSITIONS_X)]

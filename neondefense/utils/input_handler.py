"""
Input handler for Neon Missile Defense.

Maps player input to game actions.  Pointer projection into world space
is done by the front-end; the core only sees world coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameAction(Enum):
    """Actions the player can trigger."""
    LAUNCH = auto()
    START_MISSION = auto()
    TOGGLE_MUTE = auto()
    QUIT = auto()
    NONE = auto()


class LaunchResult(Enum):
    """Outcome of a launch request."""
    LAUNCHED = auto()
    NO_AMMO_AVAILABLE = auto()
    IGNORED = auto()          # mission not accepting input (idle, cutscene, game over)


@dataclass
class InputEvent:
    """Input event consumed by the game loop.

    ``base_index`` selects a launch base explicitly; ``None`` means the
    nearest base with ammo is used.
    """
    action: GameAction
    aim_x: float = 0.0
    aim_y: float = 0.0
    base_index: Optional[int] = None

"""
Mission state for Neon Missile Defense.

``GameState`` is the wave phase; exactly one is current at any time.
``MissionState`` is a plain record of the counters the wave state machine
and the spawn controller share.  Both are owned by
:class:`neondefense.game.Game`; the record is replaced wholesale on
mission reset.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class GameState(Enum):
    IDLE = auto()              # before the first mission
    RUNNING = auto()           # enemies spawning, combat live
    WAVE_TRANSITION = auto()   # post-wave cutscene
    GAME_OVER = auto()         # every city lost; waits for a new mission


@dataclass
class MissionState:
    wave: int = 0
    transition_timer: float = 0.0

    # Spawn bookkeeping for the current wave
    enemy_spawned: int = 0
    enemy_to_spawn: int = 0
    spawn_timer: float = 0.0
    spawn_rate: float = 0.9

    last_bonus: int = 0
    high_score_before_mission: int = 0
    status_message: str = ""

    @property
    def all_spawned(self) -> bool:
        return self.enemy_spawned >= self.enemy_to_spawn

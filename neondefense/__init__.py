"""
Neon Missile Defense - simulation core of a missile-defense arcade game.
"""

__version__ = "1.0.0"

from .game import Game
from .state import GameState, MissionState
from .config import *  # noqa: F401,F403

__all__ = ["Game", "GameState", "MissionState"]

"""Utility functions and helpers."""

from .functions import (
    calculate_wave_bonus,
    clamp,
    clamp_aim_point,
    distance_2d,
    get_enemy_count,
    get_spawn_rate,
    get_split_probability,
    lerp_point,
    rand_range,
)
from .input_handler import GameAction, InputEvent, LaunchResult

__all__ = [
    "calculate_wave_bonus",
    "clamp",
    "clamp_aim_point",
    "distance_2d",
    "get_enemy_count",
    "get_spawn_rate",
    "get_split_probability",
    "lerp_point",
    "rand_range",
    "GameAction",
    "InputEvent",
    "LaunchResult",
]

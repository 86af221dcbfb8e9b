"""
Shared utility functions for Neon Missile Defense.

Provides planar geometry helpers, random-range sampling against an
injected random source, and the per-wave pacing and scoring formulas.
"""

from __future__ import annotations

import math
import random

from neondefense.config import (
    AIM_MARGIN_BOTTOM,
    AIM_MARGIN_TOP,
    AIM_MARGIN_X,
    POINTS_PER_REMAINING_AMMO,
    POINTS_PER_SURVIVING_CITY,
    SPAWN_RATE_BASE,
    SPAWN_RATE_DECAY,
    SPAWN_RATE_MIN,
    SPLIT_CHANCE_BASE,
    SPLIT_CHANCE_MAX,
    SPLIT_CHANCE_PER_WAVE,
    WAVE_BASE_ENEMIES,
    WAVE_ENEMY_INCREMENT,
    WORLD_BOTTOM,
    WORLD_LEFT,
    WORLD_RIGHT,
    WORLD_TOP,
)

Point = tuple[float, float]


# ── Geometry ───────────────────────────────────────────────────────────────


def distance_2d(a: Point, b: Point) -> float:
    """Euclidean distance between two points in the world plane."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def lerp_point(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation from *a* to *b*; *t* is not clamped."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def clamp_aim_point(x: float, y: float) -> Point:
    """Pull an aim point back inside the reachable part of the world."""
    return (
        clamp(x, WORLD_LEFT + AIM_MARGIN_X, WORLD_RIGHT - AIM_MARGIN_X),
        clamp(y, WORLD_BOTTOM + AIM_MARGIN_BOTTOM, WORLD_TOP - AIM_MARGIN_TOP),
    )


# ── Random helpers ─────────────────────────────────────────────────────────


def rand_range(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform float in [*lo*, *hi*] drawn from *rng*."""
    return rng.uniform(lo, hi)


# ── Wave helpers ────────────────────────────────────────────────────────────


def get_enemy_count(wave_number: int) -> int:
    """Number of enemy missiles launched in a wave (1-indexed)."""
    return WAVE_BASE_ENEMIES + (wave_number - 1) * WAVE_ENEMY_INCREMENT


def get_spawn_rate(wave_number: int) -> float:
    """Average seconds between enemy launches for a wave.

    Formula: 0.96 - 0.065 * (wave - 1), minimum 0.23.
    """
    return max(SPAWN_RATE_MIN, SPAWN_RATE_BASE - (wave_number - 1) * SPAWN_RATE_DECAY)


def get_split_probability(wave_number: int) -> float:
    """Chance that a freshly launched warhead will fragment mid-flight."""
    return min(SPLIT_CHANCE_MAX, SPLIT_CHANCE_BASE + wave_number * SPLIT_CHANCE_PER_WAVE)


# ── Scoring helpers ─────────────────────────────────────────────────────────


def calculate_wave_bonus(surviving_cities: int, remaining_ammo: int) -> int:
    """Calculate the end-of-wave bonus.

    Points for every surviving city and every interceptor still held by
    a living base.
    """
    return (
        surviving_cities * POINTS_PER_SURVIVING_CITY
        + remaining_ammo * POINTS_PER_REMAINING_AMMO
    )

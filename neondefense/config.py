"""
Configuration constants for Neon Missile Defense.

World layout, wave pacing, scoring and timing values.  All timing values
are in seconds; all distances are in world units.
"""

# ---------------------------------------------------------------------------
# World bounds
# ---------------------------------------------------------------------------
WORLD_LEFT: float = -620.0
WORLD_RIGHT: float = 620.0
WORLD_BOTTOM: float = -310.0
WORLD_TOP: float = 365.0

# ---------------------------------------------------------------------------
# Simulation timing
# ---------------------------------------------------------------------------
UPDATE_RATE: int = 60        # Hz – one tick per rendered frame
MAX_DELTA: float = 0.033     # largest tick step the simulation accepts
CUTSCENE_DURATION: float = 3.15

# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------
CITY_POSITIONS_X: list[float] = [-560.0, -340.0, -170.0, 170.0, 340.0, 560.0]
BASE_POSITIONS_X: list[float] = [-420.0, 0.0, 420.0]
STRUCTURE_Y: float = WORLD_BOTTOM + 20
MAX_BASE_AMMO: int = 10

# ---------------------------------------------------------------------------
# Wave pacing
# ---------------------------------------------------------------------------
WAVE_BASE_ENEMIES: int = 10
WAVE_ENEMY_INCREMENT: int = 4
SPAWN_RATE_BASE: float = 0.96
SPAWN_RATE_DECAY: float = 0.065
SPAWN_RATE_MIN: float = 0.23
SPAWN_TIMER_INITIAL: float = 0.6
SPAWN_JITTER_LOW: float = 0.65
SPAWN_JITTER_HIGH: float = 1.35

# Fresh enemy missiles enter above the visible sky
ENEMY_ENTRY_MARGIN_X: float = 10.0
ENEMY_ENTRY_ALT_MIN: float = WORLD_TOP + 10
ENEMY_ENTRY_ALT_MAX: float = WORLD_TOP + 120

# Fallback ground target once every structure is gone
GROUND_TARGET_MARGIN_X: float = 50.0
GROUND_TARGET_Y: float = WORLD_BOTTOM + 16

# ---------------------------------------------------------------------------
# Enemy missiles
# ---------------------------------------------------------------------------
ENEMY_SPEED_MIN: float = 62.0
ENEMY_SPEED_MAX: float = 86.0
ENEMY_SPEED_PER_WAVE: float = 5.5
CITY_TARGET_WEIGHT: int = 2
BASE_TARGET_WEIGHT: int = 1
MIN_SPAWN_DISTANCE: float = 1.0

# Warhead splitting
SPLIT_MIN_WAVE: int = 4
SPLIT_CHANCE_BASE: float = 0.07
SPLIT_CHANCE_PER_WAVE: float = 0.03
SPLIT_CHANCE_MAX: float = 0.35
SPLIT_AT_MIN: float = 0.35
SPLIT_AT_MAX: float = 0.68
SPLIT_CHILDREN: int = 2

# ---------------------------------------------------------------------------
# Player interceptors
# ---------------------------------------------------------------------------
PLAYER_SPEED_BASE: float = 440.0
PLAYER_SPEED_PER_WAVE: float = 16.0
PLAYER_LAUNCH_HEIGHT: float = 6.0

# Aim points are clamped inside these margins
AIM_MARGIN_X: float = 20.0
AIM_MARGIN_BOTTOM: float = 20.0
AIM_MARGIN_TOP: float = 10.0

# ---------------------------------------------------------------------------
# Explosions
# ---------------------------------------------------------------------------
EXPLOSION_START_RADIUS: float = 0.5
DEFENSE_RADIUS_MIN: float = 50.0
DEFENSE_RADIUS_MAX: float = 72.0
DEFENSE_GROWTH: float = 220.0
WARHEAD_RADIUS_MIN: float = 36.0
WARHEAD_RADIUS_MAX: float = 58.0
WARHEAD_GROWTH: float = 170.0
EXPLOSION_SHRINK_FACTOR: float = 0.72

# Splash damage against cities and bases
SPLASH_RADIUS_MIN: float = 12.0
SPLASH_RADIUS_FACTOR: float = 0.65

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
POINTS_PER_INTERCEPT: int = 30
POINTS_PER_CHAIN_DETONATION: int = 18
POINTS_PER_REMAINING_AMMO: int = 5
POINTS_PER_SURVIVING_CITY: int = 100

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
DEFAULT_SCORES_FILE: str = "highscore.json"

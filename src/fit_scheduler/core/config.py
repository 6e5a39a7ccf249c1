"""
Configuration constants for the program generation engine.

All adjustable parameters are centralized here for easy tuning.
Runtime overrides (lookback window, remote model settings) are read
from YAML by core/engine/config_loader.py.
"""

from typing import Final

# =============================================================================
# PERFORMANCE ANALYSIS BASELINE
# =============================================================================

DEFAULT_RECENT_WEEKS: Final[int] = 2  # Lookback window for session logs
BASELINE_RATING: Final[float] = 3.5  # Assumed rating with no feedback
BASELINE_DIFFICULTY: Final[float] = 2.0  # "just right"
BASELINE_COMPLETION: Final[float] = 1.0
BASELINE_CONSISTENCY: Final[float] = 1.0
TARGET_SESSIONS_PER_WEEK: Final[float] = 4.0  # 4 sessions/week = consistency 1.0

DIFFICULTY_SCORES: Final[dict[str, float]] = {
    "too_easy": 1.0,
    "just_right": 2.0,
    "too_hard": 3.0,
}

# =============================================================================
# INTENSITY ADJUSTMENT RULES
# =============================================================================

EASY_DIFFICULTY_THRESHOLD: Final[float] = 1.5  # avg difficulty below → too easy
HARD_DIFFICULTY_THRESHOLD: Final[float] = 2.5  # avg difficulty above → too hard
DIFFICULTY_ADJUSTMENT: Final[float] = 0.15

HIGH_RATING_THRESHOLD: Final[float] = 4.5
HIGH_RATING_ADJUSTMENT: Final[float] = 0.05
LOW_RATING_THRESHOLD: Final[float] = 2.5
LOW_RATING_ADJUSTMENT: Final[float] = -0.10

LOW_COMPLETION_THRESHOLD: Final[float] = 0.70
LOW_COMPLETION_ADJUSTMENT: Final[float] = -0.10
HIGH_COMPLETION_THRESHOLD: Final[float] = 0.95
HIGH_COMPLETION_ADJUSTMENT: Final[float] = 0.05

MAX_INTENSITY_ADJUSTMENT: Final[float] = 0.20  # Clamp to [-0.2, +0.2]

# Performance pass
EXTRA_SET_ADJUSTMENT_THRESHOLD: Final[float] = 0.10  # a > 0.1 adds a set
MAX_SETS: Final[int] = 6
MAX_REP_INCREASE: Final[int] = 5
MAX_REP_DECREASE: Final[int] = 3
REST_DECREASE_ON_PROGRESS: Final[int] = 10
REST_INCREASE_ON_REGRESS: Final[int] = 15

MIN_REST_SECONDS: Final[int] = 30
MAX_REST_SECONDS: Final[int] = 120

# =============================================================================
# GOAL MODIFIERS
# =============================================================================
# goal -> (rep increase, rep cap, rest decrease, rest floor)

GOAL_MODIFIERS: Final[dict[str, tuple[int, int, int, int] | None]] = {
    "weight_loss": (5, 20, 15, 30),
    "muscle_gain": None,
    "maintenance": None,
    "recomposition": (2, 15, 10, 45),
}

# =============================================================================
# CHALLENGE WORKOUT
# =============================================================================

CHALLENGE_MAX_SETS: Final[int] = 5
CHALLENGE_EXTRA_REPS: Final[int] = 3
CHALLENGE_REST_DECREASE: Final[int] = 15
CHALLENGE_TITLE_KEY: Final[str] = "workout_challenge"

# =============================================================================
# DIFFICULTY TIERS
# =============================================================================

BEGINNER_LAST_WEEK: Final[int] = 2  # weeks 1-2
INTERMEDIATE_LAST_WEEK: Final[int] = 5  # weeks 3-5, 6+ advanced
MIN_SESSIONS_FOR_TIER_SHIFT: Final[int] = 3
TIER_UP_COMPLETION: Final[float] = 0.90
TIER_DOWN_COMPLETION: Final[float] = 0.60

# =============================================================================
# SPLITS
# =============================================================================

FULL_BODY_MAX_SESSIONS: Final[int] = 4  # <= 4 sessions → full body
FULL_BODY_VARIATIONS: Final[int] = 3
PPL_VARIATIONS: Final[int] = 2

FULL_BODY_TITLE_KEY: Final[str] = "workout_full_body"

# (title, muscle groups) for each slot; truncated to sessions/week
PPL_PATTERN: Final[list[tuple[str, list[str]]]] = [
    ("workout_push", ["chest", "shoulders", "triceps"]),
    ("workout_pull", ["back", "biceps"]),
    ("workout_legs", ["legs", "glutes"]),
    ("workout_push", ["chest", "shoulders", "triceps"]),
    ("workout_pull", ["back", "biceps"]),
    ("workout_legs", ["legs", "glutes"]),
]

CORE_EXERCISES_PER_DAY: Final[int] = 2

# =============================================================================
# DURATION
# =============================================================================

SECONDS_PER_SET: Final[int] = 45  # Assumed working time per set
WARMUP_MINUTES: Final[int] = 5

# =============================================================================
# SCHEDULING
# =============================================================================

DAYS_IN_WEEK: Final[int] = 7

# =============================================================================
# PROGRESSION
# =============================================================================

PROGRESSION_REP_STEP: Final[int] = 1
PROGRESSION_REP_CAP: Final[int] = 3

# =============================================================================
# PROFILE LIMITS
# =============================================================================

MIN_SESSIONS_PER_WEEK: Final[int] = 3
MAX_SESSIONS_PER_WEEK: Final[int] = 6

# =============================================================================
# REMOTE GENERATION
# =============================================================================

REMOTE_MODEL: Final[str] = "gpt-4o-mini"
REMOTE_TEMPERATURE: Final[float] = 0.7
REMOTE_MAX_TOKENS: Final[int] = 2000
REMOTE_TIMEOUT_SECONDS: Final[float] = 30.0
REMOTE_FEEDBACK_SESSIONS: Final[int] = 10  # Last N logs summarised in the prompt
REMOTE_DEFAULT_REST: Final[int] = 60

"""
Performance analysis: reduce recent session logs into adaptation signals.

Implements the scoring model that decides how much to push or back off
next week, and the difficulty tier shown on generated workouts.
"""

from datetime import date, datetime, timedelta
from typing import Sequence

from .config import (
    BASELINE_COMPLETION,
    BASELINE_DIFFICULTY,
    BASELINE_RATING,
    BEGINNER_LAST_WEEK,
    DEFAULT_RECENT_WEEKS,
    DIFFICULTY_ADJUSTMENT,
    DIFFICULTY_SCORES,
    EASY_DIFFICULTY_THRESHOLD,
    HARD_DIFFICULTY_THRESHOLD,
    HIGH_COMPLETION_ADJUSTMENT,
    HIGH_COMPLETION_THRESHOLD,
    HIGH_RATING_ADJUSTMENT,
    HIGH_RATING_THRESHOLD,
    INTERMEDIATE_LAST_WEEK,
    LOW_COMPLETION_ADJUSTMENT,
    LOW_COMPLETION_THRESHOLD,
    LOW_RATING_ADJUSTMENT,
    LOW_RATING_THRESHOLD,
    MAX_INTENSITY_ADJUSTMENT,
    MIN_SESSIONS_FOR_TIER_SHIFT,
    TARGET_SESSIONS_PER_WEEK,
    TIER_DOWN_COMPLETION,
    TIER_UP_COMPLETION,
)
from .metrics import clamp, exercise_completion
from .models import DIFFICULTY_TIERS, Difficulty, PerformanceAnalysis, SessionLog


def recent_logs(
    session_logs: Sequence[SessionLog],
    recent_weeks: int = DEFAULT_RECENT_WEEKS,
    today: date | None = None,
) -> list[SessionLog]:
    """
    Return logs dated on or after today - recent_weeks.

    Args:
        session_logs: Full history, any order
        recent_weeks: Lookback window in weeks
        today: Reference day (default: current local date)

    Returns:
        Logs inside the window, in input order
    """
    today = today or date.today()
    cutoff = today - timedelta(weeks=recent_weeks)
    return [
        log for log in session_logs
        if datetime.strptime(log.date, "%Y-%m-%d").date() >= cutoff
    ]


def calculate_intensity_adjustment(
    average_rating: float,
    average_difficulty: float,
    completion_rate: float,
) -> float:
    """
    Combine feedback signals into one intensity nudge.

    Contributions are summed in a fixed order and the result clamped:
    - difficulty < 1.5: +0.15   | difficulty > 2.5: -0.15
    - rating >= 4.5:    +0.05   | rating < 2.5:     -0.10
    - completion < 0.7: -0.10   | completion >= 0.95: +0.05

    Args:
        average_rating: Mean 1-5 rating
        average_difficulty: Mean difficulty score (1.0-3.0)
        completion_rate: Fraction of exercises completed

    Returns:
        Adjustment in [-0.2, +0.2]
    """
    adjustment = 0.0

    if average_difficulty < EASY_DIFFICULTY_THRESHOLD:
        adjustment += DIFFICULTY_ADJUSTMENT
    elif average_difficulty > HARD_DIFFICULTY_THRESHOLD:
        adjustment -= DIFFICULTY_ADJUSTMENT

    if average_rating >= HIGH_RATING_THRESHOLD:
        adjustment += HIGH_RATING_ADJUSTMENT
    elif average_rating < LOW_RATING_THRESHOLD:
        adjustment += LOW_RATING_ADJUSTMENT

    if completion_rate < LOW_COMPLETION_THRESHOLD:
        adjustment += LOW_COMPLETION_ADJUSTMENT
    elif completion_rate >= HIGH_COMPLETION_THRESHOLD:
        adjustment += HIGH_COMPLETION_ADJUSTMENT

    return clamp(adjustment, -MAX_INTENSITY_ADJUSTMENT, MAX_INTENSITY_ADJUSTMENT)


def analyze_performance(
    session_logs: Sequence[SessionLog],
    recent_weeks: int = DEFAULT_RECENT_WEEKS,
    today: date | None = None,
) -> PerformanceAnalysis:
    """
    Build a PerformanceAnalysis from the recent part of the history.

    Logs older than the lookback window are ignored.  With nothing left,
    the neutral baseline is returned (adjustment 0.0, session_count 0).

    Args:
        session_logs: Full session history
        recent_weeks: Lookback window in weeks (default 2)
        today: Reference day (default: current local date)

    Returns:
        PerformanceAnalysis
    """
    recent = recent_logs(session_logs, recent_weeks, today)
    if not recent:
        return PerformanceAnalysis.baseline()

    ratings = [log.rating for log in recent if log.rating is not None]
    average_rating = sum(ratings) / len(ratings) if ratings else BASELINE_RATING

    scores = [DIFFICULTY_SCORES[log.difficulty] for log in recent if log.difficulty is not None]
    average_difficulty = sum(scores) / len(scores) if scores else BASELINE_DIFFICULTY

    completed, total = exercise_completion(recent)
    completion_rate = completed / total if total > 0 else BASELINE_COMPLETION

    weeks_analyzed = max(1, recent_weeks)
    sessions_per_week = len(recent) / weeks_analyzed
    consistency = min(sessions_per_week / TARGET_SESSIONS_PER_WEEK, 1.0)

    adjustment = calculate_intensity_adjustment(
        average_rating, average_difficulty, completion_rate
    )

    return PerformanceAnalysis(
        average_rating=average_rating,
        average_difficulty=average_difficulty,
        completion_rate=completion_rate,
        consistency_score=consistency,
        recommended_intensity_adjustment=adjustment,
        session_count=len(recent),
    )


def base_difficulty_for_week(week_index: int) -> Difficulty:
    """Weeks 1-2 beginner, 3-5 intermediate, 6+ advanced."""
    if week_index <= BEGINNER_LAST_WEEK:
        return "beginner"
    if week_index <= INTERMEDIATE_LAST_WEEK:
        return "intermediate"
    return "advanced"


def shift_difficulty(tier: Difficulty, steps: int) -> Difficulty:
    """Move a tier up (+) or down (-), saturating at the ends."""
    idx = DIFFICULTY_TIERS.index(tier) + steps
    idx = max(0, min(len(DIFFICULTY_TIERS) - 1, idx))
    return DIFFICULTY_TIERS[idx]  # type: ignore[return-value]


def difficulty_for_week(week_index: int, performance: PerformanceAnalysis) -> Difficulty:
    """
    Difficulty tier for a week, nudged by recent performance.

    With at least 3 analysed sessions:
    - too easy and nearly everything completed → one tier up
    - too hard or many exercises skipped → one tier down

    At most one step per call.

    Args:
        week_index: 1-based week number
        performance: Current PerformanceAnalysis

    Returns:
        Difficulty tier
    """
    tier = base_difficulty_for_week(week_index)

    if performance.session_count < MIN_SESSIONS_FOR_TIER_SHIFT:
        return tier

    if (
        performance.average_difficulty < EASY_DIFFICULTY_THRESHOLD
        and performance.completion_rate > TIER_UP_COMPLETION
    ):
        return shift_difficulty(tier, 1)

    if (
        performance.average_difficulty > HARD_DIFFICULTY_THRESHOLD
        or performance.completion_rate < TIER_DOWN_COMPLETION
    ):
        return shift_difficulty(tier, -1)

    return tier

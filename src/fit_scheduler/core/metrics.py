"""
Pure metric computation functions.

All functions are pure and typed for testability.
"""

import math
from typing import Sequence

from .config import SECONDS_PER_SET, WARMUP_MINUTES
from .models import Exercise, SessionLog


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Python's round() uses banker's rounding (round(0.5) == 0); rep and
    day-offset arithmetic needs round(0.5) == 1 and round(-0.5) == -1.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def workout_duration(exercises: Sequence[Exercise]) -> int:
    """
    Estimate workout duration in minutes.

    duration = floor(sum(sets * (45 + rest)) / 60) + 5

    45 s of work per set plus the prescribed rest, with a fixed
    5-minute warm-up allowance.

    Args:
        exercises: Exercises in the workout

    Returns:
        Duration in whole minutes
    """
    total_seconds = sum(e.sets * (SECONDS_PER_SET + e.rest_seconds) for e in exercises)
    return total_seconds // 60 + WARMUP_MINUTES


def exercise_completion(logs: Sequence[SessionLog]) -> tuple[int, int]:
    """
    Count completed and total exercise records across logs.

    An exercise record counts as completed when at least one of its sets
    is marked completed.

    Returns:
        (completed, total)
    """
    total = 0
    completed = 0
    for log in logs:
        total += len(log.exercise_records)
        completed += sum(1 for r in log.exercise_records if r.is_completed)
    return completed, total


def set_completion_by_exercise(logs: Sequence[SessionLog]) -> dict[str, tuple[int, int]]:
    """
    Aggregate per-exercise set completion across logs.

    Returns:
        {exercise_key: (completed_sets, total_sets)} in first-seen order
    """
    result: dict[str, tuple[int, int]] = {}
    for log in logs:
        for record in log.exercise_records:
            done = sum(1 for s in record.sets if s.completed)
            prev_done, prev_total = result.get(record.exercise_key, (0, 0))
            result[record.exercise_key] = (prev_done + done, prev_total + len(record.sets))
    return result


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))

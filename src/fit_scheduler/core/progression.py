"""
Week-over-week progression.
"""

from dataclasses import replace as _dc_replace
from typing import Sequence

from .config import PROGRESSION_REP_CAP, PROGRESSION_REP_STEP
from .models import Workout


def apply_progression(workouts: Sequence[Workout], week_index: int) -> list[Workout]:
    """
    Add a rep to every exercise on even weeks after the first.

    reps = min(reps + 1, reps + 3), which always resolves to reps + 1.
    Odd weeks and week 1 are returned unchanged.

    Args:
        workouts: Scheduled workouts
        week_index: 1-based week number

    Returns:
        New list of workouts
    """
    if week_index <= 1 or week_index % 2 != 0:
        return list(workouts)

    result: list[Workout] = []
    for w in workouts:
        exercises = [
            _dc_replace(
                e,
                reps=min(e.reps + PROGRESSION_REP_STEP, e.reps + PROGRESSION_REP_CAP),
            )
            for e in w.exercises
        ]
        result.append(_dc_replace(w, exercises=exercises))
    return result

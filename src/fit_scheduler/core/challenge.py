"""
Challenge workout: turns the last session of the week into a harder variant.
"""

from dataclasses import replace as _dc_replace

from .catalog import ExerciseCatalog
from .config import (
    CHALLENGE_EXTRA_REPS,
    CHALLENGE_MAX_SETS,
    CHALLENGE_REST_DECREASE,
    CHALLENGE_TITLE_KEY,
    MIN_REST_SECONDS,
)
from .metrics import workout_duration
from .models import Exercise, Workout


def intensify_exercise(exercise: Exercise) -> Exercise:
    """sets +1 (cap 5), reps +3, rest -15 s (floor 30)."""
    return _dc_replace(
        exercise,
        sets=min(exercise.sets + 1, CHALLENGE_MAX_SETS),
        reps=exercise.reps + CHALLENGE_EXTRA_REPS,
        rest_seconds=max(exercise.rest_seconds - CHALLENGE_REST_DECREASE, MIN_REST_SECONDS),
    )


def make_challenge(workout: Workout, catalog: ExerciseCatalog) -> Workout:
    """
    Build the challenge variant of a workout.

    Every exercise is intensified, then the equipment finisher is
    appended.  The finisher matches the first exercise's equipment
    ("none" for an empty workout).  Duration is recomputed and the
    workout is marked advanced.

    Args:
        workout: Workout to transform (not modified)
        catalog: Source of the finisher

    Returns:
        New Workout with is_challenge=True
    """
    exercises = [intensify_exercise(e) for e in workout.exercises]
    equipment = workout.exercises[0].equipment if workout.exercises else "none"
    exercises.append(catalog.finisher_for(equipment))

    return _dc_replace(
        workout,
        title_key=CHALLENGE_TITLE_KEY,
        exercises=exercises,
        duration_minutes=workout_duration(exercises),
        difficulty="advanced",
        is_challenge=True,
    )

"""
Intensity adjustment: goal-driven and performance-driven prescription edits.

Two passes run over the planned week.  The goal pass reshapes reps and
rest for the user's fitness goal; the performance pass nudges sets, reps
and rest by the recommended intensity adjustment.  A final clamp keeps
every prescription inside the safe bounds regardless of catalog data.
"""

from dataclasses import replace as _dc_replace
from typing import Sequence

from .config import (
    EXTRA_SET_ADJUSTMENT_THRESHOLD,
    GOAL_MODIFIERS,
    MAX_REP_DECREASE,
    MAX_REP_INCREASE,
    MAX_REST_SECONDS,
    MAX_SETS,
    MIN_REST_SECONDS,
    REST_DECREASE_ON_PROGRESS,
    REST_INCREASE_ON_REGRESS,
)
from .metrics import round_half_away, workout_duration
from .models import Exercise, PerformanceAnalysis, Workout


def _map_exercises(workouts: Sequence[Workout], fn) -> list[Workout]:
    """Apply fn to every exercise and recompute each workout's duration."""
    result: list[Workout] = []
    for w in workouts:
        exercises = [fn(e) for e in w.exercises]
        result.append(
            _dc_replace(w, exercises=exercises, duration_minutes=workout_duration(exercises))
        )
    return result


def adjust_exercise_for_goal(exercise: Exercise, goal: str) -> Exercise:
    """
    Reshape one exercise for a fitness goal.

    weight_loss:   reps +5 (cap 20), rest -15 s (floor 30)
    recomposition: reps +2 (cap 15), rest -10 s (floor 45)
    muscle_gain / maintenance: unchanged
    """
    modifier = GOAL_MODIFIERS.get(goal)
    if modifier is None:
        return exercise

    rep_increase, rep_cap, rest_decrease, rest_floor = modifier
    return _dc_replace(
        exercise,
        reps=min(exercise.reps + rep_increase, rep_cap),
        rest_seconds=max(exercise.rest_seconds - rest_decrease, rest_floor),
    )


def adjust_exercise_for_performance(exercise: Exercise, adjustment: float) -> Exercise:
    """
    Nudge one exercise by the recommended intensity adjustment.

    a > 0: one extra set when a > 0.1 (cap 6), reps scaled up by at most
           +5, rest -10 s (floor 30)
    a < 0: reps scaled down by at most -3, rest +15 s (cap 120)
    a == 0: unchanged

    Args:
        exercise: Exercise to adjust
        adjustment: Intensity adjustment in [-0.2, +0.2]

    Returns:
        Adjusted exercise
    """
    reps = exercise.reps
    delta = round_half_away(reps * adjustment)

    if adjustment > 0:
        sets = exercise.sets
        if adjustment > EXTRA_SET_ADJUSTMENT_THRESHOLD:
            sets = min(sets + 1, MAX_SETS)
        return _dc_replace(
            exercise,
            sets=sets,
            reps=min(reps + delta, reps + MAX_REP_INCREASE),
            rest_seconds=max(exercise.rest_seconds - REST_DECREASE_ON_PROGRESS, MIN_REST_SECONDS),
        )

    if adjustment < 0:
        return _dc_replace(
            exercise,
            reps=max(reps + delta, reps - MAX_REP_DECREASE),
            rest_seconds=min(exercise.rest_seconds + REST_INCREASE_ON_REGRESS, MAX_REST_SECONDS),
        )

    return exercise


def enforce_exercise_bounds(exercise: Exercise) -> Exercise:
    """Clamp to sets in [1, 6], reps >= 1, rest in [30, 120]."""
    return _dc_replace(
        exercise,
        sets=max(1, min(exercise.sets, MAX_SETS)),
        reps=max(1, exercise.reps),
        rest_seconds=max(MIN_REST_SECONDS, min(exercise.rest_seconds, MAX_REST_SECONDS)),
    )


def apply_goal_adjustment(workouts: Sequence[Workout], goal: str) -> list[Workout]:
    """Run the goal pass over every exercise of every workout."""
    return _map_exercises(workouts, lambda e: adjust_exercise_for_goal(e, goal))


def apply_performance_adjustment(
    workouts: Sequence[Workout],
    performance: PerformanceAnalysis,
) -> list[Workout]:
    """
    Run the performance pass.

    Skipped entirely when no sessions were analysed, so a new user gets
    the catalog prescription untouched.
    """
    if performance.session_count == 0:
        return list(workouts)
    adjustment = performance.recommended_intensity_adjustment
    return _map_exercises(workouts, lambda e: adjust_exercise_for_performance(e, adjustment))


def apply_intensity(
    workouts: Sequence[Workout],
    goal: str,
    performance: PerformanceAnalysis,
) -> list[Workout]:
    """
    Goal pass, then performance pass, then the bounds clamp.

    Args:
        workouts: Planned workouts
        goal: Fitness goal from the profile
        performance: Analysis of recent sessions

    Returns:
        New workouts with adjusted exercises and recomputed durations
    """
    adjusted = apply_goal_adjustment(workouts, goal)
    adjusted = apply_performance_adjustment(adjusted, performance)
    return _map_exercises(adjusted, enforce_exercise_bounds)

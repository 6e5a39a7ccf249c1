"""
Weekly split selection and per-day exercise assignment.

Up to four sessions a week every day is full body; five or six sessions
use a push/pull/legs cycle.  A variety index derived from the week and
day number shifts which catalog entries are taken, so adjacent days and
adjacent weeks do not repeat the same selection.
"""

from typing import Sequence

from .catalog import ExerciseCatalog
from .config import (
    CORE_EXERCISES_PER_DAY,
    FULL_BODY_MAX_SESSIONS,
    FULL_BODY_TITLE_KEY,
    FULL_BODY_VARIATIONS,
    PPL_PATTERN,
    PPL_VARIATIONS,
)
from .metrics import workout_duration
from .models import Difficulty, Exercise, Workout
from .random_source import RandomSource


def split_kind(sessions: int) -> str:
    """Return "full_body" or "ppl" for the given sessions per week."""
    return "full_body" if sessions <= FULL_BODY_MAX_SESSIONS else "ppl"


def ppl_pattern(sessions: int) -> list[tuple[str, list[str]]]:
    """Push/pull/legs slots for the week, truncated to the session count."""
    return [(title, list(groups)) for title, groups in PPL_PATTERN[:max(0, sessions)]]


def _rotate_take(items: Sequence[Exercise], offset: int, take: int) -> list[Exercise]:
    """Rotate items left by offset (mod len) and return the first `take`."""
    if not items:
        return []
    start = offset % len(items)
    rotated = list(items[start:]) + list(items[:start])
    return rotated[:take]


def full_body_day(
    equipment: str,
    week_index: int,
    day: int,
    catalog: ExerciseCatalog,
    rng: RandomSource,
) -> list[Exercise]:
    """
    Exercises for one full-body day.

    Order: chest, back (variety-indexed picks), 1 shoulder, 2 legs,
    1 biceps on even days / 1 triceps on odd days, then 2 core.

    Args:
        equipment: Equipment class
        week_index: 1-based week number
        day: 0-based day within the week
        catalog: Exercise lookup
        rng: Random source for shuffling

    Returns:
        Ordered exercise list (empty buckets are skipped)
    """
    variation = (week_index + day) % FULL_BODY_VARIATIONS
    exercises: list[Exercise] = []

    # Compound movements first
    for group in ("chest", "back"):
        options = rng.shuffled(catalog.exercises_for(equipment, group))
        if options:
            exercises.append(options[min(variation, len(options) - 1)])

    exercises.extend(rng.pick(1, catalog.exercises_for(equipment, "shoulders")))
    exercises.extend(rng.pick(2, catalog.exercises_for(equipment, "legs")))

    # Accessory focus alternates by day
    accessory = "biceps" if day % 2 == 0 else "triceps"
    exercises.extend(rng.pick(1, catalog.exercises_for(equipment, accessory)))

    exercises.extend(rng.pick(CORE_EXERCISES_PER_DAY, catalog.exercises_for(equipment, "core")))
    return exercises


def ppl_day(
    equipment: str,
    week_index: int,
    day: int,
    muscle_groups: Sequence[str],
    catalog: ExerciseCatalog,
    rng: RandomSource,
) -> list[Exercise]:
    """
    Exercises for one push, pull or legs day.

    The first (primary) group contributes two exercises, the others one.
    Each group's list is shuffled, rotated by variation * take and the
    first entries taken.  Leg days finish with two core exercises.
    """
    variation = (week_index + day) % PPL_VARIATIONS
    exercises: list[Exercise] = []

    for i, group in enumerate(muscle_groups):
        take = 2 if i == 0 else 1
        options = rng.shuffled(catalog.exercises_for(equipment, group))
        exercises.extend(_rotate_take(options, variation * take, take))

    if "legs" in muscle_groups:
        exercises.extend(
            rng.pick(CORE_EXERCISES_PER_DAY, catalog.exercises_for(equipment, "core"))
        )
    return exercises


def plan_split(
    equipment: str,
    sessions: int,
    week_index: int,
    difficulty: Difficulty,
    catalog: ExerciseCatalog,
    rng: RandomSource,
) -> list[Workout]:
    """
    Produce the raw (unadjusted) workouts for a week.

    Args:
        equipment: Equipment class from the profile
        sessions: Sessions per week
        week_index: 1-based week number
        difficulty: Tier assigned to every day
        catalog: Exercise lookup
        rng: Random source for variety

    Returns:
        One Workout per day, day_index starting at 1
    """
    workouts: list[Workout] = []

    if split_kind(sessions) == "full_body":
        days = [(FULL_BODY_TITLE_KEY, None)] * max(0, sessions)
    else:
        days = [(title, groups) for title, groups in ppl_pattern(sessions)]

    for day, (title, groups) in enumerate(days):
        if groups is None:
            exercises = full_body_day(equipment, week_index, day, catalog, rng)
        else:
            exercises = ppl_day(equipment, week_index, day, groups, catalog, rng)

        workouts.append(
            Workout(
                title_key=title,
                week_index=week_index,
                day_index=day + 1,
                exercises=exercises,
                duration_minutes=workout_duration(exercises),
                difficulty=difficulty,
            )
        )

    return workouts

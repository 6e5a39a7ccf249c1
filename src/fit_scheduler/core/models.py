"""
Data models for fit-scheduler.

All core dataclasses representing the user profile, logged sessions,
performance summaries, and generated week programs.  Dates are ISO
strings (YYYY-MM-DD), validated on construction.
"""

from dataclasses import dataclass, field
from typing import Literal

Equipment = Literal["none", "dumbbells"]
FitnessGoal = Literal["weight_loss", "muscle_gain", "maintenance", "recomposition"]
MuscleGroup = Literal[
    "chest", "back", "shoulders", "biceps", "triceps", "legs", "core", "glutes", "full_body"
]
Difficulty = Literal["beginner", "intermediate", "advanced"]
SessionDifficulty = Literal["too_easy", "just_right", "too_hard"]
ProgramSource = Literal["local", "remote"]

EQUIPMENT_CLASSES: tuple[str, ...] = ("none", "dumbbells")
FITNESS_GOALS: tuple[str, ...] = ("weight_loss", "muscle_gain", "maintenance", "recomposition")
MUSCLE_GROUPS: tuple[str, ...] = (
    "chest", "back", "shoulders", "biceps", "triceps", "legs", "core", "glutes", "full_body",
)
DIFFICULTY_TIERS: tuple[str, ...] = ("beginner", "intermediate", "advanced")
SESSION_DIFFICULTIES: tuple[str, ...] = ("too_easy", "just_right", "too_hard")


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    from datetime import datetime

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass
class UserProfile:
    """
    Training preferences that drive program generation.

    Owned by the caller; the engine only reads it.
    """

    equipment: Equipment = "dumbbells"
    sessions_per_week: int = 4
    fitness_goal: FitnessGoal = "muscle_gain"
    current_week: int = 1

    def __post_init__(self) -> None:
        """Validate profile data."""
        from .config import MAX_SESSIONS_PER_WEEK, MIN_SESSIONS_PER_WEEK

        if self.equipment not in EQUIPMENT_CLASSES:
            raise ValueError(f"Invalid equipment: {self.equipment!r}")
        if self.fitness_goal not in FITNESS_GOALS:
            raise ValueError(f"Invalid fitness_goal: {self.fitness_goal!r}")
        if not MIN_SESSIONS_PER_WEEK <= self.sessions_per_week <= MAX_SESSIONS_PER_WEEK:
            raise ValueError(
                f"sessions_per_week must be between {MIN_SESSIONS_PER_WEEK} and "
                f"{MAX_SESSIONS_PER_WEEK}, got {self.sessions_per_week}"
            )
        if self.current_week < 1:
            raise ValueError("current_week must be >= 1")


@dataclass
class SetRecord:
    """One logged set."""

    reps: int
    weight_kg: float = 0.0
    completed: bool = False

    def __post_init__(self) -> None:
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")


@dataclass
class ExerciseRecord:
    """All sets logged for one exercise within a session."""

    exercise_key: str
    sets: list[SetRecord] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """An exercise counts as done when at least one set was completed."""
        return any(s.completed for s in self.sets)


@dataclass
class SessionLog:
    """
    A historical training session as recorded by the tracking flow.

    Immutable fact from the engine's point of view; only the performance
    analyzer consumes it.
    """

    date: str  # ISO format: YYYY-MM-DD
    exercise_records: list[ExerciseRecord] = field(default_factory=list)
    rating: int | None = None  # 1-5 stars
    difficulty: SessionDifficulty | None = None
    workout_title_key: str = ""
    duration_minutes: int | None = None
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate session data."""
        _validate_date(self.date)

        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValueError(f"rating must be between 1 and 5, got {self.rating}")

        if self.difficulty is not None and self.difficulty not in SESSION_DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {self.difficulty!r}")


@dataclass(frozen=True)
class PerformanceAnalysis:
    """
    Score bundle reduced from a window of session logs.

    Computed fresh for every generation call, never persisted.
    """

    average_rating: float
    average_difficulty: float  # 1.0 (too easy) .. 3.0 (too hard)
    completion_rate: float  # 0..1
    consistency_score: float  # 0..1
    recommended_intensity_adjustment: float  # -0.2..+0.2
    session_count: int

    @classmethod
    def baseline(cls) -> "PerformanceAnalysis":
        """Neutral assumptions used when there is no recent history."""
        from .config import (
            BASELINE_COMPLETION,
            BASELINE_CONSISTENCY,
            BASELINE_DIFFICULTY,
            BASELINE_RATING,
        )

        return cls(
            average_rating=BASELINE_RATING,
            average_difficulty=BASELINE_DIFFICULTY,
            completion_rate=BASELINE_COMPLETION,
            consistency_score=BASELINE_CONSISTENCY,
            recommended_intensity_adjustment=0.0,
            session_count=0,
        )


@dataclass(frozen=True)
class Exercise:
    """
    One prescribed exercise.

    Frozen: every adjustment produces a new instance via dataclasses.replace.
    """

    name_key: str
    muscle_groups: tuple[str, ...]
    equipment: Equipment
    sets: int
    reps: int
    tempo: str | None = None
    rest_seconds: int = 90
    notes_key: str | None = None

    def __post_init__(self) -> None:
        """Validate exercise data."""
        if not self.name_key:
            raise ValueError("name_key must be non-empty")
        if self.sets < 0:
            raise ValueError("sets must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")


@dataclass
class Workout:
    """
    A single training day within a week program.

    Created by the generator; only is_completed is changed afterwards,
    by the tracking flow.
    """

    title_key: str
    week_index: int
    day_index: int  # 1-based within the week
    exercises: list[Exercise]
    duration_minutes: int
    difficulty: Difficulty
    scheduled_date: str | None = None  # ISO format: YYYY-MM-DD
    is_completed: bool = False
    is_challenge: bool = False

    def __post_init__(self) -> None:
        """Validate workout data."""
        if self.difficulty not in DIFFICULTY_TIERS:
            raise ValueError(f"Invalid difficulty: {self.difficulty!r}")
        if self.day_index < 1:
            raise ValueError("day_index must be >= 1")
        if self.scheduled_date is not None:
            _validate_date(self.scheduled_date)

    @property
    def total_sets(self) -> int:
        """Sum of prescribed sets across all exercises."""
        return sum(e.sets for e in self.exercises)


@dataclass
class WeekProgram:
    """A generated week: ordered workouts plus provenance."""

    week_index: int
    workouts: list[Workout] = field(default_factory=list)
    generated_at: str = ""  # ISO timestamp
    source: ProgramSource = "local"

    @property
    def challenge_workout(self) -> Workout | None:
        """The week's challenge session, if any."""
        return next((w for w in self.workouts if w.is_challenge), None)

    @property
    def scheduled_dates(self) -> list[str]:
        """Scheduled dates of all workouts that have one, in workout order."""
        return [w.scheduled_date for w in self.workouts if w.scheduled_date is not None]

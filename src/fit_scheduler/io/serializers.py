"""
JSON serialization for profile, session and program models.

Handles conversion between dataclasses and JSON-compatible dicts, the
compact per-exercise set notation used by the CLI, and parsing of
remote (model-generated) program payloads.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.models import (
    DIFFICULTY_TIERS,
    MUSCLE_GROUPS,
    SESSION_DIFFICULTIES,
    Exercise,
    ExerciseRecord,
    SessionLog,
    SetRecord,
    UserProfile,
    WeekProgram,
    Workout,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    """
    Validate that a value is one of the allowed literals.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {', '.join(choices)}")
    return value


# =============================================================================
# PROFILE
# =============================================================================


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Convert UserProfile to JSON-compatible dict."""
    return {
        "equipment": profile.equipment,
        "sessions_per_week": profile.sessions_per_week,
        "fitness_goal": profile.fitness_goal,
        "current_week": profile.current_week,
    }


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return UserProfile(
            equipment=data.get("equipment", "dumbbells"),
            sessions_per_week=int(data.get("sessions_per_week", 4)),
            fitness_goal=data.get("fitness_goal", "muscle_gain"),
            current_week=int(data.get("current_week", 1)),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e


# =============================================================================
# SESSION LOGS
# =============================================================================


def set_record_to_dict(record: SetRecord) -> dict[str, Any]:
    """Convert SetRecord to JSON-compatible dict."""
    return {
        "reps": record.reps,
        "weight_kg": record.weight_kg,
        "completed": record.completed,
    }


def dict_to_set_record(data: dict[str, Any]) -> SetRecord:
    """
    Convert dict to SetRecord.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        reps = int(data.get("reps", 0))
        weight = float(data.get("weight_kg", 0.0))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid set record: {e}") from e
    validate_non_negative(reps, "reps")
    validate_non_negative(weight, "weight_kg")
    return SetRecord(reps=int(reps), weight_kg=float(weight), completed=bool(data.get("completed", False)))


def session_log_to_dict(log: SessionLog) -> dict[str, Any]:
    """
    Convert SessionLog to JSON-compatible dict.

    Optional fields are omitted when unset to keep history lines short.
    """
    result: dict[str, Any] = {
        "date": log.date,
        "exercise_records": [
            {
                "exercise_key": r.exercise_key,
                "sets": [set_record_to_dict(s) for s in r.sets],
            }
            for r in log.exercise_records
        ],
    }
    if log.rating is not None:
        result["rating"] = log.rating
    if log.difficulty is not None:
        result["difficulty"] = log.difficulty
    if log.workout_title_key:
        result["workout_title_key"] = log.workout_title_key
    if log.duration_minutes is not None:
        result["duration_minutes"] = log.duration_minutes
    if log.notes:
        result["notes"] = log.notes
    return result


def dict_to_session_log(data: dict[str, Any]) -> SessionLog:
    """
    Convert dict to SessionLog.

    Raises:
        ValidationError: If data is invalid
    """
    if "date" not in data:
        raise ValidationError("Session log missing 'date'")
    date = validate_date(data["date"])

    difficulty = data.get("difficulty")
    if difficulty is not None:
        validate_choice(difficulty, SESSION_DIFFICULTIES, "difficulty")

    rating = data.get("rating")
    if rating is not None:
        if not isinstance(rating, int):
            raise ValidationError(f"rating must be an integer, got {rating!r}")
        if not 1 <= rating <= 5:
            raise ValidationError(f"rating must be between 1 and 5, got {rating}")

    records = []
    for raw in data.get("exercise_records", []):
        if "exercise_key" not in raw:
            raise ValidationError("Exercise record missing 'exercise_key'")
        records.append(
            ExerciseRecord(
                exercise_key=str(raw["exercise_key"]),
                sets=[dict_to_set_record(s) for s in raw.get("sets", [])],
            )
        )

    duration = data.get("duration_minutes")
    if duration is not None and not isinstance(duration, int):
        raise ValidationError(f"duration_minutes must be an integer, got {duration!r}")
    return SessionLog(
        date=date,
        exercise_records=records,
        rating=rating,
        difficulty=difficulty,
        workout_title_key=str(data.get("workout_title_key", "")),
        duration_minutes=duration,
        notes=str(data.get("notes", "")),
    )


def session_to_json_line(log: SessionLog) -> str:
    """
    Serialize a session log to a single JSON line.

    Returns:
        JSON string (single line, no trailing newline)
    """
    return json.dumps(session_log_to_dict(log), separators=(",", ":"))


def json_line_to_session(line: str) -> SessionLog:
    """
    Deserialize a JSON line to a SessionLog.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_session_log(data)


# =============================================================================
# PROGRAMS
# =============================================================================


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    """Convert Exercise to JSON-compatible dict."""
    return {
        "name_key": exercise.name_key,
        "muscle_groups": list(exercise.muscle_groups),
        "equipment": exercise.equipment,
        "sets": exercise.sets,
        "reps": exercise.reps,
        "tempo": exercise.tempo,
        "rest_seconds": exercise.rest_seconds,
        "notes_key": exercise.notes_key,
    }


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    """
    Convert dict to Exercise.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return Exercise(
            name_key=str(data["name_key"]),
            muscle_groups=tuple(data.get("muscle_groups", ())),
            equipment=data.get("equipment", "none"),
            sets=int(data["sets"]),
            reps=int(data["reps"]),
            tempo=data.get("tempo"),
            rest_seconds=int(data.get("rest_seconds", 90)),
            notes_key=data.get("notes_key"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid exercise: {e}") from e


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    """Convert Workout to JSON-compatible dict."""
    return {
        "title_key": workout.title_key,
        "week_index": workout.week_index,
        "day_index": workout.day_index,
        "exercises": [exercise_to_dict(e) for e in workout.exercises],
        "duration_minutes": workout.duration_minutes,
        "difficulty": workout.difficulty,
        "scheduled_date": workout.scheduled_date,
        "is_completed": workout.is_completed,
        "is_challenge": workout.is_challenge,
    }


def dict_to_workout(data: dict[str, Any]) -> Workout:
    """
    Convert dict to Workout.

    Raises:
        ValidationError: If data is invalid
    """
    scheduled = data.get("scheduled_date")
    if scheduled is not None:
        validate_date(scheduled)
    try:
        return Workout(
            title_key=str(data["title_key"]),
            week_index=int(data["week_index"]),
            day_index=int(data["day_index"]),
            exercises=[dict_to_exercise(e) for e in data.get("exercises", [])],
            duration_minutes=int(data.get("duration_minutes", 0)),
            difficulty=data.get("difficulty", "beginner"),
            scheduled_date=scheduled,
            is_completed=bool(data.get("is_completed", False)),
            is_challenge=bool(data.get("is_challenge", False)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid workout: {e}") from e


def week_program_to_dict(program: WeekProgram) -> dict[str, Any]:
    """Convert WeekProgram to JSON-compatible dict."""
    return {
        "week_index": program.week_index,
        "generated_at": program.generated_at,
        "source": program.source,
        "workouts": [workout_to_dict(w) for w in program.workouts],
    }


def dict_to_week_program(data: dict[str, Any]) -> WeekProgram:
    """
    Convert dict to WeekProgram.

    Raises:
        ValidationError: If data is invalid
    """
    if "week_index" not in data:
        raise ValidationError("Program missing 'week_index'")
    source = validate_choice(data.get("source", "local"), ("local", "remote"), "source")
    return WeekProgram(
        week_index=int(data["week_index"]),
        workouts=[dict_to_workout(w) for w in data.get("workouts", [])],
        generated_at=str(data.get("generated_at", "")),
        source=source,  # type: ignore[arg-type]
    )


# =============================================================================
# CLI SET NOTATION
# =============================================================================


def parse_exercise_entry(entry: str, completed: bool = True) -> ExerciseRecord:
    """
    Parse one ``--exercise`` value.

    Format: name:reps/reps/...  optionally with @kg per set.

    Examples:
        "ex_push_ups:12/10/8"            → 3 sets, bodyweight
        "ex_goblet_squat:10@12/10@12"    → 2 sets of 10 at 12 kg

    Args:
        entry: Raw CLI value
        completed: Value of the completed flag for every set

    Returns:
        ExerciseRecord

    Raises:
        ValidationError: If the entry cannot be parsed
    """
    if ":" not in entry:
        raise ValidationError(
            f"Invalid exercise entry {entry!r}. Expected name:reps/reps/..."
        )
    name, _, sets_str = entry.partition(":")
    name = name.strip()
    if not name:
        raise ValidationError(f"Exercise name missing in {entry!r}")

    sets: list[SetRecord] = []
    for part in sets_str.split("/"):
        part = part.strip()
        if not part:
            continue
        m = re.fullmatch(r"(\d+)(?:\s*@\s*([0-9]+(?:\.[0-9]+)?))?", part)
        if not m:
            raise ValidationError(f"Invalid set {part!r} in {entry!r}")
        weight = float(m.group(2)) if m.group(2) else 0.0
        sets.append(SetRecord(reps=int(m.group(1)), weight_kg=weight, completed=completed))

    if not sets:
        raise ValidationError(f"No sets given in {entry!r}")

    return ExerciseRecord(exercise_key=name, sets=sets)


# =============================================================================
# REMOTE PROGRAM PAYLOADS
# =============================================================================


def _strip_code_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def _remote_exercise(data: dict[str, Any], equipment: str, default_rest: int) -> Exercise | None:
    """Build an Exercise from a remote entry, or None if it is malformed."""
    name = data.get("name")
    groups_raw = data.get("muscleGroups")
    sets = data.get("sets")
    reps = data.get("reps")
    if not isinstance(name, str) or not isinstance(groups_raw, list):
        return None
    if not isinstance(sets, int) or not isinstance(reps, int):
        return None

    groups = tuple(g for g in groups_raw if g in MUSCLE_GROUPS) or ("full_body",)
    rest = data.get("restSeconds")
    tempo = data.get("tempo")
    notes = data.get("notes")
    try:
        return Exercise(
            name_key=name,
            muscle_groups=groups,
            equipment=equipment,  # type: ignore[arg-type]
            sets=sets,
            reps=reps,
            tempo=tempo if isinstance(tempo, str) else None,
            rest_seconds=rest if isinstance(rest, int) else default_rest,
            notes_key=notes if isinstance(notes, str) else None,
        )
    except ValueError:
        return None


def parse_remote_program(
    text: str,
    week_index: int,
    equipment: str,
    default_rest: int = 60,
) -> WeekProgram:
    """
    Parse a model response into an unscheduled WeekProgram.

    Expected shape::

        {"workouts": [{"title", "dayIndex", "difficulty", "isChallenge",
                       "exercises": [{"name", "muscleGroups", "sets", "reps",
                                      "tempo", "restSeconds", "notes"}]}]}

    Markdown code fences are stripped.  Unknown muscle groups are dropped
    (an exercise left with none becomes full_body), an unknown difficulty
    becomes intermediate, and malformed workouts or exercises are skipped.

    Args:
        text: Raw response content
        week_index: Week the program belongs to
        equipment: Equipment assigned to every parsed exercise
        default_rest: Rest used when restSeconds is missing

    Returns:
        WeekProgram with source "remote" and no scheduled dates

    Raises:
        ValidationError: If the payload is not JSON or yields no workouts
    """
    try:
        data = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in remote response: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("workouts"), list):
        raise ValidationError("Remote response has no 'workouts' list")

    workouts: list[Workout] = []
    for raw in data["workouts"]:
        if not isinstance(raw, dict):
            continue
        title = raw.get("title")
        day_index = raw.get("dayIndex")
        difficulty = raw.get("difficulty")
        exercises_raw = raw.get("exercises")
        if not isinstance(title, str) or not isinstance(day_index, int):
            continue
        if not isinstance(difficulty, str) or not isinstance(exercises_raw, list):
            continue

        exercises = [
            ex
            for ex in (
                _remote_exercise(e, equipment, default_rest)
                for e in exercises_raw
                if isinstance(e, dict)
            )
            if ex is not None
        ]
        try:
            workouts.append(
                Workout(
                    title_key=title,
                    week_index=week_index,
                    day_index=day_index,
                    exercises=exercises,
                    duration_minutes=0,
                    difficulty=difficulty if difficulty in DIFFICULTY_TIERS else "intermediate",
                    is_challenge=bool(raw.get("isChallenge", False)),
                )
            )
        except ValueError:
            continue

    if not workouts:
        raise ValidationError("No workouts parsed from remote response")

    return WeekProgram(week_index=week_index, workouts=workouts, source="remote")

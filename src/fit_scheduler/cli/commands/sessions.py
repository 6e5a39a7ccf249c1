"""Session commands: log-session and show-history."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import SESSION_DIFFICULTIES, ExerciseRecord, SessionLog
from ...io.serializers import (
    ValidationError,
    parse_exercise_entry,
    session_log_to_dict,
    validate_date,
)
from .. import views
from ..app import DataDirOption, JsonOption, app, get_store, require_profile


@app.command("log-session")
def log_session(
    data_dir: DataDirOption = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    rating: Annotated[
        Optional[int],
        typer.Option("--rating", "-r", help="Enjoyment rating 1-5"),
    ] = None,
    difficulty: Annotated[
        Optional[str],
        typer.Option("--difficulty", help="too_easy | just_right | too_hard"),
    ] = None,
    exercises: Annotated[
        Optional[list[str]],
        typer.Option(
            "--exercise", "-e",
            help="name:reps/reps/... (repeatable), e.g. ex_push_ups:12/10/8",
        ),
    ] = None,
    skipped: Annotated[
        Optional[list[str]],
        typer.Option(
            "--skipped",
            help="Like --exercise, but the sets are recorded as not completed",
        ),
    ] = None,
    workout: Annotated[
        str,
        typer.Option("--workout", help="Workout title key, e.g. workout_push"),
    ] = "",
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", help="Session length in minutes"),
    ] = None,
    notes: Annotated[
        str,
        typer.Option("--notes", "-n", help="Session notes"),
    ] = "",
) -> None:
    """
    Log a completed training session.

      fit-scheduler log-session --date 2026-02-18 --rating 4 \\
        --difficulty just_right -e ex_push_ups:12/10/8 --skipped ex_burpees:10/10
    """
    store = get_store(data_dir)
    require_profile(store)

    if date is None:
        date = datetime.now().strftime("%Y-%m-%d")

    try:
        validate_date(date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if rating is not None and not 1 <= rating <= 5:
        views.print_error("Rating must be between 1 and 5")
        raise typer.Exit(1)

    if difficulty is not None and difficulty not in SESSION_DIFFICULTIES:
        views.print_error(f"Difficulty must be one of: {', '.join(SESSION_DIFFICULTIES)}")
        raise typer.Exit(1)

    records: list[ExerciseRecord] = []
    try:
        for entry in exercises or []:
            records.append(parse_exercise_entry(entry, completed=True))
        for entry in skipped or []:
            records.append(parse_exercise_entry(entry, completed=False))
    except ValidationError as e:
        views.print_error(f"Invalid exercise: {e}")
        raise typer.Exit(1)

    log = SessionLog(
        date=date,
        exercise_records=records,
        rating=rating,
        difficulty=difficulty,  # type: ignore[arg-type]
        workout_title_key=workout,
        duration_minutes=duration,
        notes=notes,
    )

    try:
        store.append_session_log(log)
    except ValidationError as e:
        views.print_error(f"Invalid session data: {e}")
        raise typer.Exit(1)

    done = sum(1 for r in records if r.is_completed)
    views.print_success(f"Logged session on {date} ({done}/{len(records)} exercises completed)")


@app.command("show-history")
def show_history(
    data_dir: DataDirOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of sessions to show"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display session history as a table.
    """
    store = get_store(data_dir)

    try:
        logs = store.load_session_logs(limit=limit)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([session_log_to_dict(log) for log in logs], indent=2))
        return

    views.print_history(logs)

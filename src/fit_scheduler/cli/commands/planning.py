"""Planning commands: plan, show-program, and status."""

import asyncio
import json
from typing import Annotated, Optional

import typer

from ...core.analysis import analyze_performance, difficulty_for_week
from ...core.generator import ProgramGenerator
from ...core.random_source import SeededRandomSource
from ...core.remote import OpenAIProgramGenerator, generate_week_program_with_remote
from ...io.serializers import ValidationError, validate_date, week_program_to_dict
from .. import views
from ..app import (
    DataDirOption,
    JsonOption,
    app,
    get_catalog,
    get_settings,
    get_store,
    require_profile,
)


@app.command()
def plan(
    data_dir: DataDirOption = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Week to generate (default: current week)"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-s", help="First day of the week (YYYY-MM-DD)"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible exercise selection"),
    ] = None,
    remote: Annotated[
        bool,
        typer.Option("--remote", help="Ask the OpenAI model first, fall back to local"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Generate and save a week of workouts.

    Without --start-date the week continues the day after the last
    scheduled workout, or starts today.  Generating a week again replaces
    the saved program for that week.
    """
    store = get_store(data_dir)
    profile = require_profile(store)

    if week is not None and week < 1:
        views.print_error("Week must be 1 or later")
        raise typer.Exit(1)

    if start_date is not None:
        try:
            validate_date(start_date)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    try:
        logs = store.load_session_logs()
        programs = store.load_programs()
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)

    settings = get_settings()
    catalog = get_catalog()
    generator = ProgramGenerator(
        catalog=catalog,
        rng=SeededRandomSource(seed),
        analysis_weeks=settings.recent_weeks,
    )

    week_index = week if week is not None else profile.current_week
    others = [p for p in programs if p.week_index != week_index]

    if remote:
        program = asyncio.run(
            generate_week_program_with_remote(
                generator,
                OpenAIProgramGenerator(catalog, settings),
                profile,
                week_index,
                logs,
                start_date=start_date,
                existing_programs=others,
            )
        )
        if program.source != "remote" and not json_out:
            views.print_warning("Remote generation unavailable; used the local generator.")
    elif week is None and start_date is None:
        program = generator.regenerate_current_week(profile, logs, programs)
    else:
        program = generator.generate_week_program(
            profile,
            week_index,
            logs,
            start_date=start_date,
            existing_programs=others,
        )

    store.save_program(program)

    if json_out:
        print(json.dumps(week_program_to_dict(program), indent=2))
        return

    views.print_program(program)
    views.print_success(f"Saved week {program.week_index} to {store.programs_path}")


@app.command("show-program")
def show_program(
    data_dir: DataDirOption = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Week to show (default: current week)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Print a saved week program.
    """
    store = get_store(data_dir)
    profile = require_profile(store)
    week_index = week if week is not None else profile.current_week

    try:
        program = store.load_program(week_index)
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)

    if program is None:
        views.print_error(f"No program saved for week {week_index}")
        views.print_info("Run 'plan' to generate it.")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(week_program_to_dict(program), indent=2))
        return

    views.print_program(program)


@app.command()
def status(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show recent performance and the difficulty tier for the current week.
    """
    store = get_store(data_dir)
    profile = require_profile(store)

    try:
        logs = store.load_session_logs()
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)

    settings = get_settings()
    performance = analyze_performance(logs, settings.recent_weeks)
    difficulty = difficulty_for_week(profile.current_week, performance)

    if json_out:
        print(json.dumps({
            "current_week": profile.current_week,
            "difficulty": difficulty,
            "session_count": performance.session_count,
            "average_rating": round(performance.average_rating, 2),
            "average_difficulty": round(performance.average_difficulty, 2),
            "completion_rate": round(performance.completion_rate, 3),
            "consistency_score": round(performance.consistency_score, 3),
            "intensity_adjustment": round(performance.recommended_intensity_adjustment, 3),
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_status_display(profile, performance, difficulty))
    views.console.print()

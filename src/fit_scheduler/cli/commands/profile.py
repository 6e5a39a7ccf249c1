"""Profile management commands: init and next-week."""

from typing import Annotated, Optional

import typer

from ...core.config import MAX_SESSIONS_PER_WEEK, MIN_SESSIONS_PER_WEEK
from ...core.generator import ProgramGenerator
from ...core.models import EQUIPMENT_CLASSES, FITNESS_GOALS, UserProfile
from ...core.random_source import SeededRandomSource
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_catalog, get_settings, get_store


@app.command()
def init(
    data_dir: DataDirOption = None,
    equipment: Annotated[
        str,
        typer.Option("--equipment", "-e", help="Equipment: dumbbells | none"),
    ] = "dumbbells",
    sessions: Annotated[
        int,
        typer.Option("--sessions", "-s", help="Sessions per week (3-6)"),
    ] = 4,
    goal: Annotated[
        str,
        typer.Option(
            "--goal", "-g",
            help="Goal: weight_loss | muscle_gain | maintenance | recomposition",
        ),
    ] = "muscle_gain",
    week: Annotated[
        int,
        typer.Option("--week", "-w", help="Current training week"),
    ] = 1,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Force overwrite without prompting"),
    ] = False,
) -> None:
    """
    Create the user profile and data files.

    Existing session logs and programs are kept; only the profile is
    replaced.
    """
    store = get_store(data_dir)

    # Validate inputs
    if equipment not in EQUIPMENT_CLASSES:
        views.print_error(f"Equipment must be one of: {', '.join(EQUIPMENT_CLASSES)}")
        raise typer.Exit(1)

    if goal not in FITNESS_GOALS:
        views.print_error(f"Goal must be one of: {', '.join(FITNESS_GOALS)}")
        raise typer.Exit(1)

    if not MIN_SESSIONS_PER_WEEK <= sessions <= MAX_SESSIONS_PER_WEEK:
        views.print_error(
            f"Sessions per week must be between {MIN_SESSIONS_PER_WEEK} and {MAX_SESSIONS_PER_WEEK}"
        )
        raise typer.Exit(1)

    if week < 1:
        views.print_error("Week must be 1 or later")
        raise typer.Exit(1)

    if store.exists() and not force:
        if not views.confirm_action(f"Profile exists at {store.profile_path}. Overwrite?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    profile = UserProfile(
        equipment=equipment,  # type: ignore[arg-type]
        sessions_per_week=sessions,
        fitness_goal=goal,  # type: ignore[arg-type]
        current_week=week,
    )

    store.init()
    store.save_profile(profile)

    views.print_success(f"Profile saved to {store.profile_path}")
    views.console.print(views.format_profile(profile))
    views.print_info("Run 'plan' to generate this week's workouts.")


@app.command("next-week")
def next_week(
    data_dir: DataDirOption = None,
    generate: Annotated[
        bool,
        typer.Option("--plan", help="Also generate and save the new week"),
    ] = False,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible exercise selection"),
    ] = None,
) -> None:
    """
    Advance the profile to the next training week.

    With --plan the new week is generated right away, continuing the
    calendar after the last scheduled workout.
    """
    store = get_store(data_dir)

    try:
        profile = store.advance_week()
    except FileNotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Now in week {profile.current_week}.")

    if not generate:
        views.print_info("Run 'plan' to generate it.")
        return

    try:
        logs = store.load_session_logs()
        programs = store.load_programs()
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)

    generator = ProgramGenerator(
        catalog=get_catalog(),
        rng=SeededRandomSource(seed),
        analysis_weeks=get_settings().recent_weeks,
    )
    others = [p for p in programs if p.week_index != profile.current_week]
    program = generator.generate_next_week(profile, logs, others)
    store.save_program(program)

    views.print_program(program)
    views.print_success(f"Saved week {program.week_index} to {store.programs_path}")

"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of profiles, session logs and
week programs.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import PerformanceAnalysis, SessionLog, UserProfile, WeekProgram, Workout

console = Console()

_DIFFICULTY_STYLE = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "red",
}


def humanize_key(key: str) -> str:
    """
    Turn a catalog key into a display label.

    "ex_goblet_squat" → "Goblet squat", "workout_push" → "Push"
    """
    for prefix in ("ex_", "workout_"):
        if key.startswith(prefix):
            key = key[len(prefix):]
            break
    text = key.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def format_profile(profile: UserProfile) -> str:
    """Format the profile as a text block."""
    return "\n".join(
        [
            "Profile",
            f"- Equipment: {profile.equipment}",
            f"- Sessions per week: {profile.sessions_per_week}",
            f"- Goal: {profile.fitness_goal.replace('_', ' ')}",
            f"- Current week: {profile.current_week}",
        ]
    )


def format_workout_table(workout: Workout) -> Table:
    """
    Create a Rich table for one workout.

    Args:
        workout: Workout to display

    Returns:
        Rich Table object
    """
    title = humanize_key(workout.title_key)
    if workout.is_challenge:
        title = f"{title} [bold red](challenge)[/bold red]"
    date = workout.scheduled_date or "unscheduled"
    style = _DIFFICULTY_STYLE.get(workout.difficulty, "white")

    table = Table(
        title=(
            f"Day {workout.day_index} - {title}  [cyan]{date}[/cyan]  "
            f"[{style}]{workout.difficulty}[/{style}]  ~{workout.duration_minutes} min"
        ),
        title_justify="left",
        caption=f"{len(workout.exercises)} exercises, {workout.total_sets} sets",
        caption_justify="left",
    )
    table.add_column("Exercise", style="cyan")
    table.add_column("Muscles", style="magenta")
    table.add_column("Sets", justify="right", style="bold")
    table.add_column("Reps", justify="right", style="bold")
    table.add_column("Rest(s)", justify="right")
    table.add_column("Tempo", justify="center", style="dim")

    for ex in workout.exercises:
        table.add_row(
            humanize_key(ex.name_key),
            ", ".join(ex.muscle_groups),
            str(ex.sets),
            str(ex.reps),
            str(ex.rest_seconds),
            ex.tempo or "-",
        )
    return table


def print_program(program: WeekProgram) -> None:
    """
    Print a week program, one table per workout.

    Args:
        program: Program to display
    """
    if not program.workouts:
        console.print("[yellow]Program has no workouts.[/yellow]")
        return

    console.print()
    console.print(
        f"[bold]Week {program.week_index}[/bold]  "
        f"[dim]{program.source}, generated {program.generated_at or '-'}[/dim]"
    )
    for workout in program.workouts:
        console.print()
        console.print(format_workout_table(workout))
    console.print()


def format_session_table(logs: list[SessionLog]) -> Table:
    """
    Create a Rich table displaying session history.

    Args:
        logs: Session logs to display

    Returns:
        Rich Table object
    """
    table = Table(title="Training History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Workout", style="magenta")
    table.add_column("Exercises", justify="right")
    table.add_column("Sets done", justify="right")
    table.add_column("Rating", justify="right", style="bold")
    table.add_column("Difficulty")

    for i, log in enumerate(logs, 1):
        total_sets = sum(len(r.sets) for r in log.exercise_records)
        done_sets = sum(1 for r in log.exercise_records for s in r.sets if s.completed)
        table.add_row(
            str(i),
            log.date,
            humanize_key(log.workout_title_key) if log.workout_title_key else "-",
            str(len(log.exercise_records)),
            f"{done_sets}/{total_sets}",
            f"{log.rating}/5" if log.rating is not None else "-",
            (log.difficulty or "-").replace("_", " "),
        )

    return table


def print_history(logs: list[SessionLog]) -> None:
    """
    Print session history to console.

    Args:
        logs: Session logs to display
    """
    if not logs:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return

    console.print(format_session_table(logs))


def format_status_display(
    profile: UserProfile,
    performance: PerformanceAnalysis,
    difficulty: str,
) -> str:
    """
    Format the performance summary as text block.

    Args:
        profile: User profile
        performance: Analysis of recent sessions
        difficulty: Tier for the current week

    Returns:
        Formatted string
    """
    lines = [format_profile(profile), "", "Current status"]

    if performance.session_count == 0:
        lines.append("- No sessions in the analysis window (baseline values)")
    else:
        lines.append(f"- Sessions analysed: {performance.session_count}")

    lines.extend(
        [
            f"- Avg rating: {performance.average_rating:.1f}/5",
            f"- Avg difficulty: {performance.average_difficulty:.2f}  (1 easy .. 3 hard)",
            f"- Completion: {performance.completion_rate:.0%}",
            f"- Consistency: {performance.consistency_score:.0%}",
            f"- Intensity adjustment: {performance.recommended_intensity_adjustment:+.2f}",
            f"- Week {profile.current_week} difficulty: {difficulty}",
        ]
    )
    return "\n".join(lines)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")

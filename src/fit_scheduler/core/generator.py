"""
Week program generation.

Orchestrates the full local pipeline:

1. Analyse recent session logs
2. Plan the split for the week
3. Goal pass, then performance pass
4. Turn the last workout into the challenge
5. Resolve the start date and schedule the workouts
6. Apply even-week progression

The pipeline is deterministic for a given RandomSource seed, clock and
input; it performs no I/O.
"""

from datetime import date, datetime
from typing import Callable, Sequence

from .analysis import analyze_performance, difficulty_for_week
from .catalog import ExerciseCatalog, load_catalog
from .challenge import make_challenge
from .config import DEFAULT_RECENT_WEEKS
from .intensity import apply_intensity
from .models import PerformanceAnalysis, SessionLog, UserProfile, WeekProgram, Workout
from .progression import apply_progression
from .random_source import RandomSource, SeededRandomSource
from .schedule import resolve_start_date, schedule_workouts
from .splits import plan_split


class ProgramGenerator:
    """
    Builds WeekPrograms from a profile and session history.

    Args:
        catalog: Exercise catalog (default: bundled YAML tables)
        rng: Random source for exercise variety (default: unseeded)
        analysis_weeks: Lookback window for performance analysis
        clock: Zero-arg callable returning the current datetime
    """

    def __init__(
        self,
        catalog: ExerciseCatalog | None = None,
        rng: RandomSource | None = None,
        analysis_weeks: int = DEFAULT_RECENT_WEEKS,
        clock: Callable[[], datetime] | None = None,
    ):
        self.catalog = catalog if catalog is not None else load_catalog()
        self.rng = rng if rng is not None else SeededRandomSource()
        self.analysis_weeks = analysis_weeks
        self.clock = clock or datetime.now

    def analyze(
        self,
        session_logs: Sequence[SessionLog],
        today: date | None = None,
    ) -> PerformanceAnalysis:
        """Performance analysis over the lookback window; today defaults to the clock's date."""
        return analyze_performance(
            session_logs, self.analysis_weeks, today=today or self.clock().date()
        )

    def plan_workouts(
        self,
        profile: UserProfile,
        week_index: int,
        performance: PerformanceAnalysis,
    ) -> list[Workout]:
        """
        Split, adjust and mark the challenge; no dates assigned yet.

        Args:
            profile: User profile
            week_index: 1-based week number
            performance: Analysis of recent sessions

        Returns:
            Unscheduled workouts, last one the challenge
        """
        difficulty = difficulty_for_week(week_index, performance)
        workouts = plan_split(
            profile.equipment,
            profile.sessions_per_week,
            week_index,
            difficulty,
            self.catalog,
            self.rng,
        )
        workouts = apply_intensity(workouts, profile.fitness_goal, performance)

        if workouts:
            workouts[-1] = make_challenge(workouts[-1], self.catalog)
        return workouts

    def generate_week_program(
        self,
        profile: UserProfile,
        week_index: int,
        session_logs: Sequence[SessionLog] = (),
        start_date: str | None = None,
        existing_programs: Sequence[WeekProgram] = (),
    ) -> WeekProgram:
        """
        Generate one week of workouts.

        Args:
            profile: User profile
            week_index: 1-based week number
            session_logs: Full session history (only recent logs are used)
            start_date: Explicit first day (YYYY-MM-DD); derived if None
            existing_programs: Earlier programs, used to continue the calendar

        Returns:
            WeekProgram with source "local"
        """
        now = self.clock()
        performance = self.analyze(session_logs, now.date())
        workouts = self.plan_workouts(profile, week_index, performance)

        start = resolve_start_date(start_date, existing_programs, now.date())
        workouts = schedule_workouts(workouts, profile.sessions_per_week, start)
        workouts = apply_progression(workouts, week_index)

        return WeekProgram(
            week_index=week_index,
            workouts=workouts,
            generated_at=now.isoformat(timespec="seconds"),
            source="local",
        )

    def generate_next_week(
        self,
        profile: UserProfile,
        session_logs: Sequence[SessionLog],
        existing_programs: Sequence[WeekProgram] = (),
    ) -> WeekProgram:
        """Generate the program for profile.current_week, continuing the calendar."""
        return self.generate_week_program(
            profile,
            profile.current_week,
            session_logs,
            existing_programs=existing_programs,
        )

    def regenerate_current_week(
        self,
        profile: UserProfile,
        session_logs: Sequence[SessionLog],
        existing_programs: Sequence[WeekProgram] = (),
    ) -> WeekProgram:
        """
        Rebuild profile.current_week from scratch.

        The week's own earlier program is ignored when resolving the start
        date, so the regenerated week lands in the same window instead of
        after itself.
        """
        others = [p for p in existing_programs if p.week_index != profile.current_week]
        return self.generate_week_program(
            profile,
            profile.current_week,
            session_logs,
            existing_programs=others,
        )

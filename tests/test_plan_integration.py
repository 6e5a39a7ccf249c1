"""
Integration tests for the program generation pipeline.

Each test runs the full pipeline: profile + logs → ProgramGenerator →
WeekProgram, using the bundled exercise tables.  IdentityRandomSource
keeps catalog order so selections can be hand-computed; expected values
are worked out in comments.

Profile matrix exercised across scenarios:
  equipment : dumbbells, none
  sessions  : 3, 4, 5, 6 (and 1, 2, 7 through the split planner)
  goals     : muscle_gain, weight_loss
"""

from datetime import datetime

import pytest

from fit_scheduler.core.analysis import analyze_performance
from fit_scheduler.core.catalog import EquipmentTable, ExerciseCatalog, load_catalog
from fit_scheduler.core.generator import ProgramGenerator
from fit_scheduler.core.models import (
    Exercise,
    ExerciseRecord,
    SessionLog,
    SetRecord,
    UserProfile,
)
from fit_scheduler.core.random_source import IdentityRandomSource, SeededRandomSource
from fit_scheduler.core.splits import plan_split


# ===========================================================================
# Helpers
# ===========================================================================

NOW = datetime(2026, 3, 16, 9, 30)  # Monday


@pytest.fixture(scope="module")
def catalog() -> ExerciseCatalog:
    return load_catalog()


def _make_profile(
    sessions: int = 4,
    equipment: str = "dumbbells",
    goal: str = "muscle_gain",
    week: int = 1,
) -> UserProfile:
    """Build a UserProfile for testing."""
    return UserProfile(
        equipment=equipment,  # type: ignore[arg-type]
        sessions_per_week=sessions,
        fitness_goal=goal,  # type: ignore[arg-type]
        current_week=week,
    )


def _generator(catalog: ExerciseCatalog, rng=None) -> ProgramGenerator:
    return ProgramGenerator(
        catalog=catalog,
        rng=rng or IdentityRandomSource(),
        clock=lambda: NOW,
    )


def _easy_logs() -> list[SessionLog]:
    """Four recent too_easy, 5-star sessions with every set completed."""
    return [
        SessionLog(
            date=f"2026-03-{d:02d}",
            exercise_records=[ExerciseRecord("ex_goblet_squats", [SetRecord(12, completed=True)])],
            rating=5,
            difficulty="too_easy",
        )
        for d in (9, 11, 13, 14)
    ]


def _names(workout) -> list[str]:
    return [e.name_key for e in workout.exercises]


# ===========================================================================
# Structural invariants
# ===========================================================================


class TestProgramStructure:
    """Counts, challenge placement, bounds and dates for every session count."""

    @pytest.mark.parametrize("sessions", [3, 4, 5, 6])
    @pytest.mark.parametrize("equipment", ["dumbbells", "none"])
    def test_workout_count(self, catalog, sessions, equipment):
        program = _generator(catalog).generate_week_program(
            _make_profile(sessions, equipment), 1
        )
        assert len(program.workouts) == sessions
        assert [w.day_index for w in program.workouts] == list(range(1, sessions + 1))

    @pytest.mark.parametrize("sessions", [3, 4, 5, 6])
    def test_exactly_one_challenge_and_it_is_last(self, catalog, sessions):
        program = _generator(catalog).generate_week_program(_make_profile(sessions), 1)
        flags = [w.is_challenge for w in program.workouts]
        assert flags.count(True) == 1
        assert flags[-1] is True
        assert program.challenge_workout is program.workouts[-1]

    @pytest.mark.parametrize("sessions", [3, 4, 5, 6])
    @pytest.mark.parametrize("goal", ["weight_loss", "muscle_gain", "recomposition"])
    def test_exercise_bounds(self, catalog, sessions, goal):
        program = _generator(catalog, SeededRandomSource(7)).generate_week_program(
            _make_profile(sessions, goal=goal), 4, _easy_logs()
        )
        for workout in program.workouts:
            for ex in workout.exercises:
                assert 1 <= ex.sets <= 6
                assert ex.reps > 0
                assert 30 <= ex.rest_seconds <= 120

    @pytest.mark.parametrize("sessions", [3, 4, 5, 6])
    def test_dates_distinct_within_window(self, catalog, sessions):
        program = _generator(catalog).generate_week_program(
            _make_profile(sessions), 1, start_date="2026-03-16"
        )
        dates = program.scheduled_dates
        assert len(dates) == sessions
        assert len(set(dates)) == sessions
        assert min(dates) == "2026-03-16"
        assert max(dates) <= "2026-03-22"

    def test_four_sessions_dates(self, catalog):
        # offsets [0, 2, 4, 5] from Monday 2026-03-16
        program = _generator(catalog).generate_week_program(_make_profile(4), 1)
        assert program.scheduled_dates == [
            "2026-03-16", "2026-03-18", "2026-03-20", "2026-03-21",
        ]

    def test_metadata(self, catalog):
        program = _generator(catalog).generate_week_program(_make_profile(3), 2)
        assert program.week_index == 2
        assert program.source == "local"
        assert program.generated_at == "2026-03-16T09:30:00"
        assert all(w.week_index == 2 for w in program.workouts)


# ===========================================================================
# Split planner
# ===========================================================================


class TestSplitPlanner:
    """Exercise selection with catalog order preserved."""

    def test_full_body_first_day(self, catalog):
        """
        week 1, day0 → v = 1:
        chest[1] flyes, back[1] single-arm row, first shoulder, first 2 legs,
        biceps on even day, first 2 core.
        """
        workouts = plan_split("dumbbells", 3, 1, "beginner", catalog, IdentityRandomSource())
        assert _names(workouts[0]) == [
            "ex_dumbbell_flyes",
            "ex_single_arm_row",
            "ex_dumbbell_shoulder_press",
            "ex_goblet_squats",
            "ex_lunges",
            "ex_bicep_curls",
            "ex_russian_twists",
            "ex_weighted_crunches",
        ]

    def test_full_body_second_day_uses_triceps(self, catalog):
        """day1 → v = 2: chest[2] incline press, back[2] renegade rows, triceps."""
        workouts = plan_split("dumbbells", 3, 1, "beginner", catalog, IdentityRandomSource())
        names = _names(workouts[1])
        assert names[:2] == ["ex_incline_dumbbell_press", "ex_renegade_rows"]
        assert "ex_tricep_kickbacks" in names
        assert "ex_bicep_curls" not in names

    def test_variation_shifts_across_weeks(self, catalog):
        """Day 1 of week 1 (v=1) and week 2 (v=2) pick different chest work."""
        rng = IdentityRandomSource()
        week1 = plan_split("dumbbells", 3, 1, "beginner", catalog, rng)
        week2 = plan_split("dumbbells", 3, 2, "beginner", catalog, rng)
        assert week1[0].exercises[0].name_key != week2[0].exercises[0].name_key

    def test_empty_bucket_skipped(self, catalog):
        """Bodyweight table has no biceps: even full-body days lose that slot."""
        workouts = plan_split("none", 4, 1, "beginner", catalog, IdentityRandomSource())
        assert len(workouts[0].exercises) == 7  # chest, back, shoulder, 2 legs, 2 core
        assert len(workouts[1].exercises) == 8  # triceps present

    def test_ppl_push_day(self, catalog):
        """
        week 1, day0 → v = 1:
        chest take 2 rotated by 2 → incline press, pullover
        shoulders rotated by 1 → lateral raises; triceps rotated by 1 → extensions
        """
        workouts = plan_split("dumbbells", 5, 1, "beginner", catalog, IdentityRandomSource())
        assert workouts[0].title_key == "workout_push"
        assert _names(workouts[0]) == [
            "ex_incline_dumbbell_press",
            "ex_dumbbell_pullover",
            "ex_lateral_raises",
            "ex_tricep_extensions",
        ]

    def test_ppl_leg_day_has_core(self, catalog):
        """day2 → v = 1: legs rotated by 2, glutes by 1, then two core."""
        workouts = plan_split("dumbbells", 5, 1, "beginner", catalog, IdentityRandomSource())
        legs = workouts[2]
        assert legs.title_key == "workout_legs"
        assert _names(legs) == [
            "ex_bulgarian_split_squats",
            "ex_dumbbell_rdl",
            "ex_hip_thrusts",
            "ex_russian_twists",
            "ex_weighted_crunches",
        ]

    def test_ppl_titles(self, catalog):
        workouts = plan_split("dumbbells", 6, 1, "beginner", catalog, IdentityRandomSource())
        assert [w.title_key for w in workouts] == [
            "workout_push", "workout_pull", "workout_legs",
            "workout_push", "workout_pull", "workout_legs",
        ]

    @pytest.mark.parametrize("sessions, expected", [(1, 1), (2, 2), (7, 6), (0, 0)])
    def test_split_length(self, catalog, sessions, expected):
        workouts = plan_split("dumbbells", sessions, 1, "beginner", catalog, IdentityRandomSource())
        assert len(workouts) == expected

    def test_missing_equipment_table(self):
        """A catalog without the profile's equipment yields empty workouts, not errors."""
        finisher = Exercise("ex_burpees", ("full_body",), "none", 4, 12, rest_seconds=45)
        sparse = ExerciseCatalog({"none": EquipmentTable("none", {}, finisher)})
        program = _generator(sparse).generate_week_program(_make_profile(4), 1)
        assert len(program.workouts) == 4
        assert all(not w.exercises for w in program.workouts[:-1])
        assert _names(program.workouts[-1]) == ["ex_burpees"]


# ===========================================================================
# Adaptation through the pipeline
# ===========================================================================


class TestPipelineAdaptation:
    """Goal, performance, progression and determinism end to end."""

    def test_no_history_keeps_catalog_prescription(self, catalog):
        """Scenario: new user, muscle_gain, week 1 → flyes 3x12, rest 60."""
        program = _generator(catalog).generate_week_program(_make_profile(3), 1)
        first = program.workouts[0].exercises[0]
        assert (first.sets, first.reps, first.rest_seconds) == (3, 12, 60)
        assert program.workouts[0].difficulty == "beginner"

    def test_easy_history_increases_load(self, catalog):
        """
        Easy logs: avg difficulty 1.0, rating 5, completion 1.0
        → adjustment 0.15 + 0.05 + 0.05 = 0.25 → 0.20
        flyes 3x12 rest 60 → sets 4, reps 12 + round(2.4) = 14, rest 50
        tier: week 1 beginner, easy + complete → intermediate
        """
        program = _generator(catalog).generate_week_program(
            _make_profile(3), 1, _easy_logs()
        )
        first = program.workouts[0].exercises[0]
        assert (first.sets, first.reps, first.rest_seconds) == (4, 14, 50)
        assert program.workouts[0].difficulty == "intermediate"

    def test_weight_loss_goal(self, catalog):
        """flyes reps 12 + 5 = 17, rest 60 - 15 = 45."""
        program = _generator(catalog).generate_week_program(
            _make_profile(3, goal="weight_loss"), 1
        )
        first = program.workouts[0].exercises[0]
        assert (first.reps, first.rest_seconds) == (17, 45)

    def test_even_week_progression(self, catalog):
        """Week 2, day0 → v = 2 → incline press 4x10, +1 rep → 11."""
        program = _generator(catalog).generate_week_program(_make_profile(3), 2)
        first = program.workouts[0].exercises[0]
        assert first.name_key == "ex_incline_dumbbell_press"
        assert first.reps == 11

    def test_challenge_is_harder_than_base(self, catalog):
        """Challenge day: exercise reps +3 and finisher appended."""
        program = _generator(catalog).generate_week_program(_make_profile(3), 1)
        challenge = program.workouts[-1]
        assert challenge.title_key == "workout_challenge"
        assert challenge.difficulty == "advanced"
        assert challenge.exercises[-1].name_key == "ex_dumbbell_complex"

    def test_seeded_generation_is_deterministic(self, catalog):
        profile = _make_profile(5)
        a = _generator(catalog, SeededRandomSource(42)).generate_week_program(profile, 3)
        b = _generator(catalog, SeededRandomSource(42)).generate_week_program(profile, 3)
        assert a == b

    def test_analysis_uses_generator_clock(self, catalog):
        """Logs older than the window relative to the injected clock are ignored."""
        old = [
            SessionLog("2026-01-05", [], rating=1, difficulty="too_hard"),
        ]
        assert analyze_performance(old, today=NOW.date()).session_count == 0
        program = _generator(catalog).generate_week_program(_make_profile(3), 1, old)
        assert program.workouts[0].exercises[0].sets == 3

    def test_generator_analyze_uses_clock(self, catalog):
        """Recent logs count relative to the clock: 2026-03-14 is within 2 weeks of 03-16."""
        gen = _generator(catalog)
        performance = gen.analyze(_easy_logs())
        assert performance.session_count == 4
        assert performance.recommended_intensity_adjustment == pytest.approx(0.20)
        # Same logs seen from two months later fall outside the window
        assert gen.analyze(_easy_logs(), today=NOW.date().replace(month=5)).session_count == 0


# ===========================================================================
# Week continuation
# ===========================================================================


class TestWeekContinuation:
    """generate_next_week and regenerate_current_week."""

    def test_next_week_continues_calendar(self, catalog):
        gen = _generator(catalog)
        week1 = gen.generate_week_program(_make_profile(4, week=1), 1)
        week2 = gen.generate_next_week(_make_profile(4, week=2), [], [week1])
        # week 1 ends 2026-03-21 → week 2 starts 2026-03-22
        assert week2.week_index == 2
        assert week2.scheduled_dates[0] == "2026-03-22"

    def test_regenerate_ignores_own_week(self, catalog):
        gen = _generator(catalog)
        week1 = gen.generate_week_program(_make_profile(4, week=1), 1)
        again = gen.regenerate_current_week(_make_profile(4, week=1), [], [week1])
        assert again.scheduled_dates == week1.scheduled_dates

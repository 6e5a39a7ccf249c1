"""
Tests for calendar placement: day-offset distribution, workout dating
and start-date resolution.
"""

from datetime import date

import pytest

from fit_scheduler.core.models import Exercise, WeekProgram, Workout
from fit_scheduler.core.schedule import (
    distribute_day_offsets,
    resolve_start_date,
    schedule_workouts,
)


def _workout(day: int, scheduled: str | None = None) -> Workout:
    ex = Exercise("ex_squats", ("legs",), "none", sets=3, reps=10, rest_seconds=60)
    return Workout(
        title_key="workout_full_body",
        week_index=1,
        day_index=day,
        exercises=[ex],
        duration_minutes=10,
        difficulty="beginner",
        scheduled_date=scheduled,
    )


def _program(week: int, dates: list[str]) -> WeekProgram:
    return WeekProgram(
        week_index=week,
        workouts=[_workout(i + 1, d) for i, d in enumerate(dates)],
    )


# =============================================================================
# distribute_day_offsets
# =============================================================================


class TestDistributeDayOffsets:
    """Even spread of n sessions over a 7-day window."""

    def test_four_sessions(self):
        # spacing 1.75 → round(0, 1.75, 3.5, 5.25) = 0, 2, 4, 5
        assert distribute_day_offsets(4) == [0, 2, 4, 5]

    def test_seven_sessions(self):
        assert distribute_day_offsets(7) == [0, 1, 2, 3, 4, 5, 6]

    def test_one_session(self):
        assert distribute_day_offsets(1) == [0]

    @pytest.mark.parametrize("n", [0, -1])
    def test_non_positive(self, n):
        assert distribute_day_offsets(n) == []

    @pytest.mark.parametrize(
        "n, expected",
        [
            (2, [0, 4]),  # round(3.5) = 4
            (3, [0, 2, 5]),  # 2.33 → 2, 4.67 → 5
            (5, [0, 1, 3, 4, 6]),  # 1.4, 2.8, 4.2, 5.6
            (6, [0, 1, 2, 4, 5, 6]),  # 1.17, 2.33, 3.5, 4.67, 5.83
        ],
    )
    def test_known_spreads(self, n, expected):
        assert distribute_day_offsets(n) == expected

    @pytest.mark.parametrize("n", range(1, 8))
    def test_distinct_sorted_in_window(self, n):
        offsets = distribute_day_offsets(n)
        assert len(offsets) == n
        assert offsets == sorted(set(offsets))
        assert all(0 <= o <= 6 for o in offsets)

    def test_more_sessions_than_days(self):
        """n > 7 fills the window but never exceeds it."""
        offsets = distribute_day_offsets(9)
        assert offsets == sorted(set(offsets))
        assert all(0 <= o <= 6 for o in offsets)
        assert len(offsets) <= 7

    @pytest.mark.parametrize("n", range(0, 10))
    def test_idempotent(self, n):
        assert distribute_day_offsets(n) == distribute_day_offsets(n)


# =============================================================================
# schedule_workouts
# =============================================================================


class TestScheduleWorkouts:
    """Dates are start_date + offset[i]."""

    def test_four_sessions_from_monday(self):
        workouts = [_workout(d) for d in range(1, 5)]
        scheduled = schedule_workouts(workouts, 4, "2026-03-16")
        assert [w.scheduled_date for w in scheduled] == [
            "2026-03-16", "2026-03-18", "2026-03-20", "2026-03-21",
        ]

    def test_extra_workouts_dropped(self):
        workouts = [_workout(d) for d in range(1, 7)]
        scheduled = schedule_workouts(workouts, 3, "2026-03-16")
        assert [w.day_index for w in scheduled] == [1, 2, 3]

    def test_crosses_month_boundary(self):
        scheduled = schedule_workouts([_workout(1), _workout(2)], 2, "2026-03-30")
        assert [w.scheduled_date for w in scheduled] == ["2026-03-30", "2026-04-03"]

    def test_input_not_modified(self):
        workouts = [_workout(1)]
        schedule_workouts(workouts, 1, "2026-03-16")
        assert workouts[0].scheduled_date is None

    def test_dates_distinct(self):
        workouts = [_workout(d) for d in range(1, 7)]
        dates = [w.scheduled_date for w in schedule_workouts(workouts, 6, "2026-03-16")]
        assert len(set(dates)) == len(dates) == 6


# =============================================================================
# resolve_start_date
# =============================================================================


class TestResolveStartDate:
    """Explicit date, else continue after the last scheduled day, else today."""

    TODAY = date(2026, 3, 16)

    def test_explicit_wins(self):
        programs = [_program(1, ["2026-03-20"])]
        assert resolve_start_date("2026-04-01", programs, self.TODAY) == "2026-04-01"

    def test_no_programs_uses_today(self):
        assert resolve_start_date(None, [], self.TODAY) == "2026-03-16"

    def test_continues_after_latest(self):
        programs = [
            _program(1, ["2026-03-10", "2026-03-14"]),
            _program(2, ["2026-03-17", "2026-03-21"]),
        ]
        assert resolve_start_date(None, programs, self.TODAY) == "2026-03-22"

    def test_day_after_latest_equal_to_today(self):
        programs = [_program(1, ["2026-03-15"])]
        assert resolve_start_date(None, programs, self.TODAY) == "2026-03-16"

    def test_stale_programs_use_today(self):
        programs = [_program(1, ["2026-02-01", "2026-02-05"])]
        assert resolve_start_date(None, programs, self.TODAY) == "2026-03-16"

    def test_unscheduled_workouts_ignored(self):
        programs = [_program(1, [None, None])]  # type: ignore[list-item]
        assert resolve_start_date(None, programs, self.TODAY) == "2026-03-16"

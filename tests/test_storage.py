"""
Tests for the data directory store and the JSON serializers.
"""

import json

import pytest

from fit_scheduler.core.models import (
    Exercise,
    ExerciseRecord,
    SessionLog,
    SetRecord,
    UserProfile,
    WeekProgram,
    Workout,
)
from fit_scheduler.io.profile_store import ProfileStore
from fit_scheduler.io.serializers import (
    ValidationError,
    dict_to_session_log,
    dict_to_week_program,
    json_line_to_session,
    parse_exercise_entry,
    session_to_json_line,
    week_program_to_dict,
)


def _program(week: int, start_day: int = 16) -> WeekProgram:
    ex = Exercise("ex_squats", ("legs", "glutes"), "none", 4, 20, tempo="2-1-2", rest_seconds=60)
    workout = Workout(
        title_key="workout_full_body",
        week_index=week,
        day_index=1,
        exercises=[ex],
        duration_minutes=12,
        difficulty="beginner",
        scheduled_date=f"2026-03-{start_day:02d}",
        is_challenge=True,
    )
    return WeekProgram(week_index=week, workouts=[workout], generated_at="2026-03-16T09:30:00")


@pytest.fixture
def store(tmp_path) -> ProfileStore:
    s = ProfileStore(tmp_path / "data")
    s.init()
    s.save_profile(UserProfile(equipment="none", sessions_per_week=3))
    return s


# =============================================================================
# ProfileStore
# =============================================================================


class TestProfileStore:

    def test_init_creates_empty_files(self, tmp_path):
        s = ProfileStore(tmp_path / "fresh")
        s.init()
        assert s.sessions_path.read_text() == ""
        assert json.loads(s.programs_path.read_text()) == []
        assert not s.exists()

    def test_profile_round_trip(self, store):
        profile = store.load_profile()
        assert profile == UserProfile(equipment="none", sessions_per_week=3)

    def test_corrupt_profile_loads_as_none(self, store):
        store.profile_path.write_text("{not json")
        assert store.load_profile() is None

    def test_advance_week(self, store):
        assert store.advance_week().current_week == 2
        assert store.load_profile().current_week == 2

    def test_advance_week_without_profile(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProfileStore(tmp_path).advance_week()

    def test_logs_kept_in_date_order(self, store):
        for d in ("2026-03-12", "2026-03-08", "2026-03-10"):
            store.append_session_log(SessionLog(d, rating=3))
        assert [log.date for log in store.load_session_logs()] == [
            "2026-03-08", "2026-03-10", "2026-03-12",
        ]
        assert [log.date for log in store.load_session_logs(limit=2)] == [
            "2026-03-10", "2026-03-12",
        ]
        assert store.load_session_logs(limit=0) == []

    def test_bad_log_line_reports_line_number(self, store):
        store.sessions_path.write_text('{"date": "2026-03-08"}\n{"rating": 3}\n')
        with pytest.raises(ValidationError, match="line 2"):
            store.load_session_logs()

    def test_save_program_replaces_same_week(self, store):
        store.save_program(_program(2))
        store.save_program(_program(1))
        store.save_program(_program(2, start_day=23))

        programs = store.load_programs()
        assert [p.week_index for p in programs] == [1, 2]
        assert store.load_program(2).scheduled_dates == ["2026-03-23"]
        assert store.load_program(5) is None

    def test_program_round_trip(self, store):
        program = _program(1)
        store.save_program(program)
        assert store.load_program(1) == program

    def test_programs_must_be_a_list(self, store):
        store.programs_path.write_text('{"week_index": 1}')
        with pytest.raises(ValidationError):
            store.load_programs()


# =============================================================================
# Serializers
# =============================================================================


class TestSessionSerialization:

    def test_optional_fields_omitted(self):
        line = session_to_json_line(SessionLog("2026-03-10"))
        assert line == '{"date":"2026-03-10","exercise_records":[]}'

    def test_full_log(self):
        log = SessionLog(
            "2026-03-10",
            [ExerciseRecord("ex_lunges", [SetRecord(10, 8.0, True), SetRecord(8)])],
            rating=4,
            difficulty="too_hard",
            workout_title_key="workout_legs",
            duration_minutes=40,
            notes="tired",
        )
        assert json_line_to_session(session_to_json_line(log)) == log

    @pytest.mark.parametrize(
        "data",
        [
            {"rating": 3},
            {"date": "2026-02-30"},
            {"date": "2026-03-10", "rating": 4.5},
            {"date": "2026-03-10", "rating": 0},
            {"date": "2026-03-10", "difficulty": "meh"},
            {"date": "2026-03-10", "duration_minutes": "40"},
            {"date": "2026-03-10", "exercise_records": [{"sets": []}]},
            {"date": "2026-03-10", "exercise_records": [{"exercise_key": "x", "sets": [{"reps": -1}]}]},
        ],
    )
    def test_invalid_logs(self, data):
        with pytest.raises(ValidationError):
            dict_to_session_log(data)

    def test_invalid_json_line(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            json_line_to_session("{")


class TestProgramSerialization:

    def test_dict_shape(self):
        data = week_program_to_dict(_program(1))
        assert data["source"] == "local"
        workout = data["workouts"][0]
        assert workout["is_challenge"] is True
        assert workout["exercises"][0]["muscle_groups"] == ["legs", "glutes"]

    def test_invalid_source(self):
        data = week_program_to_dict(_program(1))
        data["source"] = "cloud"
        with pytest.raises(ValidationError):
            dict_to_week_program(data)

    def test_missing_week_index(self):
        with pytest.raises(ValidationError):
            dict_to_week_program({"workouts": []})


class TestExerciseEntry:
    """--exercise notation: name:reps/reps@kg/..."""

    def test_bodyweight_sets(self):
        record = parse_exercise_entry("ex_push_ups:12/10/8")
        assert record.exercise_key == "ex_push_ups"
        assert [s.reps for s in record.sets] == [12, 10, 8]
        assert all(s.completed and s.weight_kg == 0.0 for s in record.sets)

    def test_weighted_sets(self):
        record = parse_exercise_entry("ex_goblet_squats:10@12.5/8@12.5")
        assert [(s.reps, s.weight_kg) for s in record.sets] == [(10, 12.5), (8, 12.5)]

    def test_not_completed(self):
        record = parse_exercise_entry("ex_burpees:10/10", completed=False)
        assert not record.is_completed

    @pytest.mark.parametrize("entry", ["ex_push_ups", ":10/8", "ex_push_ups:", "ex_push_ups:10/x"])
    def test_invalid(self, entry):
        with pytest.raises(ValidationError):
            parse_exercise_entry(entry)

"""
File-based storage for the profile, session logs and generated programs.

Layout inside the data directory:
- profile.json   : user profile
- sessions.jsonl : one session log per line, chronological
- programs.json  : list of generated week programs
"""

import json
from pathlib import Path

from ..core.engine.config_loader import get_app_home
from ..core.models import SessionLog, UserProfile, WeekProgram
from .serializers import (
    ValidationError,
    dict_to_session_log,
    dict_to_user_profile,
    dict_to_week_program,
    session_to_json_line,
    user_profile_to_dict,
    week_program_to_dict,
)


class ProfileStore:
    """
    Manages the user's training data directory.

    Args:
        data_dir: Directory holding profile.json, sessions.jsonl, programs.json
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.profile_path = self.data_dir / "profile.json"
        self.sessions_path = self.data_dir / "sessions.jsonl"
        self.programs_path = self.data_dir / "programs.json"

    def exists(self) -> bool:
        """Check if a profile has been initialised."""
        return self.profile_path.exists()

    def init(self) -> None:
        """
        Create the data directory and empty session/program files.

        Existing files are left untouched.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        if not self.sessions_path.exists():
            self.sessions_path.touch()
        if not self.programs_path.exists():
            self._write_programs([])

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    def load_profile(self) -> UserProfile | None:
        """
        Load user profile from profile.json.

        Returns:
            UserProfile if file exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None

        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_user_profile(data)
        except (json.JSONDecodeError, ValidationError, AttributeError):
            return None

    def save_profile(self, profile: UserProfile) -> None:
        """Write the profile to profile.json."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.profile_path, "w") as f:
            json.dump(user_profile_to_dict(profile), f, indent=2)

    def advance_week(self) -> UserProfile:
        """
        Increment current_week in the stored profile.

        Returns:
            The updated profile

        Raises:
            FileNotFoundError: If no profile exists
        """
        profile = self.load_profile()
        if profile is None:
            raise FileNotFoundError(
                f"Profile not found: {self.profile_path}. Run 'init' first."
            )
        profile.current_week += 1
        self.save_profile(profile)
        return profile

    # -------------------------------------------------------------------------
    # Session logs
    # -------------------------------------------------------------------------

    def load_session_logs(self, limit: int | None = None) -> list[SessionLog]:
        """
        Load session logs, sorted by date.

        Args:
            limit: Return only the most recent N logs

        Returns:
            List of SessionLog (empty if the file does not exist)

        Raises:
            ValidationError: If a line cannot be parsed
        """
        if not self.sessions_path.exists():
            return []

        logs: list[SessionLog] = []
        with open(self.sessions_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    logs.append(dict_to_session_log(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.sessions_path}: {e}"
                    ) from e

        logs.sort(key=lambda s: s.date)

        if limit is not None:
            logs = logs[-limit:] if limit > 0 else []
        return logs

    def append_session_log(self, log: SessionLog) -> None:
        """
        Add a session log, keeping the file in chronological order.

        Logs on the same date are kept in insertion order.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logs = self.load_session_logs()

        insert_idx = len(logs)
        for i, existing in enumerate(logs):
            if log.date < existing.date:
                insert_idx = i
                break
        logs.insert(insert_idx, log)

        self._write_session_logs(logs)

    def _write_session_logs(self, logs: list[SessionLog]) -> None:
        with open(self.sessions_path, "w") as f:
            for log in logs:
                f.write(session_to_json_line(log) + "\n")

    # -------------------------------------------------------------------------
    # Programs
    # -------------------------------------------------------------------------

    def load_programs(self) -> list[WeekProgram]:
        """
        Load all saved week programs, ordered by week index.

        Raises:
            ValidationError: If programs.json is malformed
        """
        if not self.programs_path.exists():
            return []

        try:
            with open(self.programs_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.programs_path}: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(f"{self.programs_path} must contain a list of programs")

        programs = [dict_to_week_program(p) for p in data]
        programs.sort(key=lambda p: p.week_index)
        return programs

    def load_program(self, week_index: int) -> WeekProgram | None:
        """Return the saved program for a week, or None."""
        for program in self.load_programs():
            if program.week_index == week_index:
                return program
        return None

    def save_program(self, program: WeekProgram) -> None:
        """Store a program, replacing any earlier one for the same week."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        programs = [p for p in self.load_programs() if p.week_index != program.week_index]
        programs.append(program)
        programs.sort(key=lambda p: p.week_index)
        self._write_programs(programs)

    def _write_programs(self, programs: list[WeekProgram]) -> None:
        with open(self.programs_path, "w") as f:
            json.dump([week_program_to_dict(p) for p in programs], f, indent=2)


def get_default_data_dir() -> Path:
    """Default data directory: FIT_SCHEDULER_HOME or ~/.fit-scheduler."""
    return get_app_home()

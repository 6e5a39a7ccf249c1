"""
AI-backed week program generation with local fallback.

A RemoteProgramGenerator is asked once for a week program.  Whatever it
returns is rescheduled with the local distributor and clamped to the same
bounds as the local pipeline, so callers get the same output contract from
both paths.  Any failure (network, timeout, malformed payload, or a
generator that returns None) falls back to ProgramGenerator.
"""

import asyncio
import logging
import os
from collections import Counter
from dataclasses import replace as _dc_replace
from typing import Protocol, Sequence

from openai import AsyncOpenAI

from ..io.serializers import ValidationError, parse_remote_program
from .catalog import ExerciseCatalog
from .config import PPL_PATTERN, REMOTE_DEFAULT_REST, REMOTE_FEEDBACK_SESSIONS
from .engine.config_loader import Settings
from .generator import ProgramGenerator
from .intensity import enforce_exercise_bounds
from .metrics import set_completion_by_exercise, workout_duration
from .models import SessionLog, UserProfile, WeekProgram
from .schedule import resolve_start_date, schedule_workouts
from .splits import split_kind

logger = logging.getLogger(__name__)


class RemoteGenerationError(Exception):
    """Raised when the remote generator cannot produce a usable program."""

    pass


class RemoteProgramGenerator(Protocol):
    """Anything that can produce a week program asynchronously."""

    async def generate(
        self,
        profile: UserProfile,
        week_index: int,
        session_logs: Sequence[SessionLog],
        start_date: str,
    ) -> WeekProgram | None:
        ...


# =============================================================================
# PROMPT
# =============================================================================

GOAL_CONTEXT: dict[str, str] = {
    "weight_loss": (
        "Focus on HIGH-INTENSITY, metabolic training. Include supersets, circuits, "
        "shorter rest periods (30-45s), higher reps (12-20), and compound movements "
        "to maximize calorie burn while preserving muscle."
    ),
    "muscle_gain": (
        "Focus on HYPERTROPHY training. Use moderate reps (8-12), controlled tempo "
        "(3-1-2), adequate rest (60-90s), progressive overload, and 10-15 sets per "
        "muscle group per week."
    ),
    "maintenance": (
        "Focus on BALANCED training. Mix strength and endurance, moderate volume, "
        "varied rep ranges (8-15) and full body coverage."
    ),
    "recomposition": (
        "Focus on STRENGTH with metabolic conditioning. Heavy compound lifts (6-10 "
        "reps), moderate rest (60-75s), and some high-intensity finishers."
    ),
}

SPLIT_DESCRIPTIONS: dict[str, str] = {
    "full_body": "Full Body split (each session targets all major muscle groups)",
    "ppl": (
        "Push/Pull/Legs split (Push: chest, shoulders, triceps. "
        "Pull: back, biceps. Legs: legs, glutes)"
    ),
}

EQUIPMENT_DESCRIPTIONS: dict[str, str] = {
    "dumbbells": "dumbbells only",
    "none": "bodyweight only (no equipment)",
}

RESPONSE_SCHEMA = """{
  "workouts": [
    {
      "title": "workout title",
      "dayIndex": 1,
      "difficulty": "beginner|intermediate|advanced",
      "isChallenge": false,
      "exercises": [
        {
          "name": "exercise_key",
          "muscleGroups": ["chest", "triceps"],
          "sets": 4,
          "reps": 10,
          "tempo": "3-1-2",
          "restSeconds": 60,
          "notes": "optional form tip"
        }
      ]
    }
  ]
}"""


def build_feedback_context(session_logs: Sequence[SessionLog]) -> str:
    """
    Summarise the last sessions for the prompt.

    Uses the last 10 logs: majority difficulty feedback, enjoyment band
    (< 3.0 low, >= 4.0 high) and up to three exercises with under 70 %
    of their sets completed.
    """
    if not session_logs:
        return (
            "No previous session data available. Generate a program suitable "
            "for beginners starting their fitness journey."
        )

    recent = list(session_logs)[-REMOTE_FEEDBACK_SESSIONS:]
    lines = ["PERFORMANCE FEEDBACK FROM RECENT SESSIONS:"]

    counts = Counter(log.difficulty for log in recent if log.difficulty is not None)
    if counts:
        easy, right, hard = counts["too_easy"], counts["just_right"], counts["too_hard"]
        if easy > right and easy > hard:
            lines.append(
                "Sessions have been TOO EASY. INCREASE intensity: more sets, higher "
                "reps, shorter rest, or harder variations."
            )
        elif hard > right and hard > easy:
            lines.append(
                "Sessions have been TOO HARD. DECREASE intensity: fewer sets, lower "
                "reps, longer rest, or easier variations."
            )
        else:
            lines.append(
                "Difficulty is appropriate. Maintain intensity with slight progression."
            )

    ratings = [log.rating for log in recent if log.rating is not None]
    if ratings:
        avg = sum(ratings) / len(ratings)
        if avg < 3.0:
            lines.append(
                f"User enjoyment is LOW (avg {avg:.1f}/5). Add variety and consider "
                "reducing volume."
            )
        elif avg >= 4.0:
            lines.append(
                f"User enjoyment is HIGH (avg {avg:.1f}/5). Keep the current style."
            )

    struggling = [
        key
        for key, (done, total) in set_completion_by_exercise(recent).items()
        if done / max(total, 1) < 0.7
    ]
    if struggling:
        lines.append(
            "User struggles with these exercises (low completion): "
            f"{', '.join(struggling[:3])}. Consider easier alternatives."
        )

    lines.append("Use this feedback to calibrate difficulty and exercise selection.")
    return "\n".join(lines)


def build_exercise_list(equipment: str, catalog: ExerciseCatalog) -> str:
    """One line per muscle group listing the catalog keys for the equipment."""
    lines = []
    for group in ("chest", "back", "shoulders", "biceps", "triceps", "legs", "glutes", "core"):
        keys = [e.name_key for e in catalog.exercises_for(equipment, group)]
        if keys:
            lines.append(f"{group}: {', '.join(keys)}")
    return "\n".join(lines)


def build_program_prompt(
    profile: UserProfile,
    week_index: int,
    session_logs: Sequence[SessionLog],
    catalog: ExerciseCatalog,
) -> str:
    """
    Build the user prompt for one week.

    Args:
        profile: User profile
        week_index: 1-based week number
        session_logs: Session history, chronological
        catalog: Source of the allowed exercise keys

    Returns:
        Prompt text
    """
    sessions = profile.sessions_per_week
    equipment = EQUIPMENT_DESCRIPTIONS[profile.equipment]
    goal = profile.fitness_goal.replace("_", " ").upper()

    return f"""Generate a personalized {sessions}-day workout program for week {week_index}.

USER PROFILE:
- Goal: {goal}
- Equipment: {equipment}
- Sessions per week: {sessions}
- Week number: {week_index} (adjust difficulty progressively)

TRAINING APPROACH:
{GOAL_CONTEXT[profile.fitness_goal]}

SPLIT TYPE: {SPLIT_DESCRIPTIONS[split_kind(sessions)]}

{build_feedback_context(session_logs)}

EXERCISES TO USE ({equipment}):
{build_exercise_list(profile.equipment, catalog)}

Respond ONLY with valid JSON in this shape:
{RESPONSE_SCHEMA}

REQUIREMENTS:
- Generate exactly {sessions} workouts, 5-7 exercises each, compound movements first
- The last workout is the week's challenge (isChallenge: true)
- muscleGroups must use: chest, back, shoulders, biceps, triceps, legs, core, glutes, full_body
- difficulty by week: weeks 1-2 beginner, 3-5 intermediate, 6+ advanced
- Tempo format: "eccentric-pause-concentric" in seconds (e.g. "3-1-2")
"""


# =============================================================================
# OPENAI CLIENT
# =============================================================================


class OpenAIProgramGenerator:
    """
    RemoteProgramGenerator backed by the OpenAI chat completions API.

    Args:
        catalog: Exercise catalog for the prompt's exercise list
        settings: Model, temperature, token and timeout settings
        client: Preconfigured AsyncOpenAI (default: built from OPENAI_API_KEY)
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        settings: Settings | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.catalog = catalog
        self.settings = settings or Settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        # Built lazily so a missing API key surfaces as a generation failure
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=os.environ.get("OPENAI_API_KEY"),
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        """
        Send one chat request and return the message content.

        Raises:
            RemoteGenerationError: On timeout or an empty response
        """
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.settings.remote_model,
                    messages=[
                        {
                            "role": "system",
                            "content": (
                                "You are a certified personal trainer. "
                                "Return ONLY valid JSON. No markdown, no explanations."
                            ),
                        },
                        {"role": "user", "content": prompt},
                    ],
                    temperature=self.settings.remote_temperature,
                    max_tokens=self.settings.remote_max_tokens,
                    response_format={"type": "json_object"},
                ),
                timeout=self.settings.remote_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise RemoteGenerationError(
                f"Remote generation timed out after {self.settings.remote_timeout_seconds}s"
            ) from e

        if not response.choices or not response.choices[0].message.content:
            raise RemoteGenerationError("Remote generation returned an empty response")
        return response.choices[0].message.content

    async def generate(
        self,
        profile: UserProfile,
        week_index: int,
        session_logs: Sequence[SessionLog],
        start_date: str,
    ) -> WeekProgram | None:
        """Request and parse one week; dates are assigned by the caller."""
        prompt = build_program_prompt(profile, week_index, session_logs, self.catalog)
        content = await self.complete(prompt)
        try:
            return parse_remote_program(
                content, week_index, profile.equipment, default_rest=REMOTE_DEFAULT_REST
            )
        except ValidationError as e:
            raise RemoteGenerationError(str(e)) from e


# =============================================================================
# ORCHESTRATION
# =============================================================================


def finalize_remote_program(
    program: WeekProgram,
    profile: UserProfile,
    start_date: str,
    generated_at: str,
) -> WeekProgram:
    """
    Bring a remote program under the local output contract.

    Workouts are ordered by day, clamped to the exercise bounds, given
    fresh durations and dates, and exactly the last one is marked as the
    advanced challenge.

    Raises:
        RemoteGenerationError: If fewer workouts than the week needs were
            returned, or a kept workout has no exercises
    """
    expected = min(max(0, profile.sessions_per_week), len(PPL_PATTERN))
    if len(program.workouts) < expected:
        raise RemoteGenerationError(
            f"Remote program has {len(program.workouts)} workouts, expected {expected}"
        )

    workouts = sorted(program.workouts, key=lambda w: w.day_index)
    workouts = schedule_workouts(workouts, profile.sessions_per_week, start_date)

    empty = [w.day_index for w in workouts if not w.exercises]
    if empty:
        raise RemoteGenerationError(f"Remote workouts without exercises on days {empty}")

    finalized = []
    last = len(workouts) - 1
    for i, w in enumerate(workouts):
        exercises = [enforce_exercise_bounds(e) for e in w.exercises]
        is_challenge = i == last
        finalized.append(
            _dc_replace(
                w,
                week_index=program.week_index,
                exercises=exercises,
                duration_minutes=workout_duration(exercises),
                difficulty="advanced" if is_challenge else w.difficulty,
                is_challenge=is_challenge,
            )
        )

    return WeekProgram(
        week_index=program.week_index,
        workouts=finalized,
        generated_at=generated_at,
        source="remote",
    )


async def generate_week_program_with_remote(
    generator: ProgramGenerator,
    remote: RemoteProgramGenerator | None,
    profile: UserProfile,
    week_index: int,
    session_logs: Sequence[SessionLog] = (),
    start_date: str | None = None,
    existing_programs: Sequence[WeekProgram] = (),
) -> WeekProgram:
    """
    Generate a week, preferring the remote generator.

    The remote generator is awaited once.  On any exception, a None
    result, or a program that finalize_remote_program rejects (too few
    workouts, a workout without exercises) the local pipeline runs with
    the same start date.  Caller cancellation propagates.

    Args:
        generator: Local ProgramGenerator (also supplies the clock)
        remote: Remote generator, or None to go straight to local
        profile: User profile
        week_index: 1-based week number
        session_logs: Session history
        start_date: Explicit first day (YYYY-MM-DD); derived if None
        existing_programs: Earlier programs, used to continue the calendar

    Returns:
        WeekProgram with source "remote" or "local"
    """
    now = generator.clock()
    start = resolve_start_date(start_date, existing_programs, now.date())

    finalized: WeekProgram | None = None
    if remote is not None:
        try:
            program = await remote.generate(profile, week_index, session_logs, start)
            if program is None:
                logger.info("Remote generator returned no program, using local generator")
            else:
                finalized = finalize_remote_program(
                    program, profile, start, now.isoformat(timespec="seconds")
                )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Remote generation failed, using local generator: %s", e)
            finalized = None

    if finalized is None:
        return generator.generate_week_program(
            profile,
            week_index,
            session_logs,
            start_date=start,
            existing_programs=existing_programs,
        )

    logger.info(
        "Remote program generated for week %d (%d workouts)", week_index, len(finalized.workouts)
    )
    return finalized

"""
Calendar placement of a week's workouts.

Workouts are spread over a 7-day window starting at the start date so
that training days are as evenly spaced as the session count allows.
"""

from dataclasses import replace as _dc_replace
from datetime import date, datetime, timedelta
from typing import Sequence

from .config import DAYS_IN_WEEK
from .metrics import round_half_away
from .models import WeekProgram, Workout


def distribute_day_offsets(n: int) -> list[int]:
    """
    Spread n sessions over a 7-day window.

    offset_i = min(round(i * 7 / n), 6), deduplicated and sorted.  If
    rounding collapsed two sessions onto one day, the largest gap
    between consecutive offsets is split at its midpoint until there
    are enough days (or no gap can be split).

    Examples:
        n=3 → [0, 2, 5]
        n=4 → [0, 2, 4, 5]

    Args:
        n: Number of sessions

    Returns:
        Sorted distinct offsets in [0, 6]; empty for n <= 0
    """
    if n <= 0:
        return []
    if n == 1:
        return [0]
    if n == DAYS_IN_WEEK:
        return list(range(DAYS_IN_WEEK))

    spacing = DAYS_IN_WEEK / n
    offsets = sorted(
        {min(round_half_away(i * spacing), DAYS_IN_WEEK - 1) for i in range(n)}
    )

    while len(offsets) < n and len(offsets) < DAYS_IN_WEEK and len(offsets) > 1:
        largest_gap = 0
        gap_index = 0
        for i in range(len(offsets) - 1):
            gap = offsets[i + 1] - offsets[i]
            if gap > largest_gap:
                largest_gap = gap
                gap_index = i

        new_day = offsets[gap_index] + largest_gap // 2
        if new_day >= DAYS_IN_WEEK or new_day in offsets:
            break
        offsets.append(new_day)
        offsets.sort()

    return offsets


def _add_days(iso_date: str, days: int) -> str:
    d = datetime.strptime(iso_date, "%Y-%m-%d").date()
    return (d + timedelta(days=days)).isoformat()


def schedule_workouts(
    workouts: Sequence[Workout],
    sessions_per_week: int,
    start_date: str,
) -> list[Workout]:
    """
    Assign calendar dates to workouts.

    Only the first min(len(workouts), sessions_per_week) workouts are
    kept.  Workout i gets start_date + offset[i]; a workout with no
    matching offset keeps scheduled_date None.

    Args:
        workouts: Workouts in day order
        sessions_per_week: Requested session count
        start_date: First day of the window (YYYY-MM-DD)

    Returns:
        New list of scheduled workouts
    """
    count = min(len(workouts), max(0, sessions_per_week))
    offsets = distribute_day_offsets(count)

    scheduled: list[Workout] = []
    for i, workout in enumerate(workouts[:count]):
        if i < len(offsets):
            scheduled.append(
                _dc_replace(workout, scheduled_date=_add_days(start_date, offsets[i]))
            )
        else:
            scheduled.append(_dc_replace(workout))
    return scheduled


def resolve_start_date(
    start_date: str | None,
    existing_programs: Sequence[WeekProgram],
    today: date,
) -> str:
    """
    Pick the first day of the scheduling window.

    An explicit start date wins.  Otherwise scheduling continues the day
    after the latest scheduled workout, provided that day is not in the
    past; else it starts today.

    Args:
        start_date: Explicit start (YYYY-MM-DD) or None
        existing_programs: Previously generated programs
        today: Current local date

    Returns:
        ISO start date
    """
    if start_date is not None:
        return start_date

    dates = [d for program in existing_programs for d in program.scheduled_dates]
    if dates:
        latest = max(datetime.strptime(d, "%Y-%m-%d").date() for d in dates)
        following = latest + timedelta(days=1)
        if following >= today:
            return following.isoformat()

    return today.isoformat()

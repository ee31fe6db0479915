"""Shared shift calculations.

Every evaluator measures hours, rest periods and week windows through these
helpers so that, for example, the cost evaluator's overtime threshold lines
up exactly with the compliance evaluator's weekly-hours check.
"""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from roster_consensus.models.roster import Shift

__all__ = [
    "WEEKDAY_NAMES",
    "day_name",
    "hours_between",
    "is_weekend",
    "rest_hours_between",
    "round_half_up",
    "shift_hours",
    "shifts_in_week",
    "shifts_on_day",
    "shifts_overlap",
    "week_bounds",
    "whole_days_between",
    "whole_hours_between",
]

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def shift_hours(shift: Shift) -> float:
    """Return paid working hours: duration minus the unpaid break."""
    minutes = (shift.end_time - shift.start_time).total_seconds() / 60
    return (minutes - shift.break_minutes) / 60


def hours_between(later: datetime, earlier: datetime) -> float:
    """Return the exact signed number of hours from earlier to later."""
    return (later - earlier).total_seconds() / 3600


def whole_hours_between(later: datetime, earlier: datetime) -> int:
    """Return the signed number of full hours from earlier to later."""
    return math.trunc(hours_between(later, earlier))


def whole_days_between(later: datetime, earlier: datetime) -> int:
    """Return the signed number of full days from earlier to later."""
    return math.trunc((later - earlier).total_seconds() / 86400)


def rest_hours_between(first: Shift, second: Shift) -> float:
    """Return the exact hours of rest between two shifts.

    The shift that starts first is treated as the earlier one. Back-to-back
    shifts yield zero, overlapping shifts a negative number.

    """
    if first.start_time <= second.start_time:
        earlier, later = first, second
    else:
        earlier, later = second, first
    return hours_between(later.start_time, earlier.end_time)


def is_weekend(moment: datetime) -> bool:
    """Return True for Saturdays and Sundays."""
    return moment.weekday() >= 5


def day_name(moment: datetime) -> str:
    """Return the English weekday name of a moment."""
    return WEEKDAY_NAMES[moment.weekday()]


def week_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return the ISO week (Monday 00:00 to Sunday 23:59:59.999999) of a moment."""
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    start = midnight - timedelta(days=moment.weekday())
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


def shifts_in_week(
    shifts: Iterable[Shift], moment: datetime, user_id: str | None = None
) -> list[Shift]:
    """Return shifts starting in the ISO week of ``moment``.

    Args:
        shifts: Candidate shifts.
        moment: Any moment inside the week of interest.
        user_id: Restrict to one employee when given.

    Returns:
        Matching shifts in input order.

    """
    start, end = week_bounds(moment)
    return [
        s
        for s in shifts
        if start <= s.start_time <= end and (user_id is None or s.user_id == user_id)
    ]


def shifts_on_day(shifts: Iterable[Shift], moment: datetime) -> list[Shift]:
    """Return shifts starting on the same calendar date as ``moment``."""
    return [s for s in shifts if s.start_time.date() == moment.date()]


def shifts_overlap(first: Shift, second: Shift) -> bool:
    """Return True when the two shifts share any instant."""
    return first.start_time <= second.end_time and second.start_time <= first.end_time

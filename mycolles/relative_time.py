"""
Relative time formatting (French).

Turns the difference between two points in time into a phrase such as
"dans 5 minutes", "il y a 3 heures", "demain" or "dans 4 jours".

Day phrases count midnights, not 24-hour periods: from 23:00 to 01:00 two
days later is "après-demain" even though only 26 hours have elapsed.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta


MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)

NOW_PHRASE = "maintenant"

DAY_PHRASES = {
    -2: "avant-hier",
    -1: "hier",
    1: "demain",
    2: "après-demain",
}


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _time_of_day(dt: datetime) -> timedelta:
    """
    Return the time elapsed since midnight of dt's own (wall clock) day.
    """
    return timedelta(hours=dt.hour, minutes=dt.minute, seconds=dt.second, microseconds=dt.microsecond)


def _format_count(value: int, label: str) -> str:
    prefix = "dans " if value > 0 else "il y a "
    suffix = "s" if abs(value) > 1 else ""
    return f"{prefix}{abs(value)} {label}{suffix}"


def format_relative(from_: datetime, to: datetime) -> str:
    """
    Convert the difference between two datetimes into a human readable
    French string, seen from `from_`.

    Both datetimes must be comparable (both naive local times, or both aware).
    """
    diff = to - from_
    abs_diff = abs(diff)

    if abs_diff < MINUTE:
        return NOW_PHRASE

    if abs_diff < 2 * HOUR:
        return _format_count(_round_half_up(diff / MINUTE), "minute")

    # Whole 24h periods, truncated toward zero
    diff_days = int(diff / DAY)

    # Count the midnight crossed in the remaining partial day
    time_of_day_from = _time_of_day(from_)
    time_of_day_to = _time_of_day(to)
    if diff > timedelta(0) and time_of_day_to < time_of_day_from:
        diff_days += 1
    elif diff < timedelta(0) and time_of_day_from < time_of_day_to:
        diff_days -= 1

    if diff_days == 0:
        return _format_count(_round_half_up(diff / HOUR), "heure")

    if diff_days in DAY_PHRASES:
        return DAY_PHRASES[diff_days]

    return _format_count(diff_days, "jour")

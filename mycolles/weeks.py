"""
Week planner.

Expands the week assignments of one group into dated colles.

Each roster week is identified by the date of its first day ("YYYY-MM-DD");
a colle type is placed `day` days after it, at `time` o'clock.

State of a colle relative to now:
    done     started more than one hour ago
    soon     starts in one hour or more
    waiting  anything in between
"""

from __future__ import annotations

from datetime import datetime, timedelta

from mycolles.model import Colle, Roster, Week


ONE_HOUR = timedelta(hours=1)

WEEKDAYS = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]


def colle_state(start: datetime, now: datetime) -> str:
    if now - start > ONE_HOUR:
        return "done"
    if start - now >= ONE_HOUR:
        return "soon"
    return "waiting"


def _parse_week_start(raw: str) -> datetime:
    """
    Parse 'YYYY-MM-DD' into a datetime at midnight.
    Raises ValueError for invalid formats.
    """
    return datetime.strptime(raw.strip(), "%Y-%m-%d")


def weeks_for_group(roster: Roster, group: int, now: datetime) -> list[Week]:
    """
    Return every roster week of a group with its dated colles.
    """
    result: list[Week] = []

    for i, week_colles in enumerate(roster.groups[group].weeks):
        week_start = _parse_week_start(roster.weeks[i])
        week = Week(index=i, day=week_start.day, month=week_start.month)

        for colle_index in week_colles:
            colle_type = roster.colles[colle_index]
            start = week_start + timedelta(days=colle_type.day, hours=colle_type.time)
            week.colles.append(
                Colle(
                    start=start,
                    state=colle_state(start, now),
                    day=colle_type.day,
                    subject=colle_type.subject,
                    teacher=colle_type.teacher,
                    room=colle_type.room,
                )
            )

        result.append(week)

    return result


def upcoming_weeks(roster: Roster, group: int, now: datetime) -> list[Week]:
    """
    Like weeks_for_group(), without the weeks where every colle is done.
    """
    return [
        w for w in weeks_for_group(roster, group, now)
        if any(c.state != "done" for c in w.colles)
    ]

"""
Central data model definitions used across the project.

This module defines the canonical structure of a class roster (the
"colloscope") and of the values derived from it, so that:
- the roster loader, the search and the week planner share the same field names
- search results are plain values instead of objects pointing back at a roster
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Tuple


@dataclass(frozen=True)
class ColleType:
    """
    One recurring colle slot, as listed in the roster's "colles" array.

    `day` is an offset in days from the week start (0 = Monday),
    `time` is the starting hour.
    """

    day: int
    time: int
    subject: int
    teacher: int
    room: Optional[str] = None


@dataclass(frozen=True)
class Group:
    """
    One colle group: its students and, for every roster week,
    the indexes of the colle types the group attends.
    """

    students: Tuple[str, ...]
    weeks: Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Roster:
    """
    Represents one class roster as stored in data/<class_id>.json.
    """

    roster_id: int
    weeks: Tuple[str, ...]
    colles: Tuple[ColleType, ...]
    subjects: Tuple[str, ...]
    teachers: Tuple[str, ...]
    groups: Tuple[Group, ...]
    credits: Tuple[str, ...] = ()
    first_group: int = 1


@dataclass(frozen=True)
class Candidate:
    """
    A (group index, student index) pair identifying one roster entry.

    Group and student indexes are expected to stay below 1000,
    otherwise entity ids of different students collide.
    """

    group: int
    index: int
    roster_id: int = 0

    @property
    def entity_id(self) -> int:
        return self.roster_id * 1_000_000 + self.group * 1_000 + self.index


@dataclass(frozen=True)
class SearchIndexEntry:
    tokens: Tuple[str, ...]
    group: int
    index: int


@dataclass
class Colle:
    """
    One dated colle of a group (a ColleType placed in a concrete week).
    """

    start: datetime
    state: str
    day: int
    subject: int
    teacher: int
    room: Optional[str]


@dataclass
class Week:
    index: int
    day: int
    month: int
    colles: List[Colle] = field(default_factory=list)

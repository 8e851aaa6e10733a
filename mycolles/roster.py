"""
Roster loading.

A class roster is stored as one JSON file per class:

    data/<class_id>.json

The repository loads rosters either from a local directory (the bundled data
folder by default) or from a web server serving the same files, keeps every
loaded roster in memory and builds its search index once.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import requests

from mycolles.model import ColleType, Group, Roster
from mycolles.search import SearchIndex, build_index


PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

REQUEST_TIMEOUT = 30


class RosterError(ValueError):
    """
    Raised when a roster cannot be loaded or does not have the expected shape.
    """


def _require_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise RosterError(f"'{key}' must be a list")
    return value


def _str_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    return tuple(str(x) for x in _require_list(data, key))


def _parse_weeks(data: dict[str, Any]) -> tuple[str, ...]:
    weeks = _str_list(data, "weeks")
    for i, week in enumerate(weeks):
        try:
            datetime.strptime(week.strip(), "%Y-%m-%d")
        except ValueError as e:
            raise RosterError(f"weeks[{i}] must be YYYY-MM-DD") from e
    return weeks


def _parse_colle(raw: Any, position: int) -> ColleType:
    if not isinstance(raw, dict):
        raise RosterError(f"colles[{position}] must be an object")
    try:
        colle = ColleType(
            day=int(raw["day"]),
            time=int(raw["time"]),
            subject=int(raw["subject"]),
            teacher=int(raw["teacher"]),
            room=None if raw.get("room") is None else str(raw["room"]),
        )
    except KeyError as e:
        raise RosterError(f"colles[{position}] is missing {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise RosterError(f"colles[{position}] has a non-integer field") from e

    if not (0 <= colle.day <= 6):
        raise RosterError(f"colles[{position}].day must be between 0 and 6")
    if not (0 <= colle.time <= 23):
        raise RosterError(f"colles[{position}].time must be between 0 and 23")
    return colle


def _parse_group(raw: Any, position: int, n_colles: int, n_weeks: int) -> Group:
    if not isinstance(raw, dict):
        raise RosterError(f"groups[{position}] must be an object")

    students = raw.get("students")
    if not isinstance(students, list) or not all(isinstance(s, str) for s in students):
        raise RosterError(f"groups[{position}].students must be a list of names")

    weeks = raw.get("weeks", [])
    if not isinstance(weeks, list):
        raise RosterError(f"groups[{position}].weeks must be a list")
    if len(weeks) > n_weeks:
        raise RosterError(f"groups[{position}] has more weeks than the roster")

    parsed_weeks: list[tuple[int, ...]] = []
    for w, week in enumerate(weeks):
        if not isinstance(week, list):
            raise RosterError(f"groups[{position}].weeks[{w}] must be a list")
        for colle in week:
            if not isinstance(colle, int) or not (0 <= colle < n_colles):
                raise RosterError(f"groups[{position}].weeks[{w}] references unknown colle {colle!r}")
        parsed_weeks.append(tuple(week))

    return Group(students=tuple(students), weeks=tuple(parsed_weeks))


def parse_roster(data: Any, roster_id: int = 0) -> Roster:
    """
    Build a Roster from the decoded JSON of a class file.

    Raises RosterError if a required field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise RosterError("roster must be a JSON object")

    weeks = _parse_weeks(data)
    colles = tuple(_parse_colle(c, i) for i, c in enumerate(_require_list(data, "colles")))
    groups = tuple(
        _parse_group(g, i, len(colles), len(weeks)) for i, g in enumerate(_require_list(data, "groups"))
    )

    first_group = data.get("firstGroup", 1)
    if not isinstance(first_group, int):
        raise RosterError("'firstGroup' must be an integer")

    return Roster(
        roster_id=roster_id,
        weeks=weeks,
        colles=colles,
        subjects=_str_list(data, "subjects"),
        teachers=_str_list(data, "teachers"),
        groups=groups,
        credits=tuple(str(x) for x in data.get("credits", []) or []),
        first_group=first_group,
    )


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _check_class_id(class_id: str) -> str:
    """
    Strip a class id and make sure it names a single file in the data source.
    """
    class_id = class_id.strip()
    if not class_id or class_id in (".", "..") or "/" in class_id or "\\" in class_id:
        raise RosterError(f"invalid class id: {class_id!r}")
    return class_id


class RosterRepository:
    """
    Loads class rosters on demand and keeps them in memory.

    `source` is a directory or an http(s):// base URL, given as a string
    or a Path.

    Every roster gets an id in load order (0, 1, 2, ...) so that student
    entity ids stay distinct across classes.
    """

    def __init__(self, source: str | Path | None = None) -> None:
        if source is None:
            source = DATA_DIR
        elif not _is_url(source):
            source = Path(source)
        self.source: str | Path = source
        self._rosters: dict[str, Roster] = {}
        self._indexes: dict[str, SearchIndex] = {}
        self._next_id = 0
        # _lock guards the dicts and the id counter, the per-class locks
        # make concurrent loads of one class fetch it only once
        self._lock = threading.Lock()
        self._class_locks: dict[str, threading.Lock] = {}

    def _fetch(self, class_id: str) -> Any:
        if _is_url(self.source):
            url = f"{str(self.source).rstrip('/')}/{class_id}.json"
            try:
                resp = requests.get(url, timeout=REQUEST_TIMEOUT)
                resp.raise_for_status()
                return resp.json()
            except (requests.RequestException, ValueError) as e:
                raise RosterError(f"failed to load {url}: {e}") from e

        path = Path(self.source) / f"{class_id}.json"
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise RosterError(f"unknown class: {class_id}") from e
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RosterError(f"failed to load {path}: {e}") from e

    def _class_lock(self, class_id: str) -> threading.Lock:
        with self._lock:
            return self._class_locks.setdefault(class_id, threading.Lock())

    def load(self, class_id: str) -> Roster:
        """
        Return the roster of a class, loading it on first use.

        Raises RosterError for invalid class ids and unloadable rosters.
        """
        class_id = _check_class_id(class_id)
        with self._class_lock(class_id):
            cached = self._rosters.get(class_id)
            if cached is not None:
                return cached

            # Fetch outside the shared lock, other classes can load meanwhile
            data = self._fetch(class_id)

            with self._lock:
                roster = parse_roster(data, roster_id=self._next_id)
                self._next_id += 1

                # Tokenize the names right away, every search reuses the index
                self._indexes[class_id] = build_index(roster)
                self._rosters[class_id] = roster
            return roster

    def get(self, class_id: str) -> Optional[Roster]:
        return self._rosters.get(class_id.strip())

    def search_index(self, class_id: str) -> SearchIndex:
        """
        Return the search index of a roster, loading the roster if needed.
        """
        self.load(class_id)
        return self._indexes[class_id.strip()]

    def class_ids(self) -> list[str]:
        """
        List the classes available in a local data directory.
        """
        if _is_url(self.source):
            return []
        directory = Path(self.source)
        if not directory.is_dir():
            return []
        return sorted(p.stem for p in directory.glob("*.json"))

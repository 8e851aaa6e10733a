"""
CLI (Command Line Interface).

This module provides the terminal commands, e.g.:

    mycolles classes
    mycolles show <class_id> <name...>
    mycolles interactive <class_id>

Rosters are read from the bundled data folder unless --data points to
another directory or to a web server (http://...) serving <class_id>.json.
"""

from __future__ import annotations

import argparse
from datetime import datetime

from mycolles.interactive import NO_MATCH_MESSAGE, console, print_student_card, run_interactive
from mycolles.roster import DATA_DIR, RosterError, RosterRepository
from mycolles.search import resolve


def _parse_now(raw: str | None) -> datetime:
    """
    Parse --now. Values with a UTC offset are converted to naive local time,
    like datetime.now() and the colle start times.
    """
    if not raw:
        return datetime.now()
    now = datetime.fromisoformat(raw.strip())
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return now


def _cmd_classes(args: argparse.Namespace, repository: RosterRepository) -> int:
    """
    List the class ids available in the data directory.
    """
    ids = repository.class_ids()
    if not ids:
        print("No classes found.")
        return 0
    for class_id in ids:
        print(class_id)
    return 0


def _cmd_show(args: argparse.Namespace, repository: RosterRepository) -> int:
    """
    Find a student by name and print their upcoming colles.
    """
    query = " ".join(args.name).strip()
    if not query:
        print("Please provide a name.")
        return 1

    try:
        now = _parse_now(args.now)
    except ValueError:
        print(f"Invalid --now value: {args.now!r}")
        return 1

    try:
        roster = repository.load(args.class_id)
    except RosterError as e:
        print(f"Could not load class '{args.class_id}': {e}")
        return 1

    candidate = resolve(repository.search_index(args.class_id), query)
    if candidate is None:
        console.print(NO_MATCH_MESSAGE)
        return 1

    print_student_card(roster, candidate, now)
    return 0


def _cmd_interactive(args: argparse.Namespace, repository: RosterRepository) -> int:
    try:
        run_interactive(repository, args.class_id)
    except RosterError as e:
        print(f"Could not load class '{args.class_id}': {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="mycolles", description="Find your colles by typing your name")
    parser.add_argument(
        "--data",
        type=str,
        default=str(DATA_DIR),
        help="Directory or base URL holding <class_id>.json files",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("classes", help="List available classes")

    p_show = sub.add_parser("show", help="Show the colles of a student")
    p_show.add_argument("class_id", type=str, help="Class id (e.g. mpsi)")
    p_show.add_argument("name", type=str, nargs="+", help="Student name, in any order, accents optional")
    p_show.add_argument("--now", type=str, default=None, help="Reference time (ISO format), defaults to now")

    p_interactive = sub.add_parser("interactive", help="Search students interactively")
    p_interactive.add_argument("class_id", type=str, help="Class id (e.g. mpsi)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    repository = RosterRepository(args.data)

    if args.command == "classes":
        raise SystemExit(_cmd_classes(args, repository))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, repository))
    if args.command == "interactive":
        raise SystemExit(_cmd_interactive(args, repository))

    raise SystemExit(2)

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mycolles.model import Candidate, Colle, Roster, Week
from mycolles.relative_time import format_relative
from mycolles.roster import RosterRepository
from mycolles.search import name_of, resolve
from mycolles.weeks import WEEKDAYS, upcoming_weeks


console = Console()

STATE_STYLES = {
    "done": "dim",
    "waiting": "bold yellow",
    "soon": "green",
}

NO_MATCH_MESSAGE = "Aucun élève trouvé."


def _prompt(msg: str) -> str:
    return console.input(msg)


def _colle_line(roster: Roster, colle: Colle, now: datetime) -> str:
    subject = roster.subjects[colle.subject] if 0 <= colle.subject < len(roster.subjects) else "?"
    teacher = roster.teachers[colle.teacher] if 0 <= colle.teacher < len(roster.teachers) else "?"
    when = f"{WEEKDAYS[colle.day]} à {colle.start.hour} h ({format_relative(now, colle.start)})"

    bits = [subject, teacher]
    if colle.room is not None:
        bits.append(f"Salle {colle.room}")
    bits.append(when)
    return " | ".join(bits)


def _week_title(week: Week) -> str:
    return f"Semaine {week.index + 1} ({week.day}/{week.month})"


def print_student_card(roster: Roster, candidate: Candidate, now: datetime) -> None:
    """
    Show a student's name, group number and the weeks still ahead of them.
    """
    console.print(f"\n[bold]{escape(name_of(roster, candidate))}[/]")
    console.print(f"Groupe {candidate.group + roster.first_group}")

    weeks = upcoming_weeks(roster, candidate.group, now)
    if not weeks:
        console.print("Aucune colle à venir.")
        return

    for week in weeks:
        table = Table(title=_week_title(week), box=box.SIMPLE, title_justify="left")
        table.add_column("Colle")
        for colle in week.colles:
            style = STATE_STYLES.get(colle.state, "")
            table.add_row(escape(_colle_line(roster, colle, now)), style=style)
        console.print(table)

    if roster.credits:
        console.print("[dim]Données : " + escape(", ".join(roster.credits)) + "[/]")


def run_interactive(
    repository: RosterRepository,
    class_id: str,
    now_fn: Callable[[], datetime] = datetime.now,
) -> None:
    """
    Ask for names until a blank line is entered, showing the matching student each time.
    """
    roster = repository.load(class_id)
    index = repository.search_index(class_id)

    last: Optional[int] = None
    while True:
        query = _prompt("Nom (vide pour quitter) : ").strip()
        if not query:
            console.print("Au revoir.")
            return

        candidate = resolve(index, query)
        if candidate is None:
            console.print(NO_MATCH_MESSAGE)
            continue

        # Same student as the previous answer, the card is already on screen
        if candidate.entity_id == last:
            console.print("(même élève)")
            continue

        print_student_card(roster, candidate, now_fn())
        last = candidate.entity_id

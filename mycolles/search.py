"""
Student search.

Resolves a free-text name typed by the user to exactly one student of a roster.

Matching rules:
- names and input are compared without case, accents or surrounding spaces
- word order does not matter
- every input token must be the prefix of a distinct token of the name
- ambiguous input (several students with the same best score) finds nobody
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional, Sequence

from mycolles.model import Candidate, Roster, SearchIndexEntry


# ASCII-only \W: letters left over after accent removal (e.g. "ø")
# are separators too.
TOKEN_SPLIT_RE = re.compile(r"\W", re.ASCII)

_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")


def normalize_name(name: str) -> str:
    """
    Remove accents and leading/trailing spaces from a name and lowercase it.
    """
    name = name.strip().lower()
    # NFD splits "é" into "e" + U+0301, the mark is then dropped
    return _COMBINING_MARKS_RE.sub("", unicodedata.normalize("NFD", name))


def tokenize(text: str) -> list[str]:
    """
    Split text on every single non-word character.

    Empty tokens are kept: " jean" -> ["", "jean"], "a  b" -> ["a", "", "b"].
    """
    return TOKEN_SPLIT_RE.split(text)


def matching_score(input_tokens: Sequence[str], entry_tokens: Sequence[str]) -> int:
    """
    Compute a matching score between the tokens typed by the user
    and the tokens of one roster entry.

    `input_tokens` must be sorted by ascending length: tokens are consumed
    from the end, longest first. Each input token takes the shortest entry
    token it is a prefix of, so that longer entry tokens remain available
    for the shorter input tokens.

    Returns the summed length of the input tokens, or 0 as soon as one
    input token has no remaining entry token to match.
    """
    remaining_input = list(input_tokens)
    remaining_entry = list(entry_tokens)

    score = 0
    while remaining_input:
        input_token = remaining_input.pop()

        shortest_index = -1
        shortest_length = None
        for i, entry_token in enumerate(remaining_entry):
            if shortest_length is not None and len(entry_token) >= shortest_length:
                continue
            if entry_token.startswith(input_token):
                shortest_index = i
                shortest_length = len(entry_token)

        if shortest_index == -1:
            return 0

        score += len(input_token)
        del remaining_entry[shortest_index]

    return score


@dataclass(frozen=True)
class SearchIndex:
    """
    Pre-tokenized names of one roster, in group-then-student order.

    Built once per roster and never modified, so it can be shared freely.
    """

    roster_id: int
    entries: tuple[SearchIndexEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)


def build_index(roster: Roster) -> SearchIndex:
    """
    Tokenize every student name of the roster.
    """
    entries: list[SearchIndexEntry] = []
    for group_index, group in enumerate(roster.groups):
        for student_index, name in enumerate(group.students):
            tokens = tuple(tokenize(normalize_name(name)))
            entries.append(SearchIndexEntry(tokens=tokens, group=group_index, index=student_index))
    return SearchIndex(roster_id=roster.roster_id, entries=tuple(entries))


def resolve(index: SearchIndex, query: str) -> Optional[Candidate]:
    """
    Find the student matching the user input.

    Returns None when no entry matches or when several entries share
    the best score.
    """
    input_tokens = tokenize(normalize_name(query))

    # Shortest first, so the longest tokens are matched first. With the name
    # "AB AAAAAA" and the input "A AB", "AB" must take "AB" before "A" is
    # matched, otherwise "A" takes "AB" and "AB" finds nothing.
    input_tokens.sort(key=len)

    best_index = -1
    best_score = 0
    same_score_count = 0
    for i, entry in enumerate(index.entries):
        score = matching_score(input_tokens, entry.tokens)
        if score > best_score:
            best_index = i
            best_score = score
            same_score_count = 0
        elif score == best_score:
            same_score_count += 1

    if best_index == -1 or same_score_count > 0:
        return None

    best = index.entries[best_index]
    return Candidate(group=best.group, index=best.index, roster_id=index.roster_id)


def name_of(roster: Roster, candidate: Candidate) -> str:
    return roster.groups[candidate.group].students[candidate.index]

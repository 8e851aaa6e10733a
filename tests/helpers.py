from __future__ import annotations

from typing import Any


def roster_data(groups: list[list[str]] | None = None) -> dict[str, Any]:
    """
    Small roster dict in the on-disk JSON shape.

    Without arguments: two groups with colles over three weeks.
    With `groups`: one group per list of names, no weeks and no colles.
    """
    if groups is None:
        return {
            "weeks": ["2024-09-16", "2024-09-23", "2024-09-30"],
            "subjects": ["Mathématiques", "Physique", "Anglais"],
            "teachers": ["M. Lefèvre", "Mme Garnier", "Mr. Hughes"],
            "colles": [
                {"day": 0, "time": 16, "subject": 0, "teacher": 0, "room": "B12"},
                {"day": 2, "time": 14, "subject": 1, "teacher": 1, "room": "Labo 3"},
                {"day": 3, "time": 17, "subject": 2, "teacher": 2},
            ],
            "credits": ["Bureau des élèves"],
            "firstGroup": 1,
            "groups": [
                {"students": ["Émilie Durand", "Jean-Baptiste Moreau"], "weeks": [[0], [1, 2], []]},
                {"students": ["Jean Dupont"], "weeks": [[1], [0], [2]]},
            ],
        }

    return {
        "weeks": [],
        "subjects": [],
        "teachers": [],
        "colles": [],
        "groups": [{"students": names, "weeks": []} for names in groups],
    }

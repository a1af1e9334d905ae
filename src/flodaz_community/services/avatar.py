"""Avatar initials derived from display names."""
from __future__ import annotations

PLACEHOLDER_INITIAL = "U"
MAX_INITIALS = 2


def initials(full_name: str | None) -> str:
    """Return up to two uppercase initials for ``full_name``.

    ``"Jane Doe"`` -> ``"JD"``, ``"a b c"`` -> ``"AB"``; a missing or blank
    name yields the placeholder ``"U"``.
    """
    if not full_name or not full_name.strip():
        return PLACEHOLDER_INITIAL
    letters = "".join(token[0] for token in full_name.split())
    return letters.upper()[:MAX_INITIALS]

from __future__ import annotations

LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
    """Build an ``ilike`` pattern that matches ``search`` literally anywhere in a column."""
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"

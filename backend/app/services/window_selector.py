"""Named trailing windows ending on an explicit reference date."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Tuple

WINDOW_DAYS: Dict[str, int] = {
    "week": 7,
    "month": 30,
    "year": 365,
}


def resolve_window(range_name: str, as_of: date) -> Tuple[date, date]:
    """Return the inclusive ``(as_of - N days, as_of)`` interval for a named range."""
    try:
        days = WINDOW_DAYS[range_name]
    except KeyError:
        expected = ", ".join(WINDOW_DAYS)
        raise ValueError(f"Unknown range {range_name!r}; expected one of: {expected}") from None
    return as_of - timedelta(days=days), as_of

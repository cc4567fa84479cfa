"""Monday-anchored week boundary resolution."""
from __future__ import annotations

from datetime import date, timedelta


def week_start(day: date) -> date:
    """
    Return the Monday that starts the week containing ``day``.

    Sunday is weekday 7, so it maps back to the preceding Monday (six days earlier),
    never forward to the next one.
    """
    return day - timedelta(days=day.isoweekday() - 1)

"""
GSL Core Time — Stay Day Helpers
==================================
A stay is keyed by a calendar day, not an instant.
External text form is YYYY-MM-DD, taken in UTC.
All functions take explicit arguments — no hidden clock access.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

STAY_DAY_FORMAT = "%Y-%m-%d"


def stay_day_of(moment: date | datetime) -> date:
    """UTC calendar day of an instant. Plain dates pass through."""
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            raise ValueError("stay_day_of requires timezone-aware datetime.")
        return moment.astimezone(timezone.utc).date()
    return moment


def format_stay_day(moment: date | datetime) -> str:
    return stay_day_of(moment).strftime(STAY_DAY_FORMAT)


def parse_stay_day(value: str) -> date:
    """
    Parse YYYY-MM-DD strictly.

    Raises ValueError on any other shape (no times, no offsets,
    no two-digit years).
    """
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Stay day '{value}' must be formatted YYYY-MM-DD.")
    try:
        return datetime.strptime(value, STAY_DAY_FORMAT).date()
    except ValueError as exc:
        raise ValueError(
            f"Stay day '{value}' must be formatted YYYY-MM-DD."
        ) from exc

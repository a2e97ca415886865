"""
GSL Core Time — Explicit Clock Protocol
=========================================
Decide functions never read the wall clock.
Time enters as `now` on the command, taken from an injected Clock
by the application service. Stores use the clock for recorded_at.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))
        clock.advance(hours=2)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(**delta)


_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Override the default clock (testing only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    return _default_clock.now_utc()

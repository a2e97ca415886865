"""
GSL Core Time — Public API
============================
Explicit clock protocol and stay-day helpers.
Doctrine: NO datetime.now() in decide functions.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
)
from core.time.temporal import (
    STAY_DAY_FORMAT,
    format_stay_day,
    parse_stay_day,
    stay_day_of,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "STAY_DAY_FORMAT",
    "format_stay_day",
    "parse_stay_day",
    "stay_day_of",
]

"""
GSL Command Layer — Decide / Append Governance
=================================================
Every state change begins as a command evaluated by a pure decision.
Every handled command produces exactly one outcome.
REJECTED commands leave the stream untouched.

Command → Decision → Events → Append, with optimistic concurrency.
"""

from core.commands.errors import (
    CommandHandlingError,
    ConcurrencyRetriesExhausted,
    DecisionRejected,
)
from core.commands.handler import (
    DEFAULT_MAX_ATTEMPTS,
    CommandHandler,
    HandleResult,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandResult,
    CommandStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)
from core.commands.validator import (
    CommandValidationError,
    assert_aware_datetime,
    assert_not_empty_string,
    assert_positive_amount,
    assert_stay_day,
)

__all__ = [
    # ── Errors ────────────────────────────────────────────────
    "CommandHandlingError",
    "ConcurrencyRetriesExhausted",
    "DecisionRejected",
    # ── Handler ───────────────────────────────────────────────
    "DEFAULT_MAX_ATTEMPTS",
    "CommandHandler",
    "HandleResult",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandResult",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Validator ─────────────────────────────────────────────
    "CommandValidationError",
    "assert_aware_datetime",
    "assert_not_empty_string",
    "assert_positive_amount",
    "assert_stay_day",
]

"""
GSL Command Layer — Rejection Model
======================================
Structured reasons for commands a decide function refuses.

This is NOT an event. A rejection leaves the stream untouched;
it travels back to the caller inside the command outcome.

Every rejection must be:
- Deterministic (same state + command → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name = the decision that refused)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'ACCOUNT_NOT_FOUND').
        message:     Human-readable explanation.
        policy_name: Name of the decision that refused the command.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


class ReasonCode:
    """
    Known rejection codes. Extensible by engines.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Account lifecycle ─────────────────────────────────────
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_CHECKED_OUT = "ACCOUNT_CHECKED_OUT"

    # ── Pre-conditions outside the stream ─────────────────────
    GUEST_STAY_NOT_FOUND = "GUEST_STAY_NOT_FOUND"

    # ── Input ─────────────────────────────────────────────────
    INVALID_COMMAND_STRUCTURE = "INVALID_COMMAND_STRUCTURE"
    EMPTY_IDENTIFIER = "EMPTY_IDENTIFIER"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_STAY_DAY = "INVALID_STAY_DAY"

    # ── Concurrency ───────────────────────────────────────────
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"

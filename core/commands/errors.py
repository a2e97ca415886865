"""
GSL Command Layer — Errors
============================
Exceptions that cross the command handler boundary.

DecisionRejected            — a business rule refused the command.
ConcurrencyRetriesExhausted — the stream kept moving; gave up.

Input errors are CommandValidationError (core.commands.validator).
Storage errors are EventStoreError and propagate untouched.
"""

from __future__ import annotations

from core.commands.rejection import RejectionReason


class CommandHandlingError(Exception):
    """Base error for command handling."""
    pass


class DecisionRejected(CommandHandlingError):
    """Raised by a decide function. Never retried."""

    def __init__(self, reason: RejectionReason):
        if not isinstance(reason, RejectionReason):
            raise TypeError(
                f"reason must be RejectionReason, got {type(reason).__name__}."
            )
        self.reason = reason
        super().__init__(f"[{reason.code}] {reason.message}")


class ConcurrencyRetriesExhausted(CommandHandlingError):
    """Every attempt lost the optimistic concurrency race."""

    def __init__(self, stream_id: str, attempts: int):
        self.stream_id = stream_id
        self.attempts = attempts
        super().__init__(
            f"Stream '{stream_id}' changed concurrently on all "
            f"{attempts} attempt(s). Giving up."
        )

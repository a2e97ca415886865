"""
GSL Command Layer — Command Outcome Contract
===============================================
Every handled command produces exactly one Outcome.

ACCEPTED → the decision produced events and they were appended.
REJECTED → a business rule refused the command, reason is mandatory.

Rules:
- Exactly one outcome per command
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason)
- ACCEPTED must NOT contain reason
- occurred_at is mandatory

A decision may record a failure as an event (an ACCEPTED outcome).
Engines expose such failures on their own CommandResult subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


# ══════════════════════════════════════════════════════════════
# COMMAND STATUS
# ══════════════════════════════════════════════════════════════

class CommandStatus(Enum):
    """Binary command decision. No middle ground."""
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# ══════════════════════════════════════════════════════════════
# COMMAND OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CommandOutcome:
    """
    Deterministic result of command evaluation.

    Invariants:
        - REJECTED + reason is None → ValueError
        - ACCEPTED + reason is not None → ValueError
    """

    status: CommandStatus
    reason: Optional[RejectionReason]
    occurred_at: datetime

    def __post_init__(self):
        if not isinstance(self.status, CommandStatus):
            raise ValueError(
                f"status must be CommandStatus, got {type(self.status).__name__}."
            )

        if self.status == CommandStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

        if self.status == CommandStatus.ACCEPTED and self.reason is not None:
            raise ValueError(
                "ACCEPTED outcome must NOT include a RejectionReason."
            )

        if not isinstance(self.occurred_at, datetime):
            raise ValueError("occurred_at must be a datetime.")

    @classmethod
    def accepted(cls, occurred_at: datetime) -> "CommandOutcome":
        return cls(status=CommandStatus.ACCEPTED, reason=None, occurred_at=occurred_at)

    @classmethod
    def rejected(
        cls, reason: RejectionReason, occurred_at: datetime
    ) -> "CommandOutcome":
        return cls(status=CommandStatus.REJECTED, reason=reason, occurred_at=occurred_at)

    @property
    def is_accepted(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == CommandStatus.REJECTED


# ══════════════════════════════════════════════════════════════
# COMMAND RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CommandResult:
    """
    What an application service hands back to its caller.

    stream_version is the version after the append (unchanged for an
    idempotent no-op). Rejected commands carry no version.
    """

    outcome: CommandOutcome
    stream_id: str
    new_events: tuple[Any, ...] = field(default_factory=tuple)
    stream_version: int = 0

    @property
    def is_accepted(self) -> bool:
        return self.outcome.is_accepted

    @property
    def is_rejected(self) -> bool:
        return self.outcome.is_rejected

    @property
    def reason(self) -> Optional[RejectionReason]:
        return self.outcome.reason

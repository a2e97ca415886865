"""
GSL Command Layer — Contract Tests
====================================
Tests for the pieces a decision hands back to its caller.

Scenarios:
1. RejectionReason requires code, message and policy name
2. Outcome invariants (REJECTED needs a reason, ACCEPTED refuses one)
3. DecisionRejected only carries a RejectionReason
4. CommandResult mirrors its outcome
5. Input validators raise structured errors
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.commands.errors import ConcurrencyRetriesExhausted, DecisionRejected
from core.commands.outcomes import CommandOutcome, CommandResult, CommandStatus
from core.commands.rejection import ReasonCode, RejectionReason
from core.commands.validator import (
    CommandValidationError,
    assert_aware_datetime,
    assert_not_empty_string,
    assert_positive_amount,
    assert_stay_day,
)
from engines.guest_stay_accounts.events import GuestCheckedOut

NOW = datetime(2026, 2, 26, 9, 0, 0, tzinfo=timezone.utc)
ACCOUNT = "guest_stay_account-guest-1:room-101:2026-02-26"


def _reason() -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.ACCOUNT_NOT_FOUND,
        message="Guest account doesn't exist!",
        policy_name="record_charge",
    )


# ══════════════════════════════════════════════════════════════
# REJECTION REASON
# ══════════════════════════════════════════════════════════════

class TestRejectionReason:
    def test_to_dict(self):
        assert _reason().to_dict() == {
            "code": "ACCOUNT_NOT_FOUND",
            "message": "Guest account doesn't exist!",
            "policy_name": "record_charge",
        }

    @pytest.mark.parametrize("field", ["code", "message", "policy_name"])
    def test_empty_field_refused(self, field):
        values = {"code": "X", "message": "m", "policy_name": "p"}
        values[field] = ""
        with pytest.raises(ValueError):
            RejectionReason(**values)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            _reason().code = "OTHER"


# ══════════════════════════════════════════════════════════════
# COMMAND OUTCOME
# ══════════════════════════════════════════════════════════════

class TestCommandOutcome:
    def test_accepted(self):
        outcome = CommandOutcome.accepted(NOW)
        assert outcome.status == CommandStatus.ACCEPTED
        assert outcome.is_accepted
        assert outcome.reason is None

    def test_rejected(self):
        outcome = CommandOutcome.rejected(_reason(), NOW)
        assert outcome.is_rejected
        assert outcome.reason.code == ReasonCode.ACCOUNT_NOT_FOUND

    def test_rejected_without_reason_refused(self):
        with pytest.raises(ValueError):
            CommandOutcome(status=CommandStatus.REJECTED, reason=None, occurred_at=NOW)

    def test_accepted_with_reason_refused(self):
        with pytest.raises(ValueError):
            CommandOutcome(
                status=CommandStatus.ACCEPTED, reason=_reason(), occurred_at=NOW
            )

    def test_status_must_be_enum(self):
        with pytest.raises(ValueError):
            CommandOutcome(status="ACCEPTED", reason=None, occurred_at=NOW)

    def test_occurred_at_required(self):
        with pytest.raises(ValueError):
            CommandOutcome(status=CommandStatus.ACCEPTED, reason=None, occurred_at=None)


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class TestCommandErrors:
    def test_decision_rejected_carries_reason(self):
        error = DecisionRejected(_reason())
        assert error.reason == _reason()
        assert "ACCOUNT_NOT_FOUND" in str(error)

    def test_decision_rejected_needs_rejection_reason(self):
        with pytest.raises(TypeError):
            DecisionRejected("nope")

    def test_retries_exhausted_message(self):
        error = ConcurrencyRetriesExhausted(ACCOUNT, 3)
        assert error.attempts == 3
        assert error.stream_id == ACCOUNT
        assert "3 attempt(s)" in str(error)


# ══════════════════════════════════════════════════════════════
# COMMAND RESULT
# ══════════════════════════════════════════════════════════════

class TestCommandResult:
    def test_accepted_result_exposes_outcome(self):
        result = CommandResult(
            outcome=CommandOutcome.accepted(NOW),
            stream_id=ACCOUNT,
            new_events=(
                GuestCheckedOut(guest_stay_account_id=ACCOUNT, checked_out_at=NOW),
            ),
            stream_version=2,
        )
        assert result.is_accepted
        assert result.reason is None
        assert result.stream_version == 2

    def test_rejected_result_defaults(self):
        result = CommandResult(
            outcome=CommandOutcome.rejected(_reason(), NOW), stream_id=ACCOUNT
        )
        assert result.is_rejected
        assert result.reason.policy_name == "record_charge"
        assert result.new_events == ()
        assert result.stream_version == 0


# ══════════════════════════════════════════════════════════════
# VALIDATORS
# ══════════════════════════════════════════════════════════════

class TestValidators:
    @pytest.mark.parametrize("value", ["", "   ", None, 7])
    def test_empty_identifier(self, value):
        with pytest.raises(CommandValidationError) as exc:
            assert_not_empty_string(value, "guest_id")
        assert exc.value.code == ReasonCode.EMPTY_IDENTIFIER

    @pytest.mark.parametrize("value, expected", [
        (50, Decimal("50")),
        ("25.50", Decimal("25.50")),
        (0.1, Decimal("0.1")),
        (Decimal("3"), Decimal("3")),
    ])
    def test_positive_amounts(self, value, expected):
        assert assert_positive_amount(value) == expected

    @pytest.mark.parametrize("value", [
        0, -1, "-0.01", "abc", "NaN", "Infinity", True, None, [],
    ])
    def test_invalid_amounts(self, value):
        with pytest.raises(CommandValidationError) as exc:
            assert_positive_amount(value)
        assert exc.value.code == ReasonCode.INVALID_AMOUNT

    def test_naive_datetime_refused(self):
        with pytest.raises(CommandValidationError) as exc:
            assert_aware_datetime(datetime(2026, 2, 26), "now")
        assert exc.value.code == ReasonCode.INVALID_COMMAND_STRUCTURE

    def test_stay_day_from_text_and_date(self):
        assert assert_stay_day("2026-02-26") == date(2026, 2, 26)
        assert assert_stay_day(date(2026, 2, 26)) == date(2026, 2, 26)

    @pytest.mark.parametrize("value", ["2026-02-31", "yesterday", NOW])
    def test_invalid_stay_day(self, value):
        with pytest.raises(CommandValidationError) as exc:
            assert_stay_day(value)
        assert exc.value.code == ReasonCode.INVALID_STAY_DAY

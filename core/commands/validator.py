"""
GSL Command Layer — Input Validators
=======================================
Caller-input checks that run BEFORE a command reaches a decide function.

These validators do NOT:
- Read the event store
- Evaluate business rules
- Know about account state

If invalid → CommandValidationError (structured, caller fault).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from core.commands.rejection import ReasonCode
from core.time.temporal import parse_stay_day


class CommandValidationError(Exception):
    """Structured validation failure for commands."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


def assert_not_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CommandValidationError(
            ReasonCode.EMPTY_IDENTIFIER,
            f"{field_name} must be a non-empty string.",
        )
    return value


def assert_identifier_segment(value: Any, field_name: str, separator: str) -> str:
    """Non-empty and free of the separator used to compose stream ids."""
    assert_not_empty_string(value, field_name)
    if separator in value:
        raise CommandValidationError(
            ReasonCode.INVALID_IDENTIFIER,
            f"{field_name} must not contain '{separator}'.",
        )
    return value


def assert_positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    """
    Coerce to Decimal and require a positive finite number.

    Booleans are rejected even though bool is an int subclass.
    Floats go through str() so 0.1 stays 0.1.
    """
    if isinstance(value, bool) or value is None:
        raise CommandValidationError(
            ReasonCode.INVALID_AMOUNT,
            f"{field_name} must be a positive number.",
        )
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise CommandValidationError(
                ReasonCode.INVALID_AMOUNT,
                f"{field_name} must be a positive number, got '{value}'.",
            ) from exc

    if not amount.is_finite() or amount <= 0:
        raise CommandValidationError(
            ReasonCode.INVALID_AMOUNT,
            f"{field_name} must be a positive finite number, got '{value}'.",
        )
    return amount


def assert_aware_datetime(value: Any, field_name: str) -> datetime:
    if not isinstance(value, datetime) or value.tzinfo is None:
        raise CommandValidationError(
            ReasonCode.INVALID_COMMAND_STRUCTURE,
            f"{field_name} must be a timezone-aware datetime.",
        )
    return value


def assert_stay_day(value: Any, field_name: str = "check_in_date") -> date:
    """Accept a date or its YYYY-MM-DD text form."""
    if isinstance(value, datetime):
        raise CommandValidationError(
            ReasonCode.INVALID_STAY_DAY,
            f"{field_name} must be a calendar day, not an instant.",
        )
    if isinstance(value, date):
        return value
    text = assert_not_empty_string(value, field_name)
    try:
        return parse_stay_day(text)
    except ValueError as exc:
        raise CommandValidationError(ReasonCode.INVALID_STAY_DAY, str(exc)) from exc

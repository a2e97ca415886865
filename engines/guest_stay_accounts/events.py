"""
GSL Guest Stay Accounts Engine — Event Types
==============================================
Engine: guest_stay_accounts
Scope:  One account per guest, room and stay day. Opened at check-in,
        carries a running balance of charges and payments, closed at
        check-out once the balance is settled.

Every event carries guest_stay_account_id (the stream id).
Payloads are JSON-safe: Decimal → str, datetime → ISO-8601.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from core.event_store.registry import EventTypeRegistry

GUEST_CHECKED_IN_V1      = "guest_stay.account.checked_in.v1"
CHARGE_RECORDED_V1       = "guest_stay.account.charge_recorded.v1"
PAYMENT_RECORDED_V1      = "guest_stay.account.payment_recorded.v1"
GUEST_CHECKED_OUT_V1     = "guest_stay.account.checked_out.v1"
GUEST_CHECKOUT_FAILED_V1 = "guest_stay.account.checkout_failed.v1"

GUEST_STAY_EVENT_TYPES = (
    GUEST_CHECKED_IN_V1, CHARGE_RECORDED_V1, PAYMENT_RECORDED_V1,
    GUEST_CHECKED_OUT_V1, GUEST_CHECKOUT_FAILED_V1,
)

BALANCE_NOT_SETTLED = "Balance not settled"


def _dt_out(value: datetime) -> str:
    return value.isoformat()


def _dt_in(value: str) -> datetime:
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class GuestCheckedIn:
    event_type: ClassVar[str] = GUEST_CHECKED_IN_V1

    guest_stay_account_id: str
    guest_id:              str
    room_id:               str
    checked_in_at:         datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "guest_id":              self.guest_id,
            "room_id":               self.room_id,
            "checked_in_at":         _dt_out(self.checked_in_at),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GuestCheckedIn":
        return cls(
            guest_stay_account_id=payload["guest_stay_account_id"],
            guest_id=payload["guest_id"],
            room_id=payload["room_id"],
            checked_in_at=_dt_in(payload["checked_in_at"]),
        )


@dataclass(frozen=True)
class ChargeRecorded:
    event_type: ClassVar[str] = CHARGE_RECORDED_V1

    guest_stay_account_id: str
    charge_id:             str
    amount:                Decimal
    recorded_at:           datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "charge_id":             self.charge_id,
            "amount":                str(self.amount),
            "recorded_at":           _dt_out(self.recorded_at),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ChargeRecorded":
        return cls(
            guest_stay_account_id=payload["guest_stay_account_id"],
            charge_id=payload["charge_id"],
            amount=Decimal(payload["amount"]),
            recorded_at=_dt_in(payload["recorded_at"]),
        )


@dataclass(frozen=True)
class PaymentRecorded:
    event_type: ClassVar[str] = PAYMENT_RECORDED_V1

    guest_stay_account_id: str
    payment_id:            str
    amount:                Decimal
    recorded_at:           datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "payment_id":            self.payment_id,
            "amount":                str(self.amount),
            "recorded_at":           _dt_out(self.recorded_at),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PaymentRecorded":
        return cls(
            guest_stay_account_id=payload["guest_stay_account_id"],
            payment_id=payload["payment_id"],
            amount=Decimal(payload["amount"]),
            recorded_at=_dt_in(payload["recorded_at"]),
        )


@dataclass(frozen=True)
class GuestCheckedOut:
    event_type: ClassVar[str] = GUEST_CHECKED_OUT_V1

    guest_stay_account_id: str
    checked_out_at:        datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "checked_out_at":        _dt_out(self.checked_out_at),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GuestCheckedOut":
        return cls(
            guest_stay_account_id=payload["guest_stay_account_id"],
            checked_out_at=_dt_in(payload["checked_out_at"]),
        )


@dataclass(frozen=True)
class GuestCheckoutFailed:
    """Recorded attempt to leave with an open balance. Changes no state."""

    event_type: ClassVar[str] = GUEST_CHECKOUT_FAILED_V1

    guest_stay_account_id: str
    reason:                str
    failed_at:             datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "guest_stay_account_id": self.guest_stay_account_id,
            "reason":                self.reason,
            "failed_at":             _dt_out(self.failed_at),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GuestCheckoutFailed":
        return cls(
            guest_stay_account_id=payload["guest_stay_account_id"],
            reason=payload["reason"],
            failed_at=_dt_in(payload["failed_at"]),
        )


GUEST_STAY_EVENT_CLASSES = (
    GuestCheckedIn, ChargeRecorded, PaymentRecorded,
    GuestCheckedOut, GuestCheckoutFailed,
)


def build_event_type_registry() -> EventTypeRegistry:
    return EventTypeRegistry(GUEST_STAY_EVENT_CLASSES)

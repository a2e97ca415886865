"""
GSL Guest Stay Accounts Engine — Account State
=================================================
Write-side state, derived by folding the account stream. Never stored.

States (closed set):
    NotExisting → Opened → CheckedOut

Balance is signed: negative = the guest owes, positive = credit.
Charges subtract, payments add. Check-out needs exactly zero.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from core.time.temporal import format_stay_day
from engines.guest_stay_accounts.events import (
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)

ACCOUNT_ID_PREFIX = "guest_stay_account"
ACCOUNT_ID_SEPARATOR = ":"


@dataclass(frozen=True)
class NotExisting:
    pass


@dataclass(frozen=True)
class Opened:
    guest_stay_account_id: str
    guest_id:              str
    room_id:               str
    checked_in_at:         datetime
    balance:               Decimal = Decimal("0")


@dataclass(frozen=True)
class CheckedOut:
    guest_stay_account_id: str
    guest_id:              str
    room_id:               str
    checked_in_at:         datetime
    checked_out_at:        datetime
    balance:               Decimal = Decimal("0")


GuestStayAccount = Union[NotExisting, Opened, CheckedOut]

GuestStayAccountEvent = Union[
    GuestCheckedIn, ChargeRecorded, PaymentRecorded,
    GuestCheckedOut, GuestCheckoutFailed,
]


def initial_state() -> GuestStayAccount:
    return NotExisting()


def to_guest_stay_account_id(
    guest_id: str, room_id: str, stay_day: date | datetime
) -> str:
    """
    Same guest, room and UTC stay day → same account.
    Neither id may contain ACCOUNT_ID_SEPARATOR.
    """
    for value in (guest_id, room_id):
        if ACCOUNT_ID_SEPARATOR in value:
            raise ValueError(
                f"'{value}' contains the account id separator "
                f"'{ACCOUNT_ID_SEPARATOR}'."
            )
    return ACCOUNT_ID_SEPARATOR.join(
        (f"{ACCOUNT_ID_PREFIX}-{guest_id}", room_id, format_stay_day(stay_day))
    )


def evolve(state: GuestStayAccount, event: GuestStayAccountEvent) -> GuestStayAccount:
    """
    Pure fold step. Events that do not apply to the current state
    (a charge before check-in, a second check-in) leave it unchanged.
    """
    if isinstance(event, GuestCheckedIn):
        if not isinstance(state, NotExisting):
            return state
        return Opened(
            guest_stay_account_id=event.guest_stay_account_id,
            guest_id=event.guest_id,
            room_id=event.room_id,
            checked_in_at=event.checked_in_at,
        )

    if isinstance(event, ChargeRecorded):
        if not isinstance(state, Opened):
            return state
        return replace(state, balance=state.balance - event.amount)

    if isinstance(event, PaymentRecorded):
        if not isinstance(state, Opened):
            return state
        return replace(state, balance=state.balance + event.amount)

    if isinstance(event, GuestCheckedOut):
        if not isinstance(state, Opened):
            return state
        return CheckedOut(
            guest_stay_account_id=state.guest_stay_account_id,
            guest_id=state.guest_id,
            room_id=state.room_id,
            checked_in_at=state.checked_in_at,
            checked_out_at=event.checked_out_at,
            balance=state.balance,
        )

    if isinstance(event, GuestCheckoutFailed):
        return state

    raise TypeError(f"Unknown guest stay event: {type(event).__name__}")

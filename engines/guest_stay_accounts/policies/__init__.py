"""
GSL Guest Stay Accounts Engine — Decisions
=============================================
Pure decide functions: (command, state) → tuple of new events.

A refused command raises DecisionRejected carrying a RejectionReason.
An empty tuple means the command is already satisfied (idempotent).
No function here reads a clock, a store, or any global.
"""
from __future__ import annotations

from core.commands.errors import DecisionRejected
from core.commands.rejection import ReasonCode, RejectionReason
from engines.guest_stay_accounts.account import (
    CheckedOut,
    GuestStayAccount,
    NotExisting,
    Opened,
    to_guest_stay_account_id,
)
from engines.guest_stay_accounts.commands import (
    CheckIn,
    CheckOut,
    RecordCharge,
    RecordPayment,
)
from engines.guest_stay_accounts.events import (
    BALANCE_NOT_SETTLED,
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)

ACCOUNT_NOT_FOUND_MESSAGE = "Guest account doesn't exist!"
ACCOUNT_CHECKED_OUT_MESSAGE = "Guest account is already checked out"


def _not_found(policy_name: str) -> DecisionRejected:
    return DecisionRejected(RejectionReason(
        code=ReasonCode.ACCOUNT_NOT_FOUND,
        message=ACCOUNT_NOT_FOUND_MESSAGE,
        policy_name=policy_name,
    ))


def _checked_out(policy_name: str) -> DecisionRejected:
    return DecisionRejected(RejectionReason(
        code=ReasonCode.ACCOUNT_CHECKED_OUT,
        message=ACCOUNT_CHECKED_OUT_MESSAGE,
        policy_name=policy_name,
    ))


def _assert_opened(state: GuestStayAccount, policy_name: str) -> Opened:
    if isinstance(state, NotExisting):
        raise _not_found(policy_name)
    if isinstance(state, CheckedOut):
        raise _checked_out(policy_name)
    return state


# ══════════════════════════════════════════════════════════════
# CHECK IN
# ══════════════════════════════════════════════════════════════

def check_in(command: CheckIn, state: GuestStayAccount) -> tuple:
    if isinstance(state, Opened):
        return ()
    if isinstance(state, CheckedOut):
        raise _checked_out("check_in")

    return (
        GuestCheckedIn(
            guest_stay_account_id=to_guest_stay_account_id(
                command.guest_id, command.room_id, command.now
            ),
            guest_id=command.guest_id,
            room_id=command.room_id,
            checked_in_at=command.now,
        ),
    )


# ══════════════════════════════════════════════════════════════
# CHARGES & PAYMENTS
# ══════════════════════════════════════════════════════════════

def record_charge(command: RecordCharge, state: GuestStayAccount) -> tuple:
    _assert_opened(state, "record_charge")
    return (
        ChargeRecorded(
            guest_stay_account_id=command.guest_stay_account_id,
            charge_id=command.charge_id,
            amount=command.amount,
            recorded_at=command.now,
        ),
    )


def record_payment(command: RecordPayment, state: GuestStayAccount) -> tuple:
    _assert_opened(state, "record_payment")
    return (
        PaymentRecorded(
            guest_stay_account_id=command.guest_stay_account_id,
            payment_id=command.payment_id,
            amount=command.amount,
            recorded_at=command.now,
        ),
    )


# ══════════════════════════════════════════════════════════════
# CHECK OUT
# ══════════════════════════════════════════════════════════════

def check_out(command: CheckOut, state: GuestStayAccount) -> tuple:
    """
    Settled balance → GuestCheckedOut.
    Open balance → GuestCheckoutFailed (recorded, not a rejection).
    """
    if isinstance(state, NotExisting):
        raise _not_found("check_out")
    if isinstance(state, CheckedOut):
        return ()

    if state.balance != 0:
        return (
            GuestCheckoutFailed(
                guest_stay_account_id=command.guest_stay_account_id,
                reason=BALANCE_NOT_SETTLED,
                failed_at=command.now,
            ),
        )

    return (
        GuestCheckedOut(
            guest_stay_account_id=command.guest_stay_account_id,
            checked_out_at=command.now,
        ),
    )

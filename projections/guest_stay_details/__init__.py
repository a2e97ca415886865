"""
GSL Projections — Guest Stay Details
=======================================
Read model for one guest stay account, kept in the
"GuestStayDetails" collection under the account id.

Built by folding the same events as the write side. Holds no rules:
a checkout that failed on an open balance leaves the document as is
(only its version moves).

Document shape:
    {
        "id", "guest_id", "room_id",
        "status":             "CheckedIn" | "CheckedOut",
        "balance":            "<decimal>",
        "transactions_count": int,
        "transactions":       [{"id", "amount"}],
        "checked_in_at":      "<iso-8601>",
        "checked_out_at":     "<iso-8601>" | None,
    }
The stream version lives on the stored document, not in the data.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from core.projections.single_stream import SingleStreamProjection
from core.read_store.contracts import StoredDocument
from engines.guest_stay_accounts.events import (
    GUEST_STAY_EVENT_TYPES,
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
)

GUEST_STAY_DETAILS_COLLECTION = "GuestStayDetails"

STATUS_NOT_EXISTING = "NotExisting"
STATUS_CHECKED_IN = "CheckedIn"
STATUS_CHECKED_OUT = "CheckedOut"


@dataclass(frozen=True)
class DetailsNotExisting:
    status: str = STATUS_NOT_EXISTING


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Decimal


@dataclass(frozen=True)
class GuestStayDetails:
    id:                 str
    guest_id:           str
    room_id:            str
    status:             str
    balance:            Decimal
    transactions_count: int
    transactions:       tuple[Transaction, ...]
    checked_in_at:      datetime
    checked_out_at:     Optional[datetime] = None


GuestStayDetailsState = Union[DetailsNotExisting, GuestStayDetails]


def initial_state() -> GuestStayDetailsState:
    return DetailsNotExisting()


def _record(state: GuestStayDetails, transaction_id: str, signed: Decimal, amount: Decimal):
    return replace(
        state,
        balance=state.balance + signed,
        transactions_count=state.transactions_count + 1,
        transactions=state.transactions + (Transaction(transaction_id, amount),),
    )


def evolve(state: GuestStayDetailsState, event: Any) -> GuestStayDetailsState:
    checked_in = (
        isinstance(state, GuestStayDetails) and state.status == STATUS_CHECKED_IN
    )

    if isinstance(event, GuestCheckedIn):
        if not isinstance(state, DetailsNotExisting):
            return state
        return GuestStayDetails(
            id=event.guest_stay_account_id,
            guest_id=event.guest_id,
            room_id=event.room_id,
            status=STATUS_CHECKED_IN,
            balance=Decimal("0"),
            transactions_count=0,
            transactions=(),
            checked_in_at=event.checked_in_at,
        )

    if isinstance(event, ChargeRecorded):
        if not checked_in:
            return state
        return _record(state, event.charge_id, -event.amount, event.amount)

    if isinstance(event, PaymentRecorded):
        if not checked_in:
            return state
        return _record(state, event.payment_id, event.amount, event.amount)

    if isinstance(event, GuestCheckedOut):
        if not checked_in:
            return state
        return replace(
            state,
            status=STATUS_CHECKED_OUT,
            checked_out_at=event.checked_out_at,
        )

    if isinstance(event, GuestCheckoutFailed):
        return state

    return state


# ══════════════════════════════════════════════════════════════
# DOCUMENT MAPPING
# ══════════════════════════════════════════════════════════════

def to_document(state: GuestStayDetailsState) -> Optional[dict]:
    if not isinstance(state, GuestStayDetails):
        return None
    return {
        "id":                 state.id,
        "guest_id":           state.guest_id,
        "room_id":            state.room_id,
        "status":             state.status,
        "balance":            str(state.balance),
        "transactions_count": state.transactions_count,
        "transactions": [
            {"id": t.id, "amount": str(t.amount)} for t in state.transactions
        ],
        "checked_in_at":      state.checked_in_at.isoformat(),
        "checked_out_at": (
            state.checked_out_at.isoformat() if state.checked_out_at else None
        ),
    }


def from_document(data: dict) -> GuestStayDetailsState:
    checked_out_at = data.get("checked_out_at")
    return GuestStayDetails(
        id=data["id"],
        guest_id=data["guest_id"],
        room_id=data["room_id"],
        status=data["status"],
        balance=Decimal(data["balance"]),
        transactions_count=int(data["transactions_count"]),
        transactions=tuple(
            Transaction(t["id"], Decimal(t["amount"])) for t in data["transactions"]
        ),
        checked_in_at=datetime.fromisoformat(data["checked_in_at"]),
        checked_out_at=(
            datetime.fromisoformat(checked_out_at) if checked_out_at else None
        ),
    )


guest_stay_details_projection = SingleStreamProjection(
    projection_name="guest_stay_details",
    collection_name=GUEST_STAY_DETAILS_COLLECTION,
    evolve=evolve,
    initial_state=initial_state,
    can_handle=GUEST_STAY_EVENT_TYPES,
    to_document=to_document,
    from_document=from_document,
)


def get_guest_stay_details(
    document_store: Any, guest_stay_account_id: str
) -> Optional[StoredDocument]:
    """Read the projected document only. Never replays the stream."""
    return document_store.find_by_id(
        GUEST_STAY_DETAILS_COLLECTION, guest_stay_account_id
    )

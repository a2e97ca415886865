"""
GSL Guest Stay Accounts — Application Service Tests
=====================================================
Tests: command entry points end to end over the in-memory stores,
       outcomes, verifier, id generation, active-stay query.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.commands.handler import CommandHandler
from core.commands.errors import ConcurrencyRetriesExhausted
from core.commands.outcomes import CommandStatus
from core.commands.rejection import ReasonCode
from core.commands.validator import CommandValidationError
from core.event_store.errors import ExpectedVersionConflictError
from core.event_store.memory import InMemoryEventStore
from core.read_store.memory import InMemoryDocumentStore
from core.time.clock import FixedClock
from engines.guest_stay_accounts.account import evolve, initial_state
from engines.guest_stay_accounts.events import (
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
)
from engines.guest_stay_accounts.services import (
    CheckOutResult,
    GuestStayAccountService,
    generate_prefixed_id,
)
from projections.guest_stay_details import (
    GUEST_STAY_DETAILS_COLLECTION,
    STATUS_CHECKED_OUT,
    guest_stay_details_projection,
)

NOW     = datetime(2026, 2, 26, 9, 0, 0, tzinfo=timezone.utc)
TODAY   = "2026-02-26"
GUEST   = "guest-1"
ROOM    = "room-101"
ACCOUNT = "guest_stay_account-guest-1:room-101:2026-02-26"


class SequentialIds:
    def __init__(self):
        self.issued = []

    def __call__(self, prefix: str) -> str:
        value = f"{prefix}-{len(self.issued) + 1}"
        self.issued.append(value)
        return value


class RecordingVerifier:
    def __init__(self, answer: bool):
        self.answer = answer
        self.calls = []

    def __call__(self, guest_id, room_id, day):
        self.calls.append((guest_id, room_id, day))
        return self.answer


class ConflictingStore:
    def read_stream(self, stream_id):
        return InMemoryEventStore().read_stream(stream_id)

    def append_to_stream(self, stream_id, events, expected_stream_version):
        raise ExpectedVersionConflictError(stream_id, expected_stream_version, 1)


def _service(verifier=None, ids=None):
    documents = InMemoryDocumentStore()
    events = InMemoryEventStore(
        projections=[guest_stay_details_projection], document_store=documents,
    )
    kwargs = {"clock": FixedClock(NOW), "id_generator": ids or SequentialIds()}
    if verifier is not None:
        kwargs["guest_stay_verifier"] = verifier
    return GuestStayAccountService(events, documents, **kwargs), events, documents


# ══════════════════════════════════════════════════════════════
# CHECK IN
# ══════════════════════════════════════════════════════════════

class TestCheckIn:
    def test_accepted_with_stream_and_day(self):
        service, events, _ = _service()
        result = service.check_in(GUEST, ROOM)

        assert result.outcome.status == CommandStatus.ACCEPTED
        assert result.stream_id == ACCOUNT
        assert result.check_in_date == TODAY
        assert result.stream_version == 1
        assert isinstance(result.new_events[0], GuestCheckedIn)
        assert events.read_stream(ACCOUNT).current_stream_version == 1

    def test_repeat_check_in_is_accepted_noop(self):
        service, events, _ = _service()
        service.check_in(GUEST, ROOM)
        again = service.check_in(GUEST, ROOM)

        assert again.is_accepted
        assert again.new_events == ()
        assert events.event_count == 1

    def test_verifier_refusal_rejects_without_events(self):
        verifier = RecordingVerifier(answer=False)
        service, events, _ = _service(verifier=verifier)

        result = service.check_in(GUEST, ROOM)

        assert result.is_rejected
        assert result.reason.code == ReasonCode.GUEST_STAY_NOT_FOUND
        assert verifier.calls == [(GUEST, ROOM, NOW)]
        assert events.event_count == 0

    def test_check_in_after_checkout_rejected(self):
        service, _, _ = _service()
        service.check_in(GUEST, ROOM)
        service.check_out(GUEST, ROOM, TODAY)

        result = service.check_in(GUEST, ROOM)

        assert result.is_rejected
        assert result.reason.code == ReasonCode.ACCOUNT_CHECKED_OUT

    def test_empty_room_is_a_validation_error(self):
        service, _, _ = _service()
        with pytest.raises(CommandValidationError):
            service.check_in(GUEST, "")

    def test_ids_that_would_share_a_stream_are_refused(self):
        service, events, _ = _service()
        service.check_in("a", "b-c")

        with pytest.raises(CommandValidationError) as exc:
            service.record_charge("a:b", "c", TODAY, "10")
        assert exc.value.code == ReasonCode.INVALID_IDENTIFIER
        with pytest.raises(CommandValidationError):
            service.check_in("a", "b:c")
        assert events.event_count == 1


# ══════════════════════════════════════════════════════════════
# CHARGES / PAYMENTS
# ══════════════════════════════════════════════════════════════

class TestTransactions:
    def test_charge_uses_generated_id(self):
        ids = SequentialIds()
        service, _, _ = _service(ids=ids)
        service.check_in(GUEST, ROOM)

        result = service.record_charge(GUEST, ROOM, TODAY, 50)

        assert result.is_accepted
        (event,) = result.new_events
        assert isinstance(event, ChargeRecorded)
        assert event.charge_id == "charge-1"
        assert event.amount == Decimal("50")

    def test_payment_id_prefix(self):
        ids = SequentialIds()
        service, _, _ = _service(ids=ids)
        service.check_in(GUEST, ROOM)
        service.record_payment(GUEST, ROOM, date(2026, 2, 26), "20")
        assert ids.issued == ["payment-1"]

    def test_balance_reflects_every_transaction(self):
        service, _, _ = _service()
        service.check_in(GUEST, ROOM)
        service.record_charge(GUEST, ROOM, TODAY, "50")
        service.record_charge(GUEST, ROOM, TODAY, "25.50")
        service.record_payment(GUEST, ROOM, TODAY, "30")

        data = service.get_details(GUEST, ROOM, TODAY).data
        assert Decimal(data["balance"]) == Decimal("-45.50")
        assert data["transactions_count"] == 3

    def test_charge_without_check_in_rejected(self):
        service, events, _ = _service()
        result = service.record_charge(GUEST, ROOM, TODAY, "50")

        assert result.is_rejected
        assert result.reason.code == ReasonCode.ACCOUNT_NOT_FOUND
        assert result.reason.message == "Guest account doesn't exist!"
        assert events.event_count == 0

    def test_bad_amount_is_a_validation_error(self):
        service, _, _ = _service()
        service.check_in(GUEST, ROOM)
        with pytest.raises(CommandValidationError) as exc:
            service.record_charge(GUEST, ROOM, TODAY, "-3")
        assert exc.value.code == ReasonCode.INVALID_AMOUNT

    def test_bad_stay_day_is_a_validation_error(self):
        service, _, _ = _service()
        with pytest.raises(CommandValidationError) as exc:
            service.record_payment(GUEST, ROOM, "26-02-2026", "10")
        assert exc.value.code == ReasonCode.INVALID_STAY_DAY


# ══════════════════════════════════════════════════════════════
# CHECK OUT
# ══════════════════════════════════════════════════════════════

class TestCheckOut:
    def test_settled_account_checks_out(self):
        service, _, documents = _service()
        service.check_in(GUEST, ROOM)
        service.record_charge(GUEST, ROOM, TODAY, "50")
        service.record_payment(GUEST, ROOM, TODAY, "50")

        result = service.check_out(GUEST, ROOM, TODAY)

        assert result.is_accepted
        assert isinstance(result.new_events[0], GuestCheckedOut)
        assert result.checkout_failure_reason is None
        assert service.get_details(GUEST, ROOM, TODAY) is None
        closed = documents.find_by_id(GUEST_STAY_DETAILS_COLLECTION, ACCOUNT)
        assert closed.data["status"] == STATUS_CHECKED_OUT

    def test_unsettled_account_records_failure(self):
        service, events, _ = _service()
        service.check_in(GUEST, ROOM)
        service.record_charge(GUEST, ROOM, TODAY, "50")

        result = service.check_out(GUEST, ROOM, TODAY)

        assert isinstance(result, CheckOutResult)
        assert result.is_accepted
        assert isinstance(result.new_events[0], GuestCheckoutFailed)
        assert result.checkout_failure_reason == "Balance not settled"
        assert events.read_stream(ACCOUNT).current_stream_version == 3

        details = service.get_details(GUEST, ROOM, TODAY)
        assert details.data["balance"] == "-50"
        assert details.version == 3

        state = initial_state()
        for recorded in events.read_stream(ACCOUNT).events:
            state = evolve(state, recorded.data)
        assert state.balance == Decimal("-50")

    def test_checkout_of_missing_account_rejected(self):
        service, _, _ = _service()
        result = service.check_out(GUEST, ROOM, TODAY)
        assert result.is_rejected
        assert result.reason.code == ReasonCode.ACCOUNT_NOT_FOUND
        assert result.checkout_failure_reason is None

    def test_repeat_checkout_is_accepted_noop(self):
        service, events, _ = _service()
        service.check_in(GUEST, ROOM)
        service.check_out(GUEST, ROOM, TODAY)
        again = service.check_out(GUEST, ROOM, TODAY)
        assert again.is_accepted
        assert again.new_events == ()
        assert events.event_count == 2


# ══════════════════════════════════════════════════════════════
# QUERY / COLLABORATORS
# ══════════════════════════════════════════════════════════════

class TestQueryAndCollaborators:
    def test_active_stay_details(self):
        service, _, _ = _service()
        service.check_in(GUEST, ROOM)

        document = service.get_details(GUEST, ROOM, TODAY)

        assert document.version == 1
        assert document.data["status"] == "CheckedIn"
        assert document.data["balance"] == "0"
        assert document.data["transactions"] == []
        assert document.data["checked_in_at"] == NOW.isoformat()

    def test_unknown_stay_is_none(self):
        service, _, _ = _service()
        assert service.get_details(GUEST, ROOM, TODAY) is None

    def test_exhausted_retries_propagate(self):
        service = GuestStayAccountService(
            ConflictingStore(),
            InMemoryDocumentStore(),
            clock=FixedClock(NOW),
            command_handler=CommandHandler(
                evolve=evolve, initial_state=initial_state, max_attempts=2
            ),
        )
        with pytest.raises(ConcurrencyRetriesExhausted) as exc:
            service.check_in(GUEST, ROOM)
        assert exc.value.attempts == 2

    def test_generated_ids_are_prefixed_and_unique(self):
        first = generate_prefixed_id("charge")
        second = generate_prefixed_id("charge")
        assert first.startswith("charge-")
        assert first != second

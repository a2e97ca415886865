"""
GSL Guest Stay Accounts — Domain Tests
========================================
Tests: account evolve, the four decisions, command validation,
       event payload round-trips through the type registry.
No database, no clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.commands.errors import DecisionRejected
from core.commands.rejection import ReasonCode
from core.commands.validator import CommandValidationError
from core.event_store.contracts import DomainEventProtocol
from core.event_store.errors import UnknownEventTypeError
from core.event_store.registry import EventTypeRegistry
from engines.guest_stay_accounts.account import (
    CheckedOut,
    NotExisting,
    Opened,
    evolve,
    initial_state,
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
    CHARGE_RECORDED_V1,
    ChargeRecorded,
    GuestCheckedIn,
    GuestCheckedOut,
    GuestCheckoutFailed,
    PaymentRecorded,
    build_event_type_registry,
)
from engines.guest_stay_accounts.policies import (
    check_in,
    check_out,
    record_charge,
    record_payment,
)

NOW      = datetime(2026, 2, 26, 9, 0, 0, tzinfo=timezone.utc)
LATER    = NOW + timedelta(hours=30)
GUEST    = "guest-1"
ROOM     = "room-101"
ACCOUNT  = "guest_stay_account-guest-1:room-101:2026-02-26"


def fold(events):
    state = initial_state()
    for event in events:
        state = evolve(state, event)
    return state


def checked_in():
    return GuestCheckedIn(
        guest_stay_account_id=ACCOUNT, guest_id=GUEST,
        room_id=ROOM, checked_in_at=NOW,
    )


def charge(amount, charge_id="charge-1"):
    return ChargeRecorded(
        guest_stay_account_id=ACCOUNT, charge_id=charge_id,
        amount=Decimal(amount), recorded_at=NOW,
    )


def payment(amount, payment_id="payment-1"):
    return PaymentRecorded(
        guest_stay_account_id=ACCOUNT, payment_id=payment_id,
        amount=Decimal(amount), recorded_at=NOW,
    )


def checked_out():
    return GuestCheckedOut(guest_stay_account_id=ACCOUNT, checked_out_at=LATER)


# ══════════════════════════════════════════════════════════════
# ACCOUNT ID
# ══════════════════════════════════════════════════════════════

class TestGuestStayAccountId:
    def test_format(self):
        assert to_guest_stay_account_id(GUEST, ROOM, NOW) == ACCOUNT

    def test_same_day_same_account(self):
        evening = NOW.replace(hour=23, minute=59)
        assert to_guest_stay_account_id(GUEST, ROOM, evening) == ACCOUNT

    def test_day_is_taken_in_utc(self):
        new_york = timezone(timedelta(hours=-5))
        late_evening = datetime(2026, 2, 26, 23, 30, tzinfo=new_york)
        assert to_guest_stay_account_id(GUEST, ROOM, late_evening).endswith(
            ":2026-02-27"
        )

    def test_naive_datetime_refused(self):
        with pytest.raises(ValueError):
            to_guest_stay_account_id(GUEST, ROOM, datetime(2026, 2, 26, 9, 0))

    @pytest.mark.parametrize("guest_id, room_id", [("a:b", "c"), ("a", "b:c")])
    def test_separator_in_ids_refused(self, guest_id, room_id):
        with pytest.raises(ValueError):
            to_guest_stay_account_id(guest_id, room_id, NOW)


# ══════════════════════════════════════════════════════════════
# EVOLVE
# ══════════════════════════════════════════════════════════════

class TestEvolve:
    def test_initial_state_is_not_existing(self):
        assert isinstance(initial_state(), NotExisting)

    def test_check_in_opens_with_zero_balance(self):
        state = fold([checked_in()])
        assert isinstance(state, Opened)
        assert state.guest_stay_account_id == ACCOUNT
        assert state.balance == Decimal("0")
        assert state.checked_in_at == NOW

    def test_balance_is_payments_minus_charges(self):
        state = fold([
            checked_in(),
            charge("10", "c1"), charge("20.50", "c2"),
            payment("5", "p1"),
        ])
        assert state.balance == Decimal("-25.50")

    def test_check_out_closes_account(self):
        state = fold([checked_in(), charge("50"), payment("50"), checked_out()])
        assert isinstance(state, CheckedOut)
        assert state.checked_out_at == LATER
        assert state.balance == Decimal("0")

    def test_checkout_failed_changes_nothing(self):
        before = fold([checked_in(), charge("50")])
        failed = GuestCheckoutFailed(
            guest_stay_account_id=ACCOUNT, reason=BALANCE_NOT_SETTLED, failed_at=LATER,
        )
        assert evolve(before, failed) == before

    def test_inapplicable_events_are_ignored(self):
        assert isinstance(fold([charge("50")]), NotExisting)
        opened = fold([checked_in()])
        assert evolve(opened, checked_in()) == opened
        closed = fold([checked_in(), checked_out()])
        assert evolve(closed, payment("5")) == closed

    def test_fold_is_deterministic(self):
        events = [checked_in(), charge("12.34"), payment("2.34")]
        assert fold(events) == fold(list(events))

    def test_unknown_event_type_raises(self):
        with pytest.raises(TypeError):
            evolve(initial_state(), object())


# ══════════════════════════════════════════════════════════════
# DECISIONS
# ══════════════════════════════════════════════════════════════

class TestCheckInDecision:
    def _command(self):
        return CheckIn(guest_id=GUEST, room_id=ROOM, now=NOW)

    def test_not_existing_emits_checked_in(self):
        events = check_in(self._command(), initial_state())
        assert events == (checked_in(),)

    def test_already_opened_is_noop(self):
        assert check_in(self._command(), fold([checked_in()])) == ()

    def test_checked_out_is_rejected(self):
        state = fold([checked_in(), checked_out()])
        with pytest.raises(DecisionRejected) as exc:
            check_in(self._command(), state)
        assert exc.value.reason.code == ReasonCode.ACCOUNT_CHECKED_OUT
        assert exc.value.reason.message == "Guest account is already checked out"


class TestChargeAndPaymentDecisions:
    def _charge(self, amount="50"):
        return RecordCharge(
            guest_stay_account_id=ACCOUNT, charge_id="charge-1", amount=amount, now=NOW,
        )

    def _payment(self, amount="50"):
        return RecordPayment(
            guest_stay_account_id=ACCOUNT, payment_id="payment-1", amount=amount, now=NOW,
        )

    def test_charge_on_opened(self):
        events = record_charge(self._charge(), fold([checked_in()]))
        assert events == (charge("50"),)

    def test_payment_on_opened(self):
        events = record_payment(self._payment(), fold([checked_in()]))
        assert events == (payment("50"),)

    def test_charge_on_missing_account_rejected(self):
        with pytest.raises(DecisionRejected) as exc:
            record_charge(self._charge(), initial_state())
        assert exc.value.reason.code == ReasonCode.ACCOUNT_NOT_FOUND
        assert exc.value.reason.message == "Guest account doesn't exist!"
        assert exc.value.reason.policy_name == "record_charge"

    def test_payment_on_missing_account_rejected(self):
        with pytest.raises(DecisionRejected) as exc:
            record_payment(self._payment(), initial_state())
        assert exc.value.reason.code == ReasonCode.ACCOUNT_NOT_FOUND

    def test_charge_after_checkout_rejected(self):
        state = fold([checked_in(), checked_out()])
        with pytest.raises(DecisionRejected) as exc:
            record_charge(self._charge(), state)
        assert exc.value.reason.code == ReasonCode.ACCOUNT_CHECKED_OUT

    def test_payment_after_checkout_rejected(self):
        state = fold([checked_in(), checked_out()])
        with pytest.raises(DecisionRejected) as exc:
            record_payment(self._payment(), state)
        assert exc.value.reason.code == ReasonCode.ACCOUNT_CHECKED_OUT


class TestCheckOutDecision:
    def _command(self):
        return CheckOut(guest_stay_account_id=ACCOUNT, now=LATER)

    def test_settled_balance_checks_out(self):
        state = fold([checked_in(), charge("50"), payment("50")])
        assert check_out(self._command(), state) == (checked_out(),)

    def test_untouched_account_checks_out(self):
        assert check_out(self._command(), fold([checked_in()])) == (checked_out(),)

    def test_open_balance_records_failure(self):
        state = fold([checked_in(), charge("50")])
        (event,) = check_out(self._command(), state)
        assert isinstance(event, GuestCheckoutFailed)
        assert event.reason == "Balance not settled"
        assert event.failed_at == LATER
        assert isinstance(evolve(state, event), Opened)

    def test_credit_balance_also_fails(self):
        state = fold([checked_in(), payment("10")])
        (event,) = check_out(self._command(), state)
        assert isinstance(event, GuestCheckoutFailed)

    def test_already_checked_out_is_noop(self):
        state = fold([checked_in(), checked_out()])
        assert check_out(self._command(), state) == ()

    def test_missing_account_rejected(self):
        with pytest.raises(DecisionRejected) as exc:
            check_out(self._command(), initial_state())
        assert exc.value.reason.code == ReasonCode.ACCOUNT_NOT_FOUND


# ══════════════════════════════════════════════════════════════
# COMMAND VALIDATION
# ══════════════════════════════════════════════════════════════

class TestCommandValidation:
    @pytest.mark.parametrize("amount", [0, -5, "0", "-1.5", "abc", True, None,
                                        float("nan"), float("inf"), "Infinity"])
    def test_bad_amounts_rejected(self, amount):
        with pytest.raises(CommandValidationError) as exc:
            RecordCharge(
                guest_stay_account_id=ACCOUNT, charge_id="c", amount=amount, now=NOW,
            )
        assert exc.value.code == ReasonCode.INVALID_AMOUNT

    def test_amount_coerced_to_decimal(self):
        command = RecordPayment(
            guest_stay_account_id=ACCOUNT, payment_id="p", amount="12.50", now=NOW,
        )
        assert command.amount == Decimal("12.50")
        assert isinstance(command.amount, Decimal)

    def test_float_amount_keeps_its_text_value(self):
        command = RecordCharge(
            guest_stay_account_id=ACCOUNT, charge_id="c", amount=0.1, now=NOW,
        )
        assert command.amount == Decimal("0.1")

    def test_empty_guest_rejected(self):
        with pytest.raises(CommandValidationError) as exc:
            CheckIn(guest_id="  ", room_id=ROOM, now=NOW)
        assert exc.value.code == ReasonCode.EMPTY_IDENTIFIER

    def test_separator_in_room_rejected(self):
        with pytest.raises(CommandValidationError) as exc:
            CheckIn(guest_id=GUEST, room_id="b:c", now=NOW)
        assert exc.value.code == ReasonCode.INVALID_IDENTIFIER

    def test_naive_now_rejected(self):
        with pytest.raises(CommandValidationError) as exc:
            CheckOut(guest_stay_account_id=ACCOUNT, now=datetime(2026, 2, 26))
        assert exc.value.code == ReasonCode.INVALID_COMMAND_STRUCTURE


# ══════════════════════════════════════════════════════════════
# EVENT SERIALIZATION
# ══════════════════════════════════════════════════════════════

class TestEventSerialization:
    def test_charge_payload_is_json_safe(self):
        registry = build_event_type_registry()
        event_type, payload = registry.serialize(charge("50.25"))
        assert event_type == CHARGE_RECORDED_V1
        assert payload == {
            "guest_stay_account_id": ACCOUNT,
            "charge_id": "charge-1",
            "amount": "50.25",
            "recorded_at": "2026-02-26T09:00:00+00:00",
        }

    def test_every_event_survives_registry(self):
        registry = build_event_type_registry()
        failed = GuestCheckoutFailed(
            guest_stay_account_id=ACCOUNT, reason=BALANCE_NOT_SETTLED, failed_at=LATER,
        )
        for event in (checked_in(), charge("1"), payment("2"), checked_out(), failed):
            event_type, payload = registry.serialize(event)
            assert registry.deserialize(event_type, payload) == event

    def test_unknown_type_on_read(self):
        registry = build_event_type_registry()
        with pytest.raises(UnknownEventTypeError):
            registry.deserialize("guest_stay.account.renamed.v1", {})

    def test_every_event_class_is_a_domain_event(self):
        for event in (checked_in(), charge("1"), payment("2"), checked_out()):
            assert isinstance(event, DomainEventProtocol)

    def test_class_without_payload_hooks_refused(self):
        class Nameless:
            event_type = "guest_stay.account.nameless.v1"

        with pytest.raises(ValueError):
            EventTypeRegistry().register(Nameless)

    def test_plain_object_is_not_serialized(self):
        registry = build_event_type_registry()
        with pytest.raises(TypeError):
            registry.serialize({"event_type": CHARGE_RECORDED_V1})

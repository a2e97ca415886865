"""
GSL Guest Stay Accounts Engine — Application Service
=======================================================
Entry points for the four account commands and the details query.

Each command:
    1. Validates caller input (CommandValidationError on failure)
    2. Derives the stream id from guest, room and stay day
    3. Runs the decision through the CommandHandler
    4. Returns a CommandResult (ACCEPTED or REJECTED)

Concurrency exhaustion and storage errors propagate to the caller.
Queries read the projected document, never the stream.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from core.commands.errors import DecisionRejected
from core.commands.handler import CommandHandler
from core.commands.outcomes import CommandOutcome, CommandResult
from core.commands.rejection import ReasonCode, RejectionReason
from core.commands.validator import assert_identifier_segment, assert_stay_day
from core.event_store.contracts import EventStoreProtocol
from core.read_store.contracts import StoredDocument
from core.time.clock import Clock, get_default_clock
from core.time.temporal import format_stay_day
from engines.guest_stay_accounts import policies
from engines.guest_stay_accounts.account import (
    ACCOUNT_ID_SEPARATOR,
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
from engines.guest_stay_accounts.events import GuestCheckoutFailed
from projections.guest_stay_details import (
    STATUS_CHECKED_IN,
    get_guest_stay_details,
)

logger = logging.getLogger("gsl.commands")

GuestStayVerifier = Callable[[str, str, datetime], bool]
IdGenerator = Callable[[str], str]


def generate_prefixed_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


def allow_all_guest_stays(guest_id: str, room_id: str, day: datetime) -> bool:
    return True


@dataclass(frozen=True)
class CheckInResult(CommandResult):
    check_in_date: str = ""


@dataclass(frozen=True)
class CheckOutResult(CommandResult):
    """checkout_failure_reason is set when GuestCheckoutFailed was recorded."""

    checkout_failure_reason: Optional[str] = None


def _checkout_failure_reason(events: tuple) -> Optional[str]:
    for event in events:
        if isinstance(event, GuestCheckoutFailed):
            return event.reason
    return None


class GuestStayAccountService:
    """
    Usage:
        service = GuestStayAccountService(event_store, document_store)
        result = service.check_in("guest-1", "room-101")
        service.record_charge("guest-1", "room-101", result.check_in_date, "50")
    """

    def __init__(
        self,
        event_store: EventStoreProtocol,
        document_store: Any,
        *,
        clock: Optional[Clock] = None,
        id_generator: IdGenerator = generate_prefixed_id,
        guest_stay_verifier: GuestStayVerifier = allow_all_guest_stays,
        command_handler: Optional[CommandHandler] = None,
    ):
        self._event_store = event_store
        self._document_store = document_store
        self._clock = clock
        self._generate_id = id_generator
        self._verify_guest_stay = guest_stay_verifier
        self._handler = command_handler or CommandHandler(
            evolve=evolve, initial_state=initial_state
        )

    @property
    def command_handler(self) -> CommandHandler:
        return self._handler

    def _now(self) -> datetime:
        return (self._clock or get_default_clock()).now_utc()

    def _account_id(self, guest_id: str, room_id: str, check_in_date: Any) -> str:
        assert_identifier_segment(guest_id, "guest_id", ACCOUNT_ID_SEPARATOR)
        assert_identifier_segment(room_id, "room_id", ACCOUNT_ID_SEPARATOR)
        return to_guest_stay_account_id(
            guest_id, room_id, assert_stay_day(check_in_date)
        )

    def _run(
        self, stream_id: str, decide: Callable[[Any], tuple], now: datetime
    ) -> CommandResult:
        try:
            handled = self._handler.handle(self._event_store, stream_id, decide)
        except DecisionRejected as exc:
            logger.info(
                f"Command on {stream_id} rejected by {exc.reason.policy_name}: "
                f"[{exc.reason.code}] {exc.reason.message}"
            )
            return CommandResult(
                outcome=CommandOutcome.rejected(exc.reason, now),
                stream_id=stream_id,
            )

        logger.debug(
            f"Command on {stream_id} accepted with "
            f"{len(handled.new_events)} new event(s)"
        )
        return CommandResult(
            outcome=CommandOutcome.accepted(now),
            stream_id=stream_id,
            new_events=handled.new_events,
            stream_version=handled.next_expected_stream_version,
        )

    # ══════════════════════════════════════════════════════════
    # COMMANDS
    # ══════════════════════════════════════════════════════════

    def check_in(self, guest_id: str, room_id: str) -> CheckInResult:
        now = self._now()
        command = CheckIn(guest_id=guest_id, room_id=room_id, now=now)
        stream_id = to_guest_stay_account_id(guest_id, room_id, now)
        check_in_date = format_stay_day(now)

        if not self._verify_guest_stay(guest_id, room_id, now):
            logger.info(f"No guest stay found for {guest_id} in {room_id}")
            return CheckInResult(
                outcome=CommandOutcome.rejected(
                    RejectionReason(
                        code=ReasonCode.GUEST_STAY_NOT_FOUND,
                        message=(
                            f"No stay found for guest '{guest_id}' "
                            f"in room '{room_id}'."
                        ),
                        policy_name="guest_stay_verifier",
                    ),
                    now,
                ),
                stream_id=stream_id,
                check_in_date=check_in_date,
            )

        result = self._run(
            stream_id, lambda state: policies.check_in(command, state), now
        )
        return CheckInResult(
            outcome=result.outcome,
            stream_id=result.stream_id,
            new_events=result.new_events,
            stream_version=result.stream_version,
            check_in_date=check_in_date,
        )

    def record_charge(
        self,
        guest_id: str,
        room_id: str,
        check_in_date: str | date,
        amount: Decimal | int | str,
    ) -> CommandResult:
        stream_id = self._account_id(guest_id, room_id, check_in_date)
        now = self._now()
        command = RecordCharge(
            guest_stay_account_id=stream_id,
            charge_id=self._generate_id("charge"),
            amount=amount,
            now=now,
        )
        return self._run(
            stream_id, lambda state: policies.record_charge(command, state), now
        )

    def record_payment(
        self,
        guest_id: str,
        room_id: str,
        check_in_date: str | date,
        amount: Decimal | int | str,
    ) -> CommandResult:
        stream_id = self._account_id(guest_id, room_id, check_in_date)
        now = self._now()
        command = RecordPayment(
            guest_stay_account_id=stream_id,
            payment_id=self._generate_id("payment"),
            amount=amount,
            now=now,
        )
        return self._run(
            stream_id, lambda state: policies.record_payment(command, state), now
        )

    def check_out(
        self, guest_id: str, room_id: str, check_in_date: str | date
    ) -> CheckOutResult:
        stream_id = self._account_id(guest_id, room_id, check_in_date)
        now = self._now()
        command = CheckOut(guest_stay_account_id=stream_id, now=now)
        result = self._run(
            stream_id, lambda state: policies.check_out(command, state), now
        )
        return CheckOutResult(
            outcome=result.outcome,
            stream_id=result.stream_id,
            new_events=result.new_events,
            stream_version=result.stream_version,
            checkout_failure_reason=_checkout_failure_reason(result.new_events),
        )

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get_details(
        self, guest_id: str, room_id: str, check_in_date: str | date
    ) -> Optional[StoredDocument]:
        """Active stays only. Checked-out accounts read as not found."""
        stream_id = self._account_id(guest_id, room_id, check_in_date)
        document = get_guest_stay_details(self._document_store, stream_id)
        if document is None or document.data.get("status") != STATUS_CHECKED_IN:
            return None
        return document

"""
GSL HTTP API - Handlers
=======================
Framework-agnostic guest stay endpoints.

Status mapping:
    CommandValidationError        → 400
    REJECTED outcome              → 403
    GuestCheckoutFailed recorded  → 403 (reason in body)
    ConcurrencyRetriesExhausted   → 409
    Missing / closed stay (GET)   → 404

Amounts in replies are Decimal. Adapters encode them as JSON numbers.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from core.commands.errors import ConcurrencyRetriesExhausted
from core.commands.outcomes import CommandResult
from core.commands.validator import CommandValidationError
from core.http_api.contracts import (
    HttpApiReply,
    StayPeriodRequest,
    StayRequest,
    StayTransactionRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    NOT_FOUND,
    checkout_failed_response,
    concurrency_response,
    error_response,
    rejection_response,
    success_response,
    validation_response,
)

logger = logging.getLogger("gsl.http")

API_PREFIX = "/v1"


def stay_period_location(guest_id: str, room_id: str, check_in_date: str) -> str:
    return f"{API_PREFIX}/guests/{guest_id}/stays/{room_id}/periods/{check_in_date}"


def weak_etag(version: int) -> str:
    return f'W/"{version}"'


def _details_body(data: dict[str, Any]) -> dict[str, Any]:
    """Stored amounts are exact decimal text. Replies carry them as numbers."""
    body = dict(data)
    body["balance"] = Decimal(data["balance"])
    body["transactions"] = [
        {**transaction, "amount": Decimal(transaction["amount"])}
        for transaction in data.get("transactions", [])
    ]
    return body


def _validation_reply(exc: CommandValidationError) -> HttpApiReply:
    return HttpApiReply(status=400, body=validation_response(exc))


def _conflict_reply(exc: ConcurrencyRetriesExhausted) -> HttpApiReply:
    logger.warning(f"Retries exhausted for {exc.stream_id}: {exc}")
    return HttpApiReply(status=409, body=concurrency_response(exc))


def _command_reply(result: CommandResult) -> HttpApiReply:
    if result.is_rejected:
        return HttpApiReply(status=403, body=rejection_response(result.reason))
    return HttpApiReply(status=204)


# ══════════════════════════════════════════════════════════════
# COMMAND ENDPOINTS
# ══════════════════════════════════════════════════════════════

def post_check_in(request: StayRequest, deps: HttpApiDependencies) -> HttpApiReply:
    try:
        result = deps.guest_stay_service.check_in(request.guest_id, request.room_id)
    except CommandValidationError as exc:
        return _validation_reply(exc)
    except ConcurrencyRetriesExhausted as exc:
        return _conflict_reply(exc)

    if result.is_rejected:
        return HttpApiReply(status=403, body=rejection_response(result.reason))

    location = stay_period_location(
        request.guest_id, request.room_id, result.check_in_date
    )
    return HttpApiReply(
        status=201,
        body=success_response({
            "id": result.stream_id,
            "check_in_date": result.check_in_date,
        }),
        headers={"Location": location},
    )


def post_charge(
    request: StayTransactionRequest, deps: HttpApiDependencies
) -> HttpApiReply:
    period = request.period
    try:
        result = deps.guest_stay_service.record_charge(
            period.guest_id, period.room_id, period.check_in_date, request.amount
        )
    except CommandValidationError as exc:
        return _validation_reply(exc)
    except ConcurrencyRetriesExhausted as exc:
        return _conflict_reply(exc)
    return _command_reply(result)


def post_payment(
    request: StayTransactionRequest, deps: HttpApiDependencies
) -> HttpApiReply:
    period = request.period
    try:
        result = deps.guest_stay_service.record_payment(
            period.guest_id, period.room_id, period.check_in_date, request.amount
        )
    except CommandValidationError as exc:
        return _validation_reply(exc)
    except ConcurrencyRetriesExhausted as exc:
        return _conflict_reply(exc)
    return _command_reply(result)


def delete_check_out(
    request: StayPeriodRequest, deps: HttpApiDependencies
) -> HttpApiReply:
    try:
        result = deps.guest_stay_service.check_out(
            request.guest_id, request.room_id, request.check_in_date
        )
    except CommandValidationError as exc:
        return _validation_reply(exc)
    except ConcurrencyRetriesExhausted as exc:
        return _conflict_reply(exc)

    failure = result.checkout_failure_reason
    if failure is not None:
        return HttpApiReply(
            status=403,
            body=checkout_failed_response(failure, result.stream_id),
        )
    return _command_reply(result)


# ══════════════════════════════════════════════════════════════
# QUERY ENDPOINTS
# ══════════════════════════════════════════════════════════════

def get_stay_details(
    request: StayPeriodRequest, deps: HttpApiDependencies
) -> HttpApiReply:
    try:
        document = deps.guest_stay_service.get_details(
            request.guest_id, request.room_id, request.check_in_date
        )
    except CommandValidationError as exc:
        return _validation_reply(exc)

    if document is None:
        return HttpApiReply(
            status=404,
            body=error_response(
                code=NOT_FOUND,
                message="Guest stay account not found.",
            ),
        )
    return HttpApiReply(
        status=200,
        body=success_response(_details_body(document.data)),
        headers={"ETag": weak_etag(document.version)},
    )

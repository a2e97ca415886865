"""
GSL HTTP API - Error Mapping
============================
One envelope for every failed guest stay request:

    {"ok": false, "error": {"code": ..., "message": ..., "details": {...}}}

Domain rejections keep their reason code and name the refusing policy.
Transport-level failures use the codes below.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.errors import ConcurrencyRetriesExhausted
from core.commands.rejection import ReasonCode, RejectionReason
from core.commands.validator import CommandValidationError
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
NOT_FOUND = "NOT_FOUND"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
CHECKOUT_FAILED = "CHECKOUT_FAILED"
CONCURRENCY_CONFLICT = ReasonCode.CONCURRENCY_CONFLICT


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    body = HttpApiErrorBody(code=code, message=message, details=details or {})
    return HttpApiResponse(ok=False, error=body).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


# ── Domain rejections ─────────────────────────────────────────

def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={"policy_name": reason.policy_name},
    )


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details={**mapped.details, **(extra_details or {})},
    )


def checkout_failed_response(reason: str, stream_id: str) -> dict[str, Any]:
    """Checkout was recorded as failed. The reason is the event's."""
    return error_response(
        code=CHECKOUT_FAILED,
        message=reason,
        details={"stream_id": stream_id},
    )


# ── Caller and concurrency failures ───────────────────────────

def validation_response(exc: CommandValidationError) -> dict[str, Any]:
    return error_response(code=exc.code, message=exc.message)


def concurrency_response(exc: ConcurrencyRetriesExhausted) -> dict[str, Any]:
    return error_response(
        code=CONCURRENCY_CONFLICT,
        message=str(exc),
        details={"stream_id": exc.stream_id, "attempts": exc.attempts},
    )

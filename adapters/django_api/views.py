"""
GSL Django Adapter Views
========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    HttpApiReply,
    StayPeriodRequest,
    StayRequest,
    StayTransactionRequest,
)
from core.http_api.errors import INVALID_REQUEST, METHOD_NOT_ALLOWED, error_response
from core.http_api.handlers import (
    delete_check_out,
    get_stay_details,
    post_charge,
    post_check_in,
    post_payment,
)


class AmountJSONEncoder(DjangoJSONEncoder):
    """Decimal amounts go out as JSON numbers, not strings."""

    def default(self, o):
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        return super().default(o)


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _method_not_allowed(request: HttpRequest, allowed: tuple[str, ...]) -> JsonResponse:
    response = _json_error(
        METHOD_NOT_ALLOWED,
        f"Method {request.method} not allowed.",
        status=405,
    )
    response["Allow"] = ", ".join(allowed)
    return response


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        # Amounts stay exact: JSON numbers with a fraction become Decimal.
        parsed = json.loads(request.body.decode("utf-8"), parse_float=Decimal)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _render(reply: HttpApiReply) -> HttpResponse:
    if reply.body is None:
        response = HttpResponse(status=reply.status)
    else:
        response = JsonResponse(
            reply.body, encoder=AmountJSONEncoder, status=reply.status
        )
    for name, value in reply.headers.items():
        response[name] = value
    return response


def _dispatch_transaction(handler, request: HttpRequest, period: StayPeriodRequest):
    if request.method != "POST":
        return _method_not_allowed(request, ("POST",))
    try:
        body = _parse_json_body(request)
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    contract = StayTransactionRequest(period=period, amount=body.get("amount"))
    return _render(handler(contract, build_dependencies()))


# ══════════════════════════════════════════════════════════════
# ROUTES
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def check_in_view(request: HttpRequest, guest_id: str, room_id: str):
    if request.method != "POST":
        return _method_not_allowed(request, ("POST",))
    contract = StayRequest(guest_id=guest_id, room_id=room_id)
    return _render(post_check_in(contract, build_dependencies()))


@csrf_exempt
def stay_period_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
):
    contract = StayPeriodRequest(
        guest_id=guest_id, room_id=room_id, check_in_date=check_in_date
    )
    if request.method == "GET":
        return _render(get_stay_details(contract, build_dependencies()))
    if request.method == "DELETE":
        return _render(delete_check_out(contract, build_dependencies()))
    return _method_not_allowed(request, ("GET", "DELETE"))


@csrf_exempt
def charges_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
):
    period = StayPeriodRequest(
        guest_id=guest_id, room_id=room_id, check_in_date=check_in_date
    )
    return _dispatch_transaction(post_charge, request, period)


@csrf_exempt
def payments_view(
    request: HttpRequest, guest_id: str, room_id: str, check_in_date: str
):
    period = StayPeriodRequest(
        guest_id=guest_id, room_id=room_id, check_in_date=check_in_date
    )
    return _dispatch_transaction(post_payment, request, period)

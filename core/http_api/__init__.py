"""
GSL HTTP API - Public API
=========================
Guest stay endpoints as plain functions: request DTO in, HttpApiReply out.
"""

from core.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiReply,
    HttpApiResponse,
    StayPeriodRequest,
    StayRequest,
    StayTransactionRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    CHECKOUT_FAILED,
    CONCURRENCY_CONFLICT,
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    NOT_FOUND,
    checkout_failed_response,
    concurrency_response,
    error_response,
    map_rejection_reason,
    rejection_response,
    success_response,
    validation_response,
)
from core.http_api.handlers import (
    delete_check_out,
    get_stay_details,
    post_charge,
    post_check_in,
    post_payment,
    stay_period_location,
    weak_etag,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiReply",
    "HttpApiResponse",
    "StayPeriodRequest",
    "StayRequest",
    "StayTransactionRequest",
    "HttpApiDependencies",
    "CHECKOUT_FAILED",
    "CONCURRENCY_CONFLICT",
    "INVALID_REQUEST",
    "METHOD_NOT_ALLOWED",
    "NOT_FOUND",
    "checkout_failed_response",
    "concurrency_response",
    "error_response",
    "map_rejection_reason",
    "rejection_response",
    "success_response",
    "validation_response",
    "delete_check_out",
    "get_stay_details",
    "post_charge",
    "post_check_in",
    "post_payment",
    "stay_period_location",
    "weak_etag",
]

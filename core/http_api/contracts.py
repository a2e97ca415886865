"""
GSL HTTP API - Contracts
========================
Framework-agnostic request/response DTOs for guest stay endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class StayRequest:
    guest_id: str
    room_id: str


@dataclass(frozen=True)
class StayPeriodRequest:
    guest_id: str
    room_id: str
    check_in_date: str


@dataclass(frozen=True)
class StayTransactionRequest:
    period: StayPeriodRequest
    amount: Any = None


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}


@dataclass(frozen=True)
class HttpApiReply:
    """
    Transport-neutral reply. body=None means no content.
    """

    status: int
    body: Optional[dict[str, Any]] = None
    headers: dict[str, str] = field(default_factory=dict)

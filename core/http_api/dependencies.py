"""
GSL HTTP API - Dependencies
===========================
Injected collaborators for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from engines.guest_stay_accounts.services import GuestStayAccountService


@dataclass(frozen=True)
class HttpApiDependencies:
    guest_stay_service: GuestStayAccountService
    event_store: Any
    document_store: Any

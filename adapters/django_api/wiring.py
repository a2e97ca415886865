"""
GSL Django Adapter Wiring
=========================
Constructs HttpApiDependencies for the running service.

This module is adapter-only glue:
- no domain logic
- chooses the store backend from settings.GUEST_STAY_ACCOUNTS
- "django" (default) persists through the ORM, "memory" keeps
  everything in process (local smoke runs)
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from django.conf import settings

from core.commands.handler import DEFAULT_MAX_ATTEMPTS, CommandHandler
from core.event_store.memory import InMemoryEventStore
from core.http_api.dependencies import HttpApiDependencies
from core.read_store.memory import InMemoryDocumentStore
from core.time.clock import Clock
from engines.guest_stay_accounts.account import evolve, initial_state
from engines.guest_stay_accounts.events import build_event_type_registry
from engines.guest_stay_accounts.services import GuestStayAccountService
from projections.guest_stay_details import guest_stay_details_projection

logger = logging.getLogger("gsl.http")

STORE_BACKEND_DJANGO = "django"
STORE_BACKEND_MEMORY = "memory"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _guest_stay_settings() -> dict:
    return dict(getattr(settings, "GUEST_STAY_ACCOUNTS", {}))


def _build_stores(backend: str, clock: Optional[Clock]):
    projections = (guest_stay_details_projection,)

    if backend == STORE_BACKEND_MEMORY:
        document_store = InMemoryDocumentStore()
        event_store = InMemoryEventStore(
            projections=projections,
            document_store=document_store,
            clock=clock,
        )
        return event_store, document_store

    if backend == STORE_BACKEND_DJANGO:
        # ORM-backed modules need the app registry, import on demand.
        from core.event_store.persistence.service import DjangoEventStore
        from core.read_store.repository import DjangoDocumentStore

        document_store = DjangoDocumentStore()
        event_store = DjangoEventStore(
            build_event_type_registry(),
            projections=projections,
            document_store=document_store,
            clock=clock,
        )
        return event_store, document_store

    raise ValueError(
        f"Unknown GUEST_STAY_ACCOUNTS['STORE_BACKEND'] '{backend}'. "
        f"Expected '{STORE_BACKEND_DJANGO}' or '{STORE_BACKEND_MEMORY}'."
    )


def create_dependencies(
    *,
    backend: Optional[str] = None,
    clock: Optional[Clock] = None,
    max_attempts: Optional[int] = None,
) -> HttpApiDependencies:
    config = _guest_stay_settings()
    backend = backend or config.get("STORE_BACKEND", STORE_BACKEND_DJANGO)
    if max_attempts is None:
        max_attempts = int(config.get("MAX_COMMAND_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))

    event_store, document_store = _build_stores(backend, clock)
    service = GuestStayAccountService(
        event_store,
        document_store,
        clock=clock,
        command_handler=CommandHandler(
            evolve=evolve,
            initial_state=initial_state,
            max_attempts=max_attempts,
        ),
    )
    logger.info(
        f"Guest stay dependencies built (backend={backend}, "
        f"max_attempts={max_attempts})"
    )
    return HttpApiDependencies(
        guest_stay_service=service,
        event_store=event_store,
        document_store=document_store,
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = create_dependencies()
        return _DEPENDENCIES


def set_dependencies(dependencies: HttpApiDependencies) -> None:
    """Replace the singleton (tests, scripts)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies


def reset_dependencies() -> None:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None

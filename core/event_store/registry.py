"""
GSL Event Store — Event Type Registry
=======================================
Maps stored event_type strings back to event classes.

Rules:
- Registry starts EMPTY
- Engines register their event classes at bootstrap
- Reading an unregistered type is an error, never a silent skip
- Format: engine.domain.action[.vN] (e.g. guest_stay.account.checked_in.v1)

The registry prefers to reject over accepting something unknown.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Iterable

from core.event_store.contracts import DomainEventProtocol
from core.event_store.errors import DuplicateEventTypeError, UnknownEventTypeError


class EventTypeRegistry:
    """
    In-memory registry of event classes, keyed by event_type.
    Thread-safe for concurrent registration and lookup.

    Usage:
        registry = EventTypeRegistry()
        registry.register(GuestCheckedIn)

        registry.deserialize("guest_stay.account.checked_in.v1", payload)
    """

    def __init__(self, event_classes: Iterable[type[DomainEventProtocol]] = ()):
        self._classes: dict[str, type[DomainEventProtocol]] = {}
        self._lock = Lock()
        for event_class in event_classes:
            self.register(event_class)

    def register(self, event_class: type[DomainEventProtocol]) -> None:
        event_type = getattr(event_class, "event_type", None)
        if not event_type or not isinstance(event_type, str):
            raise ValueError(
                f"{event_class.__name__} must define a non-empty "
                f"'event_type' class attribute."
            )
        for hook in ("to_payload", "from_payload"):
            if not callable(getattr(event_class, hook, None)):
                raise ValueError(
                    f"{event_class.__name__} must define {hook}()."
                )

        parts = event_type.strip().split(".")
        if len(parts) < 3:
            raise ValueError(
                f"Event type '{event_type}' does not follow "
                f"engine.domain.action format."
            )

        with self._lock:
            existing = self._classes.get(event_type)
            if existing is not None and existing is not event_class:
                raise DuplicateEventTypeError(event_type)
            self._classes[event_type] = event_class

    def is_registered(self, event_type: str) -> bool:
        with self._lock:
            return event_type in self._classes

    def get_all_registered(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._classes)

    def resolve(self, event_type: str) -> type[DomainEventProtocol]:
        with self._lock:
            event_class = self._classes.get(event_type)
        if event_class is None:
            raise UnknownEventTypeError(event_type)
        return event_class

    def serialize(self, event: DomainEventProtocol) -> tuple[str, dict[str, Any]]:
        """Return (event_type, payload) for an event object."""
        if not isinstance(event, DomainEventProtocol):
            raise TypeError(
                f"{type(event).__name__} is not a storable domain event."
            )
        event_type = type(event).event_type
        if not self.is_registered(event_type):
            raise UnknownEventTypeError(event_type)
        return event_type, event.to_payload()

    def deserialize(
        self, event_type: str, payload: dict[str, Any]
    ) -> DomainEventProtocol:
        return self.resolve(event_type).from_payload(payload)

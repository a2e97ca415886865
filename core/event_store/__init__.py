"""
GSL Event Store — Public API
==============================
Per-stream append-only log with optimistic concurrency.

The Django-backed store lives in core.event_store.persistence and is
imported from there so that importing this package never requires
configured Django settings.
"""

from core.event_store.contracts import (
    STREAM_DOES_NOT_EXIST,
    AppendResult,
    DomainEventProtocol,
    EventStoreProtocol,
    InlineProjectionProtocol,
    ReadStreamResult,
    RecordedEvent,
)
from core.event_store.errors import (
    DuplicateEventTypeError,
    EventStoreError,
    ExpectedVersionConflictError,
    UnknownEventTypeError,
)
from core.event_store.memory import InMemoryEventStore
from core.event_store.registry import EventTypeRegistry

__all__ = [
    "STREAM_DOES_NOT_EXIST",
    "AppendResult",
    "DomainEventProtocol",
    "EventStoreProtocol",
    "InlineProjectionProtocol",
    "ReadStreamResult",
    "RecordedEvent",
    "DuplicateEventTypeError",
    "EventStoreError",
    "ExpectedVersionConflictError",
    "UnknownEventTypeError",
    "InMemoryEventStore",
    "EventTypeRegistry",
]

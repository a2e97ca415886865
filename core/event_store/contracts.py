"""
GSL Event Store — Contracts
=============================
Storage-agnostic shapes shared by every event store implementation.

Versioning:
- A stream's version is the number of events it holds.
- A stream that was never written is at STREAM_DOES_NOT_EXIST (0).
- stream_position of the n-th event is n (1-based).
- append_to_stream(expected_stream_version=v) succeeds only if the
  stream is still at v. Otherwise ExpectedVersionConflictError.

Inline projections registered on a store run inside the append's
consistency boundary. When append returns, they have been applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Optional, Protocol, Sequence, runtime_checkable


STREAM_DOES_NOT_EXIST = 0


# ══════════════════════════════════════════════════════════════
# DOMAIN EVENT PROTOCOL
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class DomainEventProtocol(Protocol):
    """
    What an event class must provide to be stored.

    event_type is the namespaced wire name (engine.domain.action.vN).
    to_payload() must return JSON-safe primitives only.
    """

    event_type: ClassVar[str]

    def to_payload(self) -> dict[str, Any]:
        ...

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DomainEventProtocol":
        ...


# ══════════════════════════════════════════════════════════════
# RECORDED EVENT (envelope)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RecordedEvent:
    """
    A domain event as it sits in a stream.

    Fields:
        stream_id:       Stream the event belongs to.
        stream_position: 1-based position inside the stream.
        event_type:      Namespaced type string.
        data:            The domain event object.
        recorded_at:     When the store accepted it.
        global_position: Store-wide ordering, if the backend has one.
    """

    stream_id: str
    stream_position: int
    event_type: str
    data: Any
    recorded_at: datetime
    global_position: Optional[int] = None


@dataclass(frozen=True)
class ReadStreamResult:
    events: tuple[RecordedEvent, ...]
    current_stream_version: int

    @property
    def stream_exists(self) -> bool:
        return self.current_stream_version > STREAM_DOES_NOT_EXIST


@dataclass(frozen=True)
class AppendResult:
    next_expected_stream_version: int
    created_new_stream: bool
    events: tuple[RecordedEvent, ...] = ()


# ══════════════════════════════════════════════════════════════
# INLINE PROJECTION PROTOCOL
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class InlineProjectionProtocol(Protocol):
    """
    A projection the store applies in the same unit of work as an append.

    apply() receives the events just committed for ONE stream,
    in commit order, and a document store bound to the same
    consistency boundary.
    """

    @property
    def projection_name(self) -> str: ...

    def apply(
        self,
        document_store: Any,
        stream_id: str,
        events: Sequence[RecordedEvent],
    ) -> None:
        ...


# ══════════════════════════════════════════════════════════════
# EVENT STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class EventStoreProtocol(Protocol):
    """Per-stream append-only log with optimistic concurrency."""

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        """Full ordered history of one stream and its current version."""
        ...

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_stream_version: int,
    ) -> AppendResult:
        """
        Append all events or none.

        Raises ExpectedVersionConflictError if the stream moved.
        """
        ...

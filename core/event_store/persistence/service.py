"""
GSL Event Store — Django Persistence Service
==============================================
The single controlled write path for persisting stream events.

Append flow (NON-NEGOTIABLE):
    1. Serialize events through the type registry
    2. Open transaction.atomic()
    3. Lock stream head, compare with expected version
    4. Insert rows at the next positions
    5. Apply inline projections (same transaction)
    6. Commit — or roll everything back

If ANY step fails → nothing is written, the read model included.

This service does NOT:
- Retry on conflict (the command handler owns the retry loop)
- Interpret payload meaning
- Swallow database errors
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from django.db import IntegrityError, transaction

from core.event_store.contracts import (
    STREAM_DOES_NOT_EXIST,
    AppendResult,
    InlineProjectionProtocol,
    ReadStreamResult,
    RecordedEvent,
)
from core.event_store.errors import ExpectedVersionConflictError
from core.event_store.models import StreamEvent
from core.event_store.persistence.repository import (
    get_stream_version,
    insert_stream_events,
    list_stream_ids,
    load_stream_rows,
)
from core.event_store.registry import EventTypeRegistry
from core.time.clock import Clock, get_default_clock

logger = logging.getLogger("gsl.events")

STREAM_POSITION_CONSTRAINT = "uq_evt_stream_position"


def _extract_constraint_name(exc: IntegrityError) -> str | None:
    cause = getattr(exc, "__cause__", None)
    diag = getattr(cause, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if isinstance(constraint_name, str) and constraint_name:
        return constraint_name
    return None


def _is_stream_position_conflict(exc: IntegrityError) -> bool:
    if _extract_constraint_name(exc) == STREAM_POSITION_CONSTRAINT:
        return True
    message = str(exc)
    # SQLite reports columns, PostgreSQL reports the constraint name.
    return (
        STREAM_POSITION_CONSTRAINT in message
        or "stream_position" in message
    )


class DjangoEventStore:
    """
    Event store backed by the gsl_stream_events table.

    Usage:
        store = DjangoEventStore(
            registry,
            projections=[guest_stay_details_projection],
        )
        result = store.read_stream(stream_id)
        store.append_to_stream(stream_id, events, result.current_stream_version)

    Inline projections write through a document store that lives in the
    same database, so they commit or roll back with the events.
    """

    def __init__(
        self,
        registry: EventTypeRegistry,
        *,
        projections: Sequence[InlineProjectionProtocol] = (),
        document_store: Any = None,
        clock: Optional[Clock] = None,
    ):
        if projections and document_store is None:
            from core.read_store.repository import DjangoDocumentStore

            document_store = DjangoDocumentStore()
        self._registry = registry
        self._projections = tuple(projections)
        self._document_store = document_store
        self._clock = clock

    def _to_recorded(self, row: StreamEvent, data: Any = None) -> RecordedEvent:
        if data is None:
            data = self._registry.deserialize(row.event_type, row.payload)
        return RecordedEvent(
            stream_id=row.stream_id,
            stream_position=int(row.stream_position),
            event_type=row.event_type,
            data=data,
            recorded_at=row.recorded_at,
            global_position=row.global_position,
        )

    # ══════════════════════════════════════════════════════════
    # READ
    # ══════════════════════════════════════════════════════════

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        rows = load_stream_rows(stream_id)
        events = tuple(self._to_recorded(row) for row in rows)
        return ReadStreamResult(
            events=events,
            current_stream_version=len(events),
        )

    def stream_ids(self) -> tuple[str, ...]:
        return tuple(list_stream_ids())

    # ══════════════════════════════════════════════════════════
    # APPEND
    # ══════════════════════════════════════════════════════════

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_stream_version: int,
    ) -> AppendResult:
        if not events:
            raise ValueError("append_to_stream requires at least one event.")

        typed_payloads = [self._registry.serialize(event) for event in events]
        recorded_at = (self._clock or get_default_clock()).now_utc()

        try:
            with transaction.atomic():
                current_version = get_stream_version(stream_id, lock=True)
                if current_version != expected_stream_version:
                    raise ExpectedVersionConflictError(
                        stream_id, expected_stream_version, current_version
                    )

                rows = insert_stream_events(
                    stream_id,
                    current_version + 1,
                    typed_payloads,
                    recorded_at,
                )
                recorded = tuple(
                    self._to_recorded(row, data=event)
                    for row, event in zip(rows, events)
                )

                for projection in self._projections:
                    projection.apply(self._document_store, stream_id, recorded)

        except IntegrityError as exc:
            if not _is_stream_position_conflict(exc):
                raise
            actual_version = get_stream_version(stream_id)
            logger.info(
                f"Append conflict on {stream_id} detected at database "
                f"level: expected {expected_stream_version}, "
                f"actual {actual_version}"
            )
            raise ExpectedVersionConflictError(
                stream_id, expected_stream_version, actual_version
            ) from exc

        except ExpectedVersionConflictError as exc:
            logger.info(
                f"Append conflict on {stream_id}: expected "
                f"{exc.expected_version}, actual {exc.actual_version}"
            )
            raise

        next_version = expected_stream_version + len(recorded)
        logger.debug(
            f"Appended {len(recorded)} event(s) to {stream_id}, "
            f"now at version {next_version}"
        )
        return AppendResult(
            next_expected_stream_version=next_version,
            created_new_stream=expected_stream_version == STREAM_DOES_NOT_EXIST,
            events=recorded,
        )

"""
GSL Event Store — In-Memory Implementation
=============================================
List-backed stream log for tests, local runs and the smoke adapter.

One lock guards version check → append → inline projections,
so a concurrent writer can never observe a half-applied append.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Sequence

from core.event_store.contracts import (
    STREAM_DOES_NOT_EXIST,
    AppendResult,
    InlineProjectionProtocol,
    ReadStreamResult,
    RecordedEvent,
)
from core.event_store.errors import ExpectedVersionConflictError
from core.time.clock import Clock, get_default_clock

logger = logging.getLogger("gsl.events")


class InMemoryEventStore:
    """
    Thread-safe in-memory event store.

    Usage:
        documents = InMemoryDocumentStore()
        store = InMemoryEventStore(
            projections=[guest_stay_details_projection],
            document_store=documents,
        )
        store.append_to_stream("stream-1", [event], expected_stream_version=0)
    """

    def __init__(
        self,
        *,
        projections: Sequence[InlineProjectionProtocol] = (),
        document_store: Any = None,
        clock: Optional[Clock] = None,
    ):
        if projections and document_store is None:
            raise ValueError("Inline projections require a document_store.")
        self._streams: dict[str, list[RecordedEvent]] = {}
        self._global_position = 0
        self._projections = tuple(projections)
        self._document_store = document_store
        self._clock = clock
        self._lock = threading.Lock()

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        with self._lock:
            events = tuple(self._streams.get(stream_id, ()))
        return ReadStreamResult(
            events=events,
            current_stream_version=len(events),
        )

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_stream_version: int,
    ) -> AppendResult:
        if not events:
            raise ValueError("append_to_stream requires at least one event.")

        clock = self._clock or get_default_clock()

        with self._lock:
            stream = self._streams.get(stream_id, [])
            current_version = len(stream)
            if current_version != expected_stream_version:
                logger.info(
                    f"Append conflict on {stream_id}: expected "
                    f"{expected_stream_version}, actual {current_version}"
                )
                raise ExpectedVersionConflictError(
                    stream_id, expected_stream_version, current_version
                )

            recorded_at = clock.now_utc()
            recorded = []
            for offset, event in enumerate(events, start=1):
                self._global_position += 1
                recorded.append(
                    RecordedEvent(
                        stream_id=stream_id,
                        stream_position=current_version + offset,
                        event_type=type(event).event_type,
                        data=event,
                        recorded_at=recorded_at,
                        global_position=self._global_position,
                    )
                )

            # Projections first: a failing projection leaves the stream untouched.
            for projection in self._projections:
                projection.apply(self._document_store, stream_id, recorded)

            self._streams[stream_id] = stream + recorded

        next_version = current_version + len(recorded)
        logger.debug(
            f"Appended {len(recorded)} event(s) to {stream_id}, "
            f"now at version {next_version}"
        )
        return AppendResult(
            next_expected_stream_version=next_version,
            created_new_stream=current_version == STREAM_DOES_NOT_EXIST,
            events=tuple(recorded),
        )

    def stream_ids(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._streams)

    @property
    def event_count(self) -> int:
        with self._lock:
            return sum(len(stream) for stream in self._streams.values())

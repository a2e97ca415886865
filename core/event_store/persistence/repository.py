"""
GSL Event Store - Persistence Repository
========================================
Low-level ORM helpers used by the Django event store.
The caller owns transactions and concurrency checks.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from core.event_store.models import StreamEvent


def get_stream_version(stream_id: str, *, lock: bool = False) -> int:
    """
    Current version of a stream (0 if it was never written).

    lock=True takes a row lock on the stream head so concurrent
    appenders on backends that support it queue behind each other.
    """
    query = (
        StreamEvent.objects.filter(stream_id=stream_id)
        .order_by("-stream_position")
        .values_list("stream_position", flat=True)
    )
    if lock:
        query = query.select_for_update()
    head = query.first()
    return 0 if head is None else int(head)


def insert_stream_events(
    stream_id: str,
    first_position: int,
    typed_payloads: Sequence[tuple[str, dict]],
    recorded_at: datetime,
) -> list[StreamEvent]:
    """Insert rows in order. IntegrityError on a taken position."""
    rows = []
    for offset, (event_type, payload) in enumerate(typed_payloads):
        row = StreamEvent(
            stream_id=stream_id,
            stream_position=first_position + offset,
            event_type=event_type,
            payload=payload,
            recorded_at=recorded_at,
        )
        row.save(force_insert=True)
        rows.append(row)
    return rows


def load_stream_rows(stream_id: str) -> tuple[StreamEvent, ...]:
    """
    Load one stream in deterministic replay order.

    Ordering rule:
        stream_position ASC
    """
    return tuple(
        StreamEvent.objects.filter(stream_id=stream_id).order_by("stream_position")
    )


def list_stream_ids() -> list[str]:
    """Every stream that holds at least one event, in first-write order."""
    first_rows = (
        StreamEvent.objects.filter(stream_position=1)
        .order_by("global_position")
        .values_list("stream_id", flat=True)
    )
    return list(first_rows)

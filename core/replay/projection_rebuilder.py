"""
GSL Replay — Projection Rebuilder
===================================
Rebuilds single-stream read documents from the event store.

Rebuild flow (per stream):
    1. Read the full stream
    2. Fold every handled event from the initial state
    3. Overwrite the document, tagged with the last position

Rules:
- Documents are disposable — they can always be rebuilt from events
- Rebuild uses the same evolve as live projection
- Rebuild MUST NOT append events
- dry_run reads and folds but writes nothing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from core.event_store.contracts import EventStoreProtocol
from core.projections.single_stream import SingleStreamProjection
from core.read_store.contracts import StoredDocument
from core.replay.errors import EmptyStreamError

logger = logging.getLogger("gsl.replay")


# ══════════════════════════════════════════════════════════════
# REBUILD RESULT
# ══════════════════════════════════════════════════════════════

@dataclass
class RebuildResult:
    """Structured result of one stream rebuild."""

    projection_name: str
    stream_id: str
    events_replayed: int = 0
    document: Optional[StoredDocument] = None
    dry_run: bool = False

    @property
    def document_version(self) -> int:
        return self.document.version if self.document is not None else 0


# ══════════════════════════════════════════════════════════════
# STREAM REBUILD
# ══════════════════════════════════════════════════════════════

def rebuild_stream_projection(
    event_store: EventStoreProtocol,
    document_store: Any,
    projection: SingleStreamProjection,
    stream_id: str,
    dry_run: bool = False,
) -> RebuildResult:
    """
    Rebuild one stream's document from its full history.

    Raises:
        EmptyStreamError if the stream has never been written.
    """
    stream = event_store.read_stream(stream_id)
    if not stream.stream_exists:
        raise EmptyStreamError(stream_id)

    handled = [event for event in stream.events if projection.handles(event)]
    result = RebuildResult(
        projection_name=projection.projection_name,
        stream_id=stream_id,
        events_replayed=len(handled),
        dry_run=dry_run,
    )

    if dry_run:
        logger.info(
            f"Dry-run rebuild of {projection.projection_name} for "
            f"{stream_id}: {len(handled)} event(s) would be folded"
        )
        return result

    result.document = projection.rebuild(document_store, stream_id, stream.events)
    logger.info(
        f"Rebuilt {projection.projection_name} for {stream_id} "
        f"at version {result.document_version}"
    )
    return result


def rebuild_projection(
    event_store: Any,
    document_store: Any,
    projection: SingleStreamProjection,
    stream_ids: Optional[Iterable[str]] = None,
    dry_run: bool = False,
) -> list[RebuildResult]:
    """
    Rebuild many streams. Without stream_ids, every stream the store
    knows about is rebuilt (the store must expose stream_ids()).
    """
    if stream_ids is None:
        stream_ids = event_store.stream_ids()

    results = [
        rebuild_stream_projection(
            event_store, document_store, projection, stream_id, dry_run=dry_run
        )
        for stream_id in stream_ids
    ]
    logger.info(
        f"Projection rebuild complete: {projection.projection_name} — "
        f"{len(results)} stream(s)"
    )
    return results

"""
GSL Core Projections — Single-Stream Document Projection
===========================================================
Folds one stream's events into one document keyed by the stream id.

Doctrine:
- The read-side evolve is a pure fold, like the write side.
- A document remembers the stream position it was built from
  (`version`). Events at or below that position are skipped, so
  re-applying a batch is a no-op (safe under at-least-once delivery).
- No business rules live here. The projection records what the
  events say happened; it never decides.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence

from core.event_store.contracts import RecordedEvent
from core.read_store.contracts import StoredDocument

logger = logging.getLogger("gsl.projections")


class SingleStreamProjection:
    """
    Inline projection for per-stream read documents.

    Args:
        projection_name: Unique name (logging, rebuilds).
        collection_name: Document collection written to.
        evolve:          (state, event) → state, pure.
        initial_state:   () → state before the first event.
        can_handle:      Event types this projection consumes.
        to_document:     state → dict, or None while nothing exists yet.
        from_document:   dict → state.
    """

    def __init__(
        self,
        *,
        projection_name: str,
        collection_name: str,
        evolve: Callable[[Any, Any], Any],
        initial_state: Callable[[], Any],
        can_handle: Iterable[str],
        to_document: Callable[[Any], Optional[dict]],
        from_document: Callable[[dict], Any],
    ):
        self._projection_name = projection_name
        self._collection_name = collection_name
        self._evolve = evolve
        self._initial_state = initial_state
        self._can_handle = frozenset(can_handle)
        self._to_document = to_document
        self._from_document = from_document

    @property
    def projection_name(self) -> str:
        return self._projection_name

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def event_types(self) -> frozenset[str]:
        return self._can_handle

    def handles(self, event: RecordedEvent) -> bool:
        return event.event_type in self._can_handle

    def fold(self, events: Sequence[RecordedEvent], state: Any = None) -> Any:
        """Pure fold of handled events, starting from `state` or initial."""
        if state is None:
            state = self._initial_state()
        for event in events:
            if self.handles(event):
                state = self._evolve(state, event.data)
        return state

    # ══════════════════════════════════════════════════════════
    # INLINE APPLY (incremental)
    # ══════════════════════════════════════════════════════════

    def apply(
        self,
        document_store: Any,
        stream_id: str,
        events: Sequence[RecordedEvent],
    ) -> Optional[StoredDocument]:
        handled = [event for event in events if self.handles(event)]
        if not handled:
            return None

        existing = document_store.find_by_id(self._collection_name, stream_id)
        if existing is None:
            state = self._initial_state()
            version = 0
        else:
            state = self._from_document(existing.data)
            version = existing.version

        pending = [event for event in handled if event.stream_position > version]
        if not pending:
            logger.debug(
                f"{self._projection_name}: {stream_id} already at "
                f"version {version}, nothing to apply"
            )
            return existing

        state = self.fold(pending, state)
        return self._store(document_store, stream_id, state, pending[-1].stream_position)

    # ══════════════════════════════════════════════════════════
    # REBUILD (from scratch)
    # ══════════════════════════════════════════════════════════

    def rebuild(
        self,
        document_store: Any,
        stream_id: str,
        events: Sequence[RecordedEvent],
    ) -> Optional[StoredDocument]:
        """Fold full history from the initial state and overwrite."""
        handled = [event for event in events if self.handles(event)]
        if not handled:
            return None
        state = self.fold(handled)
        return self._store(document_store, stream_id, state, handled[-1].stream_position)

    def _store(
        self,
        document_store: Any,
        stream_id: str,
        state: Any,
        version: int,
    ) -> Optional[StoredDocument]:
        data = self._to_document(state)
        if data is None:
            return None
        stored = document_store.upsert(
            self._collection_name,
            stream_id,
            data,
            version,
        )
        logger.debug(
            f"{self._projection_name}: {stream_id} projected at version {version}"
        )
        return stored

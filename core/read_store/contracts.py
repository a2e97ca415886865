"""
GSL Read Store — Contracts
============================
Document store for projected read models.

Every document is keyed by (collection, document_id) and tagged with
the stream version it was built from. Documents are disposable:
they can always be rebuilt from the event store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class StoredDocument:
    collection: str
    document_id: str
    data: dict[str, Any] = field(default_factory=dict)
    version: int = 0


@runtime_checkable
class DocumentStoreProtocol(Protocol):

    def upsert(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        version: int,
    ) -> StoredDocument:
        ...

    def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> Optional[StoredDocument]:
        ...

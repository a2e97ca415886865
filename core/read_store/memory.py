"""
GSL Read Store — In-Memory Implementation
===========================================
Dict-backed document store for tests and local runs.
Stored data is deep-copied on the way in and out so callers
can never mutate a stored document in place.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Optional

from core.read_store.contracts import StoredDocument


class InMemoryDocumentStore:

    def __init__(self) -> None:
        self._documents: dict[tuple[str, str], StoredDocument] = {}
        self._lock = threading.Lock()

    def upsert(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        version: int,
    ) -> StoredDocument:
        stored = StoredDocument(
            collection=collection,
            document_id=document_id,
            data=copy.deepcopy(data),
            version=version,
        )
        with self._lock:
            self._documents[(collection, document_id)] = stored
        return stored

    def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> Optional[StoredDocument]:
        with self._lock:
            stored = self._documents.get((collection, document_id))
        if stored is None:
            return None
        return StoredDocument(
            collection=stored.collection,
            document_id=stored.document_id,
            data=copy.deepcopy(stored.data),
            version=stored.version,
        )

    def count(self, collection: str) -> int:
        with self._lock:
            return sum(1 for key in self._documents if key[0] == collection)

"""
GSL Read Store — Public API
=============================
The Django-backed store is imported from core.read_store.repository.
"""

from core.read_store.contracts import DocumentStoreProtocol, StoredDocument
from core.read_store.memory import InMemoryDocumentStore

__all__ = ["DocumentStoreProtocol", "StoredDocument", "InMemoryDocumentStore"]

"""
GSL Read Store — Django Repository
====================================
Document store over the gsl_projected_documents table.

upsert() does not open its own transaction: when called from an
inline projection it joins the event store's append transaction.
"""

from __future__ import annotations

from typing import Any, Optional

from core.read_store.contracts import StoredDocument
from core.read_store.models import ProjectedDocument


def _to_stored(row: ProjectedDocument) -> StoredDocument:
    return StoredDocument(
        collection=row.collection,
        document_id=row.document_id,
        data=dict(row.data),
        version=int(row.version),
    )


class DjangoDocumentStore:

    def upsert(
        self,
        collection: str,
        document_id: str,
        data: dict[str, Any],
        version: int,
    ) -> StoredDocument:
        row, _ = ProjectedDocument.objects.update_or_create(
            collection=collection,
            document_id=document_id,
            defaults={"data": data, "version": version},
        )
        return _to_stored(row)

    def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> Optional[StoredDocument]:
        row = ProjectedDocument.objects.filter(
            collection=collection,
            document_id=document_id,
        ).first()
        if row is None:
            return None
        return _to_stored(row)

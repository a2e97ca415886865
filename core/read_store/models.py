"""
GSL Read Store — Projected Document Model
===========================================
One row per (collection, document_id).

Rows are written ONLY by projections, inside the event store's
append transaction. Nothing else updates them.
"""

from django.db import models


class ProjectedDocument(models.Model):

    collection = models.CharField(
        max_length=255,
        help_text="Read model name (e.g. GuestStayDetails).",
    )

    document_id = models.CharField(
        max_length=512,
        help_text="Document key, equal to the source stream id.",
    )

    data = models.JSONField(
        default=dict,
        help_text="Projected document body.",
    )

    version = models.PositiveBigIntegerField(
        default=0,
        help_text="Stream position of the last event folded into data.",
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gsl_projected_documents"
        constraints = [
            models.UniqueConstraint(
                fields=("collection", "document_id"),
                name="uq_doc_collection_id",
            ),
        ]

    def __str__(self):
        return f"{self.collection}/{self.document_id} (v{self.version})"

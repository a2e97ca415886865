"""
GSL Event Store — Stream Event Model
======================================
Engine: Event Store (Core Infrastructure)

This is the ONLY writable record of truth.
All account state is derived by folding these rows.

RULES (NON-NEGOTIABLE):
- No deletes, no overwrites, no updates after persistence
- (stream_id, stream_position) is unique — this is the
  optimistic concurrency guard at the database level
- stream_position is 1-based and gap-free per stream
- Payload structure is governed by event_type

This file contains NO business logic.
"""

import uuid

from django.db import models


class StreamEvent(models.Model):
    """
    One immutable event inside one stream.

    Field groups:
        Ordering (global + per stream)
        Identity & Classification
        Payload
        Temporal
    """

    # ── Ordering ──────────────────────────────────────────────
    global_position = models.BigAutoField(
        primary_key=True,
        help_text="Store-wide append order.",
    )

    stream_id = models.CharField(
        max_length=512,
        help_text="Stream key (e.g. guest stay account id).",
    )

    stream_position = models.PositiveBigIntegerField(
        help_text="1-based position of this event inside its stream.",
    )

    # ── Identity & Classification ─────────────────────────────
    event_id = models.UUIDField(
        default=uuid.uuid4,
        unique=True,
        editable=False,
        help_text="Unique event identifier.",
    )

    event_type = models.CharField(
        max_length=255,
        help_text=(
            "Namespaced event type from registry. "
            "Format: engine.domain.action.vN."
        ),
    )

    # ── Payload ───────────────────────────────────────────────
    payload = models.JSONField(
        help_text="Event payload. Structure governed by event_type.",
    )

    # ── Temporal ──────────────────────────────────────────────
    recorded_at = models.DateTimeField(
        help_text="When the Event Store accepted this event.",
    )

    class Meta:
        db_table = "gsl_stream_events"
        ordering = ["global_position"]
        constraints = [
            models.UniqueConstraint(
                fields=("stream_id", "stream_position"),
                name="uq_evt_stream_position",
            ),
        ]
        indexes = [
            models.Index(
                fields=["event_type"],
                name="idx_evt_type",
            ),
        ]

    # ══════════════════════════════════════════════════════════
    # IMMUTABILITY GUARDS
    # ══════════════════════════════════════════════════════════

    def save(self, *args, **kwargs):
        """GUARD: INSERT only. No updates to persisted events."""
        if not self._state.adding:
            raise PermissionError(
                "Events are immutable. Cannot update a persisted event."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """GUARD: Events are NEVER deleted."""
        raise PermissionError("Events are never deleted.")

    def __str__(self):
        return f"[{self.event_type}] {self.stream_id}@{self.stream_position}"

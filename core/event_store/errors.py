"""
GSL Event Store — Errors
==========================
Error types for the append-only stream log.

ExpectedVersionConflictError is the ONLY transient error.
Everything else is an infrastructure failure and propagates.
"""


class EventStoreError(Exception):
    """Base error for all event store operations."""
    pass


class ExpectedVersionConflictError(EventStoreError):
    """Another writer advanced the stream since it was read."""

    def __init__(self, stream_id: str, expected_version: int, actual_version: int):
        self.stream_id = stream_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Stream '{stream_id}' is at version {actual_version}, "
            f"expected {expected_version}."
        )


class UnknownEventTypeError(EventStoreError):
    """Stored event_type has no registered event class."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' is not registered. "
            f"Register its class before reading streams that contain it."
        )


class DuplicateEventTypeError(EventStoreError):
    """Two event classes claim the same event_type."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Event type '{event_type}' is already registered.")

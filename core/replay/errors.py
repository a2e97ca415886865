"""
GSL Replay — Errors
=====================
Error types for the projection rebuild layer.
"""


class ReplayError(Exception):
    """Base error for all replay operations."""
    pass


class EmptyStreamError(ReplayError):
    """Rebuild requested for a stream that holds no events."""

    def __init__(self, stream_id: str):
        self.stream_id = stream_id
        super().__init__(
            f"Cannot rebuild from stream '{stream_id}': it has no events."
        )

"""
GSL Replay - Public API
=======================
Event Store = truth archive.
Replay = rebuild read documents from it.
Replay must never change history.
"""

from core.replay.errors import EmptyStreamError, ReplayError
from core.replay.projection_rebuilder import (
    RebuildResult,
    rebuild_projection,
    rebuild_stream_projection,
)

__all__ = [
    "EmptyStreamError",
    "RebuildResult",
    "ReplayError",
    "rebuild_projection",
    "rebuild_stream_projection",
]

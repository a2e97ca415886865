"""
GSL Event Store Persistence public API.
"""

from core.event_store.persistence.service import DjangoEventStore
from core.event_store.persistence.repository import (
    get_stream_version,
    list_stream_ids,
    load_stream_rows,
)

__all__ = [
    "DjangoEventStore",
    "get_stream_version",
    "list_stream_ids",
    "load_stream_rows",
]

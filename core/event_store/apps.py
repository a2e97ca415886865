"""
GSL Core — Event Store App Configuration
==========================================
The Event Store is the immutable record of every stay account.

This app:
- Persists ordered, per-stream events
- Enforces optimistic concurrency on append
- Applies inline projections inside the append transaction

This app does NOT:
- Interpret event meaning
- Make decisions
- Retry conflicts (that is the command handler's job)
"""

from django.apps import AppConfig


class EventStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.event_store"
    label = "event_store"
    verbose_name = "GSL Event Store"

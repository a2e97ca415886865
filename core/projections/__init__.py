"""
GSL Core Projections
======================
Read models derived from events and kept in a document store.

Doctrine: Projections are disposable, derived from events,
and rebuilt deterministically.
"""

from core.projections.single_stream import SingleStreamProjection

__all__ = ["SingleStreamProjection"]

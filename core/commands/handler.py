"""
GSL Command Layer — Command Handler
======================================
Runs one decision against one stream under optimistic concurrency.

Cycle (per attempt):
    1. read_stream(stream_id)          → history + version v
    2. state = fold(evolve, initial)   → current state
    3. events = decide(state)          → tuple of new events
    4. append_to_stream(..., v)        → or ExpectedVersionConflictError

On a version conflict the WHOLE cycle runs again against fresh
history. The decision is never replayed against stale state.
After max_attempts conflicts → ConcurrencyRetriesExhausted.

DecisionRejected and storage errors are never retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from core.commands.errors import ConcurrencyRetriesExhausted
from core.event_store.contracts import (
    STREAM_DOES_NOT_EXIST,
    EventStoreProtocol,
    RecordedEvent,
)
from core.event_store.errors import ExpectedVersionConflictError

logger = logging.getLogger("gsl.commands")

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class HandleResult:
    new_events: tuple[Any, ...]
    next_expected_stream_version: int
    created_new_stream: bool


class CommandHandler:
    """
    Generic load → decide → append runner.

    Args:
        evolve:        (state, event) → state. Pure.
        initial_state: () → state of a stream with no events.
        max_attempts:  Total attempts including the first (>= 1).

    Usage:
        handler = CommandHandler(evolve=evolve, initial_state=initial_state)
        result = handler.handle(
            store, stream_id, lambda state: record_charge(command, state)
        )
    """

    def __init__(
        self,
        evolve: Callable[[Any, Any], Any],
        initial_state: Callable[[], Any],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if not isinstance(max_attempts, int) or isinstance(max_attempts, bool):
            raise TypeError("max_attempts must be an int.")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self._evolve = evolve
        self._initial_state = initial_state
        self._max_attempts = max_attempts

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def aggregate(self, events: Sequence[RecordedEvent]) -> Any:
        state = self._initial_state()
        for recorded in events:
            state = self._evolve(state, recorded.data)
        return state

    def handle(
        self,
        event_store: EventStoreProtocol,
        stream_id: str,
        decide: Callable[[Any], Sequence[Any]],
    ) -> HandleResult:
        for attempt in range(1, self._max_attempts + 1):
            stream = event_store.read_stream(stream_id)
            state = self.aggregate(stream.events)

            new_events = tuple(decide(state))
            if not new_events:
                return HandleResult(
                    new_events=(),
                    next_expected_stream_version=stream.current_stream_version,
                    created_new_stream=False,
                )

            try:
                appended = event_store.append_to_stream(
                    stream_id,
                    new_events,
                    stream.current_stream_version,
                )
            except ExpectedVersionConflictError as exc:
                logger.warning(
                    f"Concurrency conflict on {stream_id} "
                    f"(attempt {attempt}/{self._max_attempts}): "
                    f"expected {exc.expected_version}, "
                    f"actual {exc.actual_version}"
                )
                continue

            if attempt > 1:
                logger.info(
                    f"Command on {stream_id} succeeded after {attempt} attempts"
                )
            return HandleResult(
                new_events=new_events,
                next_expected_stream_version=appended.next_expected_stream_version,
                created_new_stream=(
                    stream.current_stream_version == STREAM_DOES_NOT_EXIST
                ),
            )

        logger.error(
            f"Giving up on {stream_id} after {self._max_attempts} conflicting attempts"
        )
        raise ConcurrencyRetriesExhausted(stream_id, self._max_attempts)

"""Newest-first feed of realtime session events with batch subscriptions."""

from __future__ import annotations

from collections import deque
import logging
from typing import Any, Callable, Deque, Iterable, Mapping

LOGGER = logging.getLogger(__name__)

SessionEvent = Mapping[str, Any]
FeedListener = Callable[[list[SessionEvent]], None]


class EventFeed:
    """Ordered event buffer; index 0 is the newest event, index -1 the oldest."""

    def __init__(self, maxlen: int = 1000) -> None:
        self._maxlen = maxlen
        self._events: Deque[SessionEvent] = deque()
        self._listeners: list[FeedListener] = []

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> list[SessionEvent]:
        return list(self._events)

    @property
    def newest(self) -> SessionEvent | None:
        return self._events[0] if self._events else None

    @property
    def oldest(self) -> SessionEvent | None:
        return self._events[-1] if self._events else None

    def subscribe(self, listener: FeedListener) -> Callable[[], None]:
        """Register ``listener`` for every new batch; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def push(self, event: SessionEvent) -> None:
        self.extend([event])

    def extend(self, batch: Iterable[SessionEvent]) -> None:
        """Add events in arrival order and notify listeners once for the batch."""

        added = 0
        for event in batch:
            if len(self._events) >= self._maxlen:
                dropped = self._events.pop()
                LOGGER.warning("Event feed full; dropping oldest %s event.", dropped.get("type"))
            self._events.appendleft(event)
            added += 1
        if not added:
            return
        snapshot = self.events
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001 - keep the reader alive for later events
                LOGGER.exception("Event feed listener failed")

    def clear(self) -> None:
        self._events.clear()

"""Caller-owned cache of events keyed by id."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..core import Event

logger = logging.getLogger(__name__)

EventLoader = Callable[[int], Optional[Event]]


class EventCache:
    """Memoize event lookups for one caller.

    Each page, request or job creates its own instance; entries live only as
    long as the owner keeps the cache around and can be dropped with
    :meth:`invalidate` once the event changes.
    """

    def __init__(self, loader: EventLoader | None = None, events: Iterable[Event] = ()):
        self.loader = loader
        self._events: dict[int, Event] = {}
        for event in events:
            self.put(event)

    def get(self, event_id: int) -> Event | None:
        return self._events.get(event_id)

    def put(self, event: Event) -> Event:
        self._events[event.id] = event
        return event

    def get_or_load(self, event_id: int) -> Event:
        cached = self._events.get(event_id)
        if cached is not None:
            return cached
        if self.loader is None:
            raise LookupError(f"Event {event_id} is not cached and no loader is configured")

        logger.debug("Loading event %s", event_id)
        event = self.loader(event_id)
        if event is None:
            raise LookupError(f"Event {event_id} could not be loaded")
        return self.put(event)

    def invalidate(self, event_id: int) -> None:
        self._events.pop(event_id, None)

    def clear(self) -> None:
        self._events.clear()

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def __len__(self) -> int:
        return len(self._events)

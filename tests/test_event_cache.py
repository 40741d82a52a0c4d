from __future__ import annotations

import pytest

from innhopp_console.core import Event
from innhopp_console.services.event_cache import EventCache


class CountingLoader:
    def __init__(self, events):
        self.events = {event.id: event for event in events}
        self.calls: list[int] = []

    def __call__(self, event_id):
        self.calls.append(event_id)
        return self.events.get(event_id)


def test_put_and_get():
    cache = EventCache()
    event = Event(id=4, name="Lofoten")

    cache.put(event)

    assert cache.get(4) is event
    assert 4 in cache
    assert len(cache) == 1
    assert cache.get(5) is None


def test_get_or_load_memoizes():
    loader = CountingLoader([Event(id=1, name="Boogie")])
    cache = EventCache(loader)

    first = cache.get_or_load(1)
    second = cache.get_or_load(1)

    assert first is second
    assert loader.calls == [1]


def test_invalidate_forces_reload():
    loader = CountingLoader([Event(id=1, name="Boogie")])
    cache = EventCache(loader)
    cache.get_or_load(1)

    cache.invalidate(1)
    cache.invalidate(42)
    cache.get_or_load(1)

    assert loader.calls == [1, 1]


def test_clear_empties_cache():
    cache = EventCache(events=[Event(id=1), Event(id=2)])
    cache.clear()
    assert len(cache) == 0


def test_missing_loader_raises_lookup_error():
    with pytest.raises(LookupError):
        EventCache().get_or_load(1)


def test_loader_returning_nothing_raises_lookup_error():
    cache = EventCache(CountingLoader([]))
    with pytest.raises(LookupError):
        cache.get_or_load(3)
    assert 3 not in cache


def test_instances_do_not_share_entries():
    first = EventCache(events=[Event(id=1)])
    second = EventCache()
    assert 1 in first
    assert 1 not in second

"""
Shared fixtures: an in-memory store, a controllable clock and a service
wired to both.
"""

from datetime import date, timedelta

import pytest

from config import StreakSource
from core.database import KeyValueStore, MemoryStore, StorageError, TrackerDatabase
from services.tracker_service import TrackerService

# A Friday; the week to date runs from Sunday 2024-03-10
TODAY = date(2024, 3, 15)


class FakeClock:
    """Clock that only moves when told to"""

    def __init__(self, day: date):
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> None:
        self.day += timedelta(days=days)


class FailingStore(KeyValueStore):
    """Store whose writes always fail"""

    def __init__(self, items=None):
        self.items = dict(items or {})

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        raise StorageError("quota exceeded")

    def remove_item(self, key):
        raise StorageError("quota exceeded")


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FakeClock(TODAY)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def database(store):
    return TrackerDatabase(store)


@pytest.fixture
def service(database, clock):
    return TrackerService(database, clock=clock, streak_source=StreakSource.COMBINED)


@pytest.fixture
def service_factory(database, clock):
    def factory(streak_source=StreakSource.COMBINED, history_days=365):
        return TrackerService(database, clock=clock, streak_source=streak_source,
                              history_days=history_days)
    return factory

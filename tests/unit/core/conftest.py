"""Shared fixtures for core unit tests"""

from datetime import datetime, timezone

import pytest

from snipbin.core.engine import DocumentEngine
from snipbin.core.names import NameGenerator
from snipbin.crud.memory_repo import MemoryStore


NOW = datetime(2024, 5, 17, 12, 30, 45, tzinfo=timezone.utc)

WORDS = ("cornflake", "peddling", "zebra", "quartz")


class Clock:
    """Settable clock so expiration tests don't depend on wall time."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(name="clock")
def clock_fixture():
    return Clock()


@pytest.fixture(name="store")
def store_fixture():
    return MemoryStore()


@pytest.fixture(name="engine")
def engine_fixture(store, clock):
    return DocumentEngine(store, names=NameGenerator(WORDS), clock=clock)

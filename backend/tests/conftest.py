"""
Pytest configuration and fixtures for backend tests.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

# Select the in-memory store and readable logs before any app module is imported.
os.environ.setdefault("RATINGS_STORE", "memory")
os.environ.setdefault("LOG_FORMAT", "simple")

from site_ratings.lib.ratings import InMemoryRatingStore, RatingsClient  # noqa: E402

BASE_TIME = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start - step
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


@pytest.fixture
def clock():
    """Clock starting at 2024-06-15 12:00:00 UTC."""
    return SteppingClock()


@pytest.fixture
def memory_store(clock):
    """Empty in-memory ratings store."""
    return InMemoryRatingStore(clock=clock)


@pytest.fixture
def ratings_client(memory_store):
    """RatingsClient over the in-memory store, without retry delays."""
    return RatingsClient(memory_store, retry_delay_seconds=0)

"""Shared configuration for contract tests.

Contract tests exercise the HTTP surface through FastAPI's TestClient with
the store and email dependencies swapped out via ``dependency_overrides``.
"""

import pytest
from fastapi.testclient import TestClient

from site_ratings.api.dependencies import (
    get_email_sender,
    get_rating_store,
    get_ratings_client,
)
from site_ratings.lib.exceptions import StoreError
from site_ratings.lib.ratings import InMemoryRatingStore, RatingsClient, RatingStore


class FailingRatingStore(RatingStore):
    """Store that rejects every operation."""

    async def select_all(self):
        raise StoreError("permission denied for table ratings")

    async def insert_one(self, row):
        raise StoreError("permission denied for table ratings")


@pytest.fixture
def app():
    from main import app

    yield app
    app.dependency_overrides.clear()


def install_store(app, store):
    app.dependency_overrides[get_rating_store] = lambda: store
    app.dependency_overrides[get_ratings_client] = lambda: RatingsClient(
        store, retry_delay_seconds=0
    )


@pytest.fixture
def api_store():
    return InMemoryRatingStore()


@pytest.fixture
def client(app, api_store):
    """TestClient backed by an empty in-memory store."""
    install_store(app, api_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_client(app):
    """TestClient whose store rejects every call."""
    install_store(app, FailingRatingStore())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def override_email_sender(app):
    """Install an email sender double and return it."""

    def install(sender):
        app.dependency_overrides[get_email_sender] = lambda: sender
        return sender

    return install

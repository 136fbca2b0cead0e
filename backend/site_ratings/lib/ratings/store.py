"""Ratings store contract, in-memory backend and backend selection."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from site_ratings.lib.exceptions import ConfigurationError, StoreError

logger = logging.getLogger(__name__)

RATINGS_COLLECTION = "ratings"

Row = Dict[str, Any]


class RatingStore(ABC):
    """Contract implemented by each ratings persistence backend.

    Backends own ``id`` and ``created_at``; callers only ever send
    ``rating`` and ``comment``. Connection failures must surface as
    ``StoreConnectionError`` so the retry wrapper can recognise them.
    """

    collection = RATINGS_COLLECTION

    @property
    def backend_name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def select_all(self) -> List[Row]:
        """Return every row, newest ``created_at`` first."""

    @abstractmethod
    async def insert_one(self, row: Row) -> Row:
        """Insert ``row`` and return it as stored, with id and created_at."""


class InMemoryRatingStore(RatingStore):
    """Process-local store for tests and local development."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._rows: List[Row] = []
        self._sequence = itertools.count()

    async def select_all(self) -> List[Row]:
        ordered = sorted(
            self._rows,
            key=lambda row: (row["created_at"], row["_seq"]),
            reverse=True,
        )
        return [{k: v for k, v in row.items() if k != "_seq"} for row in ordered]

    async def insert_one(self, row: Row) -> Row:
        stored = {
            "id": str(uuid4()),
            "rating": row["rating"],
            "comment": row.get("comment"),
            "created_at": self._clock(),
            "_seq": next(self._sequence),
        }
        self._rows.append(stored)
        return {k: v for k, v in stored.items() if k != "_seq"}


class UnavailableRatingStore(RatingStore):
    """Stands in when the configured backend could not be built.

    Every call fails with a non-transient ``StoreError`` so routes answer
    with their usual error bodies instead of crashing.
    """

    def __init__(self, reason: str):
        self.reason = reason

    async def select_all(self) -> List[Row]:
        raise StoreError(f"Ratings store unavailable: {self.reason}")

    async def insert_one(self, row: Row) -> Row:
        raise StoreError(f"Ratings store unavailable: {self.reason}")


def build_rating_store(backend: Optional[str] = None) -> RatingStore:
    """Create the store backend named by ``backend`` or RATINGS_STORE."""
    from site_ratings import config

    backend = backend or config.get_store_backend()

    if backend == "memory":
        logger.info("Using in-memory ratings store")
        return InMemoryRatingStore()

    if backend == "rest":
        from site_ratings.lib.ratings.rest_store import RestRatingStore

        base_url = config.get_supabase_url()
        api_key = config.get_supabase_key()
        if not base_url or not api_key:
            raise ConfigurationError(
                "RATINGS_STORE=rest requires SUPABASE_URL and SUPABASE_KEY"
            )
        logger.info('Using REST ratings store at %s', base_url)
        return RestRatingStore(
            base_url=base_url,
            api_key=api_key,
            timeout_seconds=config.get_store_timeout_seconds(),
        )

    from site_ratings.lib.ratings.sql_store import SqlRatingStore

    logger.info("Using SQL ratings store")
    return SqlRatingStore()

"""RatingsClient: fetch, create and summarise ratings.

Every public method returns an ``ApiResponse`` and never raises. Store calls
go through the retry wrapper; whatever escapes it is turned into ``error``.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from site_ratings.lib.ratings.retry import MAX_ATTEMPTS, RETRY_DELAY_SECONDS, with_retry
from site_ratings.lib.ratings.store import RatingStore
from site_ratings.lib.ratings.summary import summarize_ratings
from site_ratings.schemas.ratings import ApiResponse, Rating, RatingCreate, RatingSummary

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


def _error_message(error: BaseException) -> str:
    return str(error) or UNKNOWN_ERROR


class RatingsClient:
    """Ratings operations over an injected store.

    The client holds no state between calls; concurrent calls are
    independent of each other.
    """

    def __init__(
        self,
        store: RatingStore,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay_seconds: float = RETRY_DELAY_SECONDS,
    ):
        """Initialize RatingsClient.

        Args:
            store: Persistence backend for the ratings collection
            max_attempts: Total attempts per store call
            retry_delay_seconds: Constant pause after a transient failure
        """
        self.store = store
        self.max_attempts = max_attempts
        self.retry_delay_seconds = retry_delay_seconds

    async def _with_retry(self, operation, name: str):
        return await with_retry(
            operation,
            max_attempts=self.max_attempts,
            delay_seconds=self.retry_delay_seconds,
            operation_name=name,
        )

    async def fetch_ratings(self) -> ApiResponse[List[Rating]]:
        """Fetch all ratings, newest first, each with a derived ``timestamp``.

        Rows that do not parse as a rating are logged and left out.

        Returns:
            ``{data: ratings}`` on success, ``{data: [], error}`` on failure.
        """
        try:
            logger.debug('Fetching ratings from %s', self.store.backend_name)
            rows = await self._with_retry(self.store.select_all, "fetch_ratings")
            ratings = []
            for row in rows or []:
                try:
                    ratings.append(Rating.model_validate(row).with_timestamp())
                except ValidationError as e:
                    logger.warning(
                        'Skipping malformed rating row %s: %s',
                        row.get("id") if isinstance(row, dict) else None,
                        e.errors(),
                    )
            logger.info('Fetched %d ratings', len(ratings))
            return ApiResponse[List[Rating]](data=ratings)
        except Exception as e:
            logger.error('Failed to fetch ratings: %s', e, exc_info=True)
            return ApiResponse[List[Rating]](data=[], error=_error_message(e))

    async def create_rating(
        self, rating: Union[RatingCreate, Dict[str, Any]]
    ) -> ApiResponse[Rating]:
        """Insert a rating with exactly ``rating`` and ``comment``.

        ``id`` and ``created_at`` are left to the store.

        Returns:
            ``{data: inserted}`` on success; on failure a placeholder rating
            with ``error`` set.
        """
        try:
            payload = RatingCreate.model_validate(rating)
            row = {"rating": payload.rating, "comment": payload.comment}

            async def insert():
                return await self.store.insert_one(row)

            inserted = await self._with_retry(insert, "create_rating")
            created = Rating.model_validate(inserted)
            logger.info('Created rating %s', created.id, extra={"rating": created.rating})
            return ApiResponse[Rating](data=created)
        except Exception as e:
            logger.error('Failed to create rating: %s', e, exc_info=True)
            return ApiResponse[Rating](data=Rating.placeholder(), error=_error_message(e))

    async def get_rating_summary(
        self, now: Optional[datetime] = None
    ) -> ApiResponse[RatingSummary]:
        """Summarise a fresh fetch of all ratings.

        ``error`` is always None. A failed fetch or a failed aggregation both
        yield the all-zero summary, which looks the same as having no
        ratings at all.

        Args:
            now: Reference time for the monthly count (default: local now)
        """
        result = await self.fetch_ratings()

        if result.error is not None or not result.data:
            if result.error is not None:
                logger.warning('Returning empty rating summary after fetch error: %s', result.error)
            return ApiResponse[RatingSummary](data=RatingSummary.empty(), error=None)

        try:
            summary = summarize_ratings(result.data, now=now)
            logger.info(
                'Generated rating summary',
                extra={"total": summary.total, "average": summary.average, "monthly": summary.monthly},
            )
            return ApiResponse[RatingSummary](data=summary, error=None)
        except Exception as e:
            logger.error('Rating summary aggregation failed: %s', e, exc_info=True)
            return ApiResponse[RatingSummary](data=RatingSummary.empty(), error=None)

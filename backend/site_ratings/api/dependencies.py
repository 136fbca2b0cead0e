"""FastAPI dependency providers.

Tests swap these out through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from site_ratings.lib.exceptions import ConfigurationError
from site_ratings.lib.mailer import EmailSender
from site_ratings.lib.ratings import (
    RatingsClient,
    RatingStore,
    UnavailableRatingStore,
    build_rating_store,
)

logger = logging.getLogger(__name__)


@lru_cache()
def get_rating_store() -> RatingStore:
    """Configured store backend, built once per process.

    A misconfigured backend is replaced by ``UnavailableRatingStore`` so the
    ratings routes keep their error contracts.
    """
    try:
        return build_rating_store()
    except ConfigurationError as e:
        logger.error('Ratings store misconfigured: %s', e)
        return UnavailableRatingStore(str(e))


def get_ratings_client(store: RatingStore = Depends(get_rating_store)) -> RatingsClient:
    """RatingsClient over the configured store."""
    return RatingsClient(store)


def get_email_sender() -> EmailSender:
    """EmailSender using the configured addresses."""
    return EmailSender()

"""Ratings library: retry wrapper, store backends, client and summary.

Components:
    - retry: bounded retry on transient store connection failures
    - store: RatingStore contract, in-memory backend, backend selection
    - sql_store: SQLAlchemy backend
    - rest_store: PostgREST/Supabase backend over httpx
    - summary: total/average/monthly/distribution aggregation
    - client: RatingsClient, the never-raising public API
"""

from .client import RatingsClient
from .retry import MAX_ATTEMPTS, RETRY_DELAY_SECONDS, is_transient_error, with_retry
from .store import InMemoryRatingStore, RatingStore, UnavailableRatingStore, build_rating_store
from .summary import summarize_ratings

__all__ = [
    "InMemoryRatingStore",
    "MAX_ATTEMPTS",
    "RETRY_DELAY_SECONDS",
    "RatingStore",
    "RatingsClient",
    "UnavailableRatingStore",
    "build_rating_store",
    "is_transient_error",
    "summarize_ratings",
    "with_retry",
]

"""Pydantic schemas for ratings.

Defines the stored rating shape, the creation payload, the derived summary
and the tagged ``{data, error}`` envelope returned by the ratings client.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")

# Closed key set for the distribution histogram.
RATING_SCORES = (1, 2, 3, 4, 5)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def empty_distribution() -> Dict[int, int]:
    """Return a histogram with every score bucket at zero."""
    return dict.fromkeys(RATING_SCORES, 0)


class Rating(BaseModel):
    """One submitted review, as stored.

    ``id`` and ``created_at`` are always assigned by the store. ``timestamp``
    is derived from ``created_at`` when reading and is never persisted.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Opaque store-assigned identifier")
    rating: Union[int, float] = Field(..., description="Star rating, 1-5 expected")
    comment: Optional[str] = Field(default=None, description="Optional free-text comment")
    created_at: datetime = Field(..., description="Store-assigned insertion time")
    timestamp: Optional[int] = Field(
        default=None,
        description="Epoch milliseconds derived from created_at at read time",
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Stores may hand back integer or UUID keys; expose them as strings."""
        if v is None:
            return v
        return str(v)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps from the store are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def placeholder(cls) -> "Rating":
        """Structurally valid but meaningless rating returned alongside errors."""
        return cls(id="", rating=0, comment=None, created_at=EPOCH)

    def with_timestamp(self) -> "Rating":
        """Copy of this rating with ``timestamp`` derived from ``created_at``."""
        millis = (self.created_at - EPOCH) // timedelta(milliseconds=1)
        return self.model_copy(update={"timestamp": millis})


class RatingCreate(BaseModel):
    """Payload for submitting a rating.

    There is deliberately no ``id`` or ``created_at`` here; unknown keys in
    the request body are dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"examples": [{"rating": 4, "comment": "great"}]},
    )

    rating: Union[int, float] = Field(..., description="Star rating, 1-5 expected")
    comment: Optional[str] = Field(default=None, description="Optional free-text comment")


class RatingSummary(BaseModel):
    """Aggregate view over all ratings, recomputed on every request."""

    total: int = Field(default=0, description="Number of ratings in the store")
    average: float = Field(default=0, description="Mean rating rounded to 2 decimals")
    monthly: int = Field(default=0, description="Ratings created in the current calendar month")
    distribution: Dict[int, int] = Field(
        default_factory=empty_distribution,
        description="Count per rounded score, keys 1..5",
    )

    @classmethod
    def empty(cls) -> "RatingSummary":
        """All-zero summary used for no data and for degraded results."""
        return cls(total=0, average=0, monthly=0, distribution=empty_distribution())


class ApiResponse(BaseModel, Generic[T]):
    """Tagged result: callers check ``error`` before trusting ``data``."""

    data: T
    error: Optional[str] = None


class RatingListResponse(BaseModel):
    """Response body for GET /api/ratings."""

    data: List[Rating]


class RatingCreatedResponse(BaseModel):
    """Response body for POST /api/ratings."""

    data: Rating


class ErrorResponse(BaseModel):
    """Response body for failed ratings requests."""

    error: str = Field(..., examples=["Failed to fetch ratings"])

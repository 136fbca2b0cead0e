"""Pydantic request/response schemas."""

from .contact import ContactResponse, ContactSubmission
from .ratings import (
    ApiResponse,
    ErrorResponse,
    Rating,
    RatingCreate,
    RatingCreatedResponse,
    RatingListResponse,
    RatingSummary,
    RATING_SCORES,
    empty_distribution,
)

__all__ = [
    "ApiResponse",
    "ContactResponse",
    "ContactSubmission",
    "ErrorResponse",
    "Rating",
    "RatingCreate",
    "RatingCreatedResponse",
    "RatingListResponse",
    "RatingSummary",
    "RATING_SCORES",
    "empty_distribution",
]

"""Ratings API endpoints.

Thin HTTP wrappers over RatingsClient: the client never raises, so these
routes only map its ``error`` field onto status codes.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from site_ratings.api.dependencies import get_ratings_client
from site_ratings.lib.ratings import RatingsClient
from site_ratings.schemas.ratings import (
    ApiResponse,
    ErrorResponse,
    RatingCreate,
    RatingCreatedResponse,
    RatingListResponse,
    RatingSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.get(
    "",
    response_model=RatingListResponse,
    responses={500: {"model": ErrorResponse, "description": "Store unavailable"}},
    summary="List all ratings, newest first",
)
async def list_ratings(
    response: Response,
    client: RatingsClient = Depends(get_ratings_client),
):
    """Return every rating ordered by ``created_at`` descending."""
    result = await client.fetch_ratings()

    if result.error is not None:
        logger.error('GET /api/ratings failed: %s', result.error)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch ratings"},
        )

    response.headers["Access-Control-Allow-Origin"] = "*"
    return RatingListResponse(data=result.data)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RatingCreatedResponse,
    responses={500: {"model": ErrorResponse, "description": "Insert failed"}},
    summary="Submit a rating",
)
async def create_rating(
    submission: RatingCreate,
    client: RatingsClient = Depends(get_ratings_client),
):
    """Store a new rating. Score range is not checked here."""
    result = await client.create_rating(submission)

    if result.error is not None:
        logger.error('POST /api/ratings failed: %s', result.error)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to create rating"},
        )

    return RatingCreatedResponse(data=result.data)


@router.get(
    "/summary",
    response_model=ApiResponse[RatingSummary],
    summary="Rating summary for display",
)
async def get_rating_summary(
    client: RatingsClient = Depends(get_ratings_client),
) -> ApiResponse[RatingSummary]:
    """Total, average, monthly count and distribution. Never an error."""
    return await client.get_rating_summary()

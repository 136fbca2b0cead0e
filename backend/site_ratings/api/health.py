"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from site_ratings import __version__, config
from site_ratings.api.dependencies import get_rating_store
from site_ratings.lib.ratings import RatingStore

router = APIRouter()


@router.get("/health")
async def health_check_endpoint(store: RatingStore = Depends(get_rating_store)) -> Dict[str, Any]:
    """Report service identity and which store backend is configured."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "Site Ratings API",
        "version": __version__,
        "environment": config.get_app_env(),
        "base_url": config.get_base_url(),
        "store": store.backend_name,
    }

"""Main FastAPI application for the site ratings backend."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from site_ratings import __version__, config
from site_ratings.api import contact, health, ratings
from site_ratings.api.dependencies import get_rating_store
from site_ratings.lib.ratings import UnavailableRatingStore
from site_ratings.lib.logging_config import configure_logging, create_request_context_middleware

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    store = get_rating_store()
    logger.info(
        "Starting Site Ratings API",
        extra={
            "environment": config.get_app_env(),
            "base_url": config.get_base_url(),
            "store_backend": store.backend_name,
        },
    )
    if isinstance(store, UnavailableRatingStore):
        logger.error("Ratings store unavailable - ratings routes will answer with errors: %s", store.reason)
    if not config.get_resend_api_key():
        logger.warning("RESEND_API_KEY is not set - contact emails will fail")

    yield

    logger.info("Shutting down Site Ratings API...")


app = FastAPI(
    title="Site Ratings API",
    description="Visitor star ratings, rating summaries and contact email",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map request validation errors onto each API's error contract.

    - POST /api/ratings answers 500 ``{error}`` like any other failed insert.
    - /api/contact answers 400 with per-field details.
    - Everything else keeps FastAPI's default 422.
    """
    if request.url.path.startswith("/api/ratings") and request.method == "POST":
        logger.warning('Rejected rating submission: %s', exc.errors())
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to create rating"},
        )

    if request.url.path.startswith("/api/contact"):
        details = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            details.append({"field": field, "message": error["msg"]})

        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Validation error",
                "details": details,
            },
        )

    return await request_validation_exception_handler(request, exc)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)
create_request_context_middleware(app)

app.include_router(ratings.router)
app.include_router(contact.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Site Ratings API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=config.is_dev_mode())

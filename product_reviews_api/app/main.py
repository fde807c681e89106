"""
Main entrypoint for the Product Reviews API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn product_reviews_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import ReviewAppError
from .core.logging_config import setup_logging
from .core.review_store import JsonReviewStore, build_review_store
from .services.shopify_client import ShopifyProductClient


def register_error_handlers(app: FastAPI) -> None:
    """Render service errors as ``{"error": ...}`` with their status code."""
    logger = logging.getLogger(__name__)

    @app.exception_handler(ReviewAppError)
    async def handle_service_error(request: Request, exc: ReviewAppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(
    review_store: Optional[JsonReviewStore] = None,
    shopify_client: Optional[ShopifyProductClient] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    ``review_store`` and ``shopify_client`` default to the instances
    described by ``settings``; pass your own to point the app at a
    different collection file or upstream transport.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.review_store = review_store or build_review_store()
    app.state.shopify_client = shopify_client or ShopifyProductClient()

    register_error_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    logging.getLogger(__name__).info("Review collection at %s", app.state.review_store.path)
    return app


# Created at import time so that uvicorn can discover it without
# calling create_app manually.
app = create_app()

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_logging_settings
from app.schemas.health import HealthResponse

APP_TITLE = "Hospitality Metrics API"
APP_VERSION = "1.0.0"


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_logging_settings().level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The API is stateless: every request carries the records it reports on.
    """

    _configure_logging()

    application = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
    )

    from app.api.routers import messages_router, metrics_router

    application.include_router(metrics_router)
    application.include_router(messages_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="healthy", service="hospitality-metrics", version=APP_VERSION)

    logging.getLogger(__name__).info("Application created with %d routes", len(application.routes))
    return application


app = create_app()

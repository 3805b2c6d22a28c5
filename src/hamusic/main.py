"""FastAPI application factory and server entry point."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hamusic.api.exception_handlers import register_exception_handlers
from hamusic.api.routers import api_router, health
from hamusic.config import Settings, get_settings
from hamusic.infrastructure.lifecycle import lifespan
from hamusic.infrastructure.observability import (
    RequestLoggingMiddleware,
    configure_logging,
)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        app_name=settings.app_name,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware runs in reverse order of registration: request logging sees every
    # response, including CORS preflights.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID", "X-Skipped-Records"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api.prefix)
    app.include_router(health.router)

    return app


def run() -> None:
    """Run the API server with uvicorn (console script `hamusic`)."""
    settings = get_settings()
    uvicorn.run(
        "hamusic.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()

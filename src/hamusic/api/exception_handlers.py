"""Custom exception handlers for FastAPI application.

This module registers global exception handlers that convert domain exceptions
and validation errors into proper HTTP responses with appropriate status codes.
All bodies have the shape {"detail": ...}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hamusic.domain.exceptions import (
    ConfigurationError,
    EntityNotFoundException,
    ExternalServiceError,
    InvalidInputError,
    NoVideoError,
    ResolutionFailedError,
)

logger = logging.getLogger(__name__)


# Hey future me - exc.errors() can contain the raw request body as bytes in the 'input' field,
# which JSONResponse can't serialize. Walk the structure and decode any bytes we find.
def _sanitize_validation_errors(
    errors: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Sanitize validation errors by converting bytes to strings.

    Args:
        errors: List of validation error dictionaries from Pydantic

    Returns:
        Sanitized list where bytes are converted to strings
    """

    def _sanitize_value(value: Any) -> Any:
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError:
                return value.decode("latin-1")
        elif isinstance(value, dict):
            return {k: _sanitize_value(v) for k, v in value.items()}
        elif isinstance(value, list | tuple):
            return [_sanitize_value(item) for item in value]
        return value

    return [_sanitize_value(error) for error in errors]


def _detail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


# Hey future me, these handlers are GLOBAL. Register them in create_app() before the first
# request. The mapping is: bad input -> 400, missing artist or YouTube item -> 404,
# missing credentials or upstream failure -> 500. Anything not listed here is a bug and
# surfaces as a plain 500 via Starlette.
def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain exceptions and request validation errors.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(EntityNotFoundException)
    async def entity_not_found_exception_handler(
        request: Request, exc: EntityNotFoundException
    ) -> JSONResponse:
        """Handle entity not found exceptions with 404 Not Found."""
        logger.info(
            "Entity not found at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": exc.entity_id,
            },
        )
        return _detail(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(ResolutionFailedError)
    async def resolution_failed_handler(
        request: Request, exc: ResolutionFailedError
    ) -> JSONResponse:
        """Handle YouTube lookups without a result with 404 Not Found."""
        logger.info(
            "Resolution failed at %s: %s",
            request.url.path,
            exc.message,
            extra={
                "path": request.url.path,
                "resource_type": exc.resource_type,
                "resource_id": exc.resource_id,
            },
        )
        return _detail(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        """Handle unusable input with 400 Bad Request."""
        logger.warning(
            "Invalid input at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return _detail(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(NoVideoError)
    async def no_video_handler(request: Request, exc: NoVideoError) -> JSONResponse:
        """Handle playback of an artist without video with 400 Bad Request."""
        logger.info(
            "No video for artist %s at %s",
            exc.artist_id,
            request.url.path,
            extra={"path": request.url.path, "artist_id": exc.artist_id},
        )
        return _detail(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Handle missing credentials with 500 Internal Server Error."""
        logger.error(
            "Configuration error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        """Handle upstream failures with 500 Internal Server Error."""
        logger.error(
            "External service error at %s: %s",
            request.url.path,
            exc.message,
            extra={
                "path": request.url.path,
                "error": exc.message,
                "upstream_status": exc.status_code,
            },
        )
        return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed or incomplete request bodies with 400 Bad Request."""
        sanitized_errors = _sanitize_validation_errors(list(exc.errors()))

        logger.warning(
            "Request validation error at %s: %s",
            request.url.path,
            sanitized_errors,
            extra={"path": request.url.path, "errors": sanitized_errors},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": sanitized_errors},
        )

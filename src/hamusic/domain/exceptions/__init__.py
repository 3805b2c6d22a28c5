"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so the exception handlers can put
    # it straight into the response body. Don't raise this directly, use a subclass so
    # callers (and the HTTP layer) can tell the failure modes apart.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found.

    HTTP Status: 404
    """

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidInputError(DomainException):
    """Input could not be used (malformed URL, empty name, unmatched link).

    HTTP Status: 400

    Example:
        raise InvalidInputError("Invalid YouTube URL: https://example.com")
    """

    pass


class NoVideoError(DomainException):
    """Playback was requested for an artist without a video.

    HTTP Status: 400
    """

    def __init__(self, artist_id: int) -> None:
        super().__init__("No video available")
        self.artist_id = artist_id


class ResolutionFailedError(DomainException):
    """The metadata service answered, but had no matching item.

    HTTP Status: 404 on /youtube/video. Swallowed per entry in bulk import.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(f"YouTube {resource_type} {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConfigurationError(DomainException):
    """Required configuration (API key, token) is missing.

    HTTP Status: 500

    Example:
        raise ConfigurationError("YouTube API key not set")
    """

    pass


class ExternalServiceError(DomainException):
    """External service (YouTube, Home Assistant) returned an error or was unreachable.

    HTTP Status: 500

    Example:
        raise ExternalServiceError("YouTube API error: 403")
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "DomainException",
    "EntityNotFoundException",
    "InvalidInputError",
    "NoVideoError",
    "ResolutionFailedError",
    "ConfigurationError",
    "ExternalServiceError",
]

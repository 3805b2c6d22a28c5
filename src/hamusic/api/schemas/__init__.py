"""API request/response schemas."""

from hamusic.api.schemas.artists import (
    ArtistCreateRequest,
    ArtistResponse,
    ArtistUpdateRequest,
    BulkImportItem,
    BulkImportResponse,
    DeleteResponse,
    PlayResponse,
    ResolvedVideoSchema,
)

__all__ = [
    "ArtistCreateRequest",
    "ArtistResponse",
    "ArtistUpdateRequest",
    "BulkImportItem",
    "BulkImportResponse",
    "DeleteResponse",
    "PlayResponse",
    "ResolvedVideoSchema",
]

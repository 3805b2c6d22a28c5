"""Application use cases - Business logic orchestration."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")


class UseCase(ABC, Generic[TRequest, TResponse]):
    """Base class for all use cases following command pattern."""

    @abstractmethod
    async def execute(self, request: TRequest) -> TResponse:
        """Execute the use case with the given request."""
        pass


# Import concrete use cases (after UseCase definition to avoid circular imports)
from hamusic.application.use_cases.bulk_import import (  # noqa: E402
    BulkImportArtistsUseCase,
    BulkImportEntry,
    BulkImportRequest,
    BulkImportResponse,
)
from hamusic.application.use_cases.seed_catalog import (  # noqa: E402
    SeedCatalogRequest,
    SeedCatalogResponse,
    SeedCatalogUseCase,
    SeedEntry,
)

__all__ = [
    "BulkImportArtistsUseCase",
    "BulkImportEntry",
    "BulkImportRequest",
    "BulkImportResponse",
    "SeedCatalogRequest",
    "SeedCatalogResponse",
    "SeedCatalogUseCase",
    "SeedEntry",
    "UseCase",
]

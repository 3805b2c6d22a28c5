"""Use case for importing many artists from (name, YouTube URL) pairs.

Hey future me - this is a PARTIAL-SUCCESS batch. Every entry is resolved on its own;
an entry whose URL is garbage, points at a deleted video or trips a YouTube error is
skipped and we carry on with the next one. Skipped entries are NOT an error for the
caller - they come back in `skipped` so the UI can show what didn't make it.

All network work happens before we touch the store. The writes then go through
ArtistRepository.add_many(), which allocates ids from one in-memory copy of the
index and writes the index once at the end.
"""

import logging
from dataclasses import dataclass, field

from hamusic.application.services.youtube_resolver import YouTubeResolver
from hamusic.application.use_cases import UseCase
from hamusic.domain.entities import Artist, ArtistDraft, VideoLink
from hamusic.domain.exceptions import (
    ExternalServiceError,
    InvalidInputError,
    ResolutionFailedError,
)
from hamusic.domain.ports import IArtistRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkImportEntry:
    """One artist to import."""

    name: str
    url: str


@dataclass
class BulkImportRequest:
    """Request to import a list of artists."""

    entries: list[BulkImportEntry] = field(default_factory=list)


@dataclass
class BulkImportResponse:
    """Artists that were added, plus names of entries that were skipped."""

    added: list[Artist] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class BulkImportArtistsUseCase(UseCase[BulkImportRequest, BulkImportResponse]):
    """Resolve each entry's URL and store the ones that resolve."""

    def __init__(self, resolver: YouTubeResolver, repository: IArtistRepository) -> None:
        """Initialize the use case.

        Args:
            resolver: YouTube resolver for the entry URLs
            repository: Artist repository to write to
        """
        self._resolver = resolver
        self._repository = repository

    async def execute(self, request: BulkImportRequest) -> BulkImportResponse:
        """Import all entries that resolve.

        Raises:
            ConfigurationError: If no YouTube API key is set (nothing is imported)
        """
        self._resolver.ensure_configured()

        drafts: list[ArtistDraft] = []
        skipped: list[str] = []
        for entry in request.entries:
            if not entry.name or not entry.name.strip():
                logger.info("Skipping bulk entry without name (%s)", entry.url)
                skipped.append(entry.name)
                continue
            try:
                video = await self._resolver.resolve(entry.url)
            except (InvalidInputError, ResolutionFailedError, ExternalServiceError) as e:
                logger.info("Skipping bulk entry '%s': %s", entry.name, e.message)
                skipped.append(entry.name)
                continue

            drafts.append(
                ArtistDraft(
                    name=entry.name,
                    avatar=video.thumbnail,
                    video=VideoLink(url=entry.url),
                )
            )

        added = await self._repository.add_many(drafts)
        logger.info(
            "Bulk import finished: %d added, %d skipped", len(added), len(skipped)
        )
        return BulkImportResponse(added=added, skipped=skipped)

"""Use case for seeding the catalog from a JSON export."""

import logging
from dataclasses import dataclass, field

from hamusic.application.services.youtube_resolver import (
    YouTubeResolver,
    parse_youtube_url,
)
from hamusic.application.use_cases import UseCase
from hamusic.domain.entities import Artist, ArtistDraft, ReferenceKind, ResolvedVideo
from hamusic.domain.exceptions import ExternalServiceError, InvalidInputError
from hamusic.domain.ports import IArtistRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedEntry:
    """One row of the seed file: {"name": ..., "youtube": ...}."""

    name: str
    youtube: str


@dataclass
class SeedCatalogRequest:
    """Request to seed the catalog."""

    entries: list[SeedEntry] = field(default_factory=list)


@dataclass
class SeedCatalogResponse:
    """Seed report."""

    added: list[Artist] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class SeedCatalogUseCase(UseCase[SeedCatalogRequest, SeedCatalogResponse]):
    """Create artists with avatars from a list of names and YouTube links.

    Unlike the bulk import this only asks YouTube for thumbnails (snippet only).
    Video links become a ResolvedVideo titled after the artist; playlist links
    only contribute the avatar and leave the artist without a video.
    """

    def __init__(self, resolver: YouTubeResolver, repository: IArtistRepository) -> None:
        """Initialize the use case.

        Args:
            resolver: YouTube resolver for avatar lookups
            repository: Artist repository to write to
        """
        self._resolver = resolver
        self._repository = repository

    async def execute(self, request: SeedCatalogRequest) -> SeedCatalogResponse:
        """Seed all entries with a usable YouTube link.

        Raises:
            ConfigurationError: If no YouTube API key is set
        """
        self._resolver.ensure_configured()

        drafts: list[ArtistDraft] = []
        skipped: list[str] = []
        for entry in request.entries:
            try:
                reference = parse_youtube_url(entry.youtube, prefer_video=True)
                if reference.kind is ReferenceKind.VIDEO:
                    avatar = await self._resolver.thumbnail_for(reference.id)
                else:
                    avatar = await self._resolver.playlist_thumbnail_for(reference.id)
            except (InvalidInputError, ExternalServiceError) as e:
                logger.warning("Skipping seed entry '%s': %s", entry.name, e.message)
                skipped.append(entry.name)
                continue

            video = None
            if reference.kind is ReferenceKind.VIDEO:
                video = ResolvedVideo(
                    youtube_id=reference.id,
                    title=entry.name,
                    duration="",
                    thumbnail=avatar or "",
                )
            drafts.append(ArtistDraft(name=entry.name, avatar=avatar or "", video=video))

        added = await self._repository.add_many(drafts) if drafts else []
        logger.info("Seeded %d artists, skipped %d", len(added), len(skipped))
        return SeedCatalogResponse(added=added, skipped=skipped)

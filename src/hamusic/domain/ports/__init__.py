"""Domain ports (interfaces) for infrastructure adapters."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from hamusic.domain.entities import Artist, ArtistDraft


@dataclass
class ArtistListing:
    """Artists returned by a list/search call plus how many records were dropped."""

    artists: list[Artist] = field(default_factory=list)
    skipped: int = 0


class IKeyValueStore(ABC):
    """Persistent string key-value store."""

    # Hey future me - the store is the ONLY shared mutable state in the app. write_lock is
    # the in-process serialization point for read-modify-write sequences (index updates).
    # It does NOT protect against a second process writing the same store.
    write_lock: asyncio.Lock

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get value for key, None if absent."""
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key. Deleting a missing key is a no-op."""
        pass


class IArtistRepository(ABC):
    """Repository for artist records and the artist id index."""

    @abstractmethod
    async def list_ids(self) -> list[int]:
        """Read the id index."""
        pass

    @abstractmethod
    async def save_ids(self, ids: Sequence[int]) -> None:
        """Overwrite the id index."""
        pass

    @abstractmethod
    async def get(self, artist_id: int) -> Artist:
        """Get an artist by id."""
        pass

    @abstractmethod
    async def list_all(self) -> ArtistListing:
        """List all artists sorted by name."""
        pass

    @abstractmethod
    async def search(self, query: str) -> ArtistListing:
        """Find artists whose name contains query."""
        pass

    @abstractmethod
    async def add(self, draft: ArtistDraft) -> Artist:
        """Create an artist with the next free id."""
        pass

    @abstractmethod
    async def add_many(self, drafts: Sequence[ArtistDraft]) -> list[Artist]:
        """Create several artists with a single index write."""
        pass

    @abstractmethod
    async def edit(self, artist_id: int, patch: dict[str, Any]) -> Artist:
        """Merge patch fields into an existing artist."""
        pass

    @abstractmethod
    async def remove(self, artist_id: int) -> None:
        """Delete an artist and drop it from the index."""
        pass


class IYouTubeClient(ABC):
    """YouTube Data API v3 client."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the client has an API key."""
        pass

    @abstractmethod
    async def search_videos(self, query: str, max_results: int) -> list[dict[str, Any]]:
        """Search videos, returns raw `search` items."""
        pass

    @abstractmethod
    async def get_videos(
        self, video_ids: Sequence[str], parts: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Fetch videos by id, returns raw `videos` items."""
        pass

    @abstractmethod
    async def get_playlist_items(
        self, playlist_id: str, max_results: int
    ) -> list[dict[str, Any]]:
        """Fetch playlist items, returns raw `playlistItems` items."""
        pass

    @abstractmethod
    async def get_playlists(self, playlist_id: str) -> list[dict[str, Any]]:
        """Fetch playlist snippets, returns raw `playlists` items."""
        pass


class IMediaPlayerClient(ABC):
    """Media player command service."""

    @abstractmethod
    async def turn_on(self, entity_id: str) -> int:
        """Power on the device, returns the HTTP status code."""
        pass

    @abstractmethod
    async def play_media(
        self, entity_id: str, content_id: str, content_type: str = "url"
    ) -> int:
        """Start playing media on the device, returns the HTTP status code."""
        pass


__all__ = [
    "ArtistListing",
    "IArtistRepository",
    "IKeyValueStore",
    "IMediaPlayerClient",
    "IYouTubeClient",
]

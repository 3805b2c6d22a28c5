"""YouTube Data API v3 HTTP client."""

import logging
from collections.abc import Sequence
from typing import Any, cast

import httpx

from hamusic.config import YouTubeSettings
from hamusic.domain.exceptions import ConfigurationError, ExternalServiceError
from hamusic.domain.ports import IYouTubeClient
from hamusic.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)


class YouTubeClient(IYouTubeClient):
    """Thin wrapper over the search, videos, playlistItems and playlists endpoints.

    Returns the raw `items` lists. Turning them into domain objects is the
    resolver's job.
    """

    def __init__(
        self, settings: YouTubeSettings, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """
        Initialize YouTube client.

        Args:
            settings: YouTube configuration settings
            http_client: Client to send requests with. Defaults to the shared pool.
        """
        self.settings = settings
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = await HttpClientPool.get_client(timeout=self.settings.timeout)
        return self._client

    def is_configured(self) -> bool:
        """Check if an API key is set."""
        return self.settings.is_configured()

    # Hey future me, every endpoint goes through here. The key goes in the query string
    # (that's how the Data API wants it), so NEVER log the full request URL - log the
    # path instead. Non-2xx answers (quota exceeded is a 403!) become ExternalServiceError.
    async def _get(self, endpoint: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Call a Data API endpoint and return its items.

        Raises:
            ConfigurationError: If no API key is configured
            ExternalServiceError: If the request fails or returns a non-success status
        """
        if not self.is_configured():
            raise ConfigurationError("YouTube API key not set")

        client = await self._get_client()
        url = f"{self.settings.base_url.rstrip('/')}/{endpoint}"
        try:
            response = await client.get(
                url,
                params={**params, "key": self.settings.api_key},
                timeout=self.settings.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("YouTube %s request failed: %s", endpoint, e)
            raise ExternalServiceError(f"YouTube API request failed: {e}") from e

        if response.is_error:
            logger.warning(
                "YouTube %s returned %d",
                endpoint,
                response.status_code,
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise ExternalServiceError(
                f"YouTube API error: {response.status_code}",
                status_code=response.status_code,
            )

        data = response.json()
        return cast(list[dict[str, Any]], data.get("items") or [])

    async def search_videos(
        self, query: str, max_results: int = 8
    ) -> list[dict[str, Any]]:
        """Search for videos matching a free-text query."""
        return await self._get(
            "search",
            {"part": "snippet", "type": "video", "maxResults": max_results, "q": query},
        )

    async def get_videos(
        self,
        video_ids: Sequence[str],
        parts: Sequence[str] = ("snippet", "contentDetails"),
    ) -> list[dict[str, Any]]:
        """Fetch videos by id in one batched call."""
        if not video_ids:
            return []
        return await self._get(
            "videos", {"part": ",".join(parts), "id": ",".join(video_ids)}
        )

    async def get_playlist_items(
        self, playlist_id: str, max_results: int = 1
    ) -> list[dict[str, Any]]:
        """Fetch the first items of a playlist."""
        return await self._get(
            "playlistItems",
            {"part": "snippet", "maxResults": max_results, "playlistId": playlist_id},
        )

    async def get_playlists(self, playlist_id: str) -> list[dict[str, Any]]:
        """Fetch playlist metadata by id."""
        return await self._get("playlists", {"part": "snippet", "id": playlist_id})

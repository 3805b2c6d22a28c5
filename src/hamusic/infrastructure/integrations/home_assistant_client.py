"""Home Assistant REST API client for media player services."""

import logging
from typing import Any

import httpx

from hamusic.config import HomeAssistantSettings
from hamusic.domain.exceptions import ConfigurationError, ExternalServiceError
from hamusic.domain.ports import IMediaPlayerClient
from hamusic.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)


class HomeAssistantClient(IMediaPlayerClient):
    """Calls media_player services on a Home Assistant instance.

    Service calls return the HTTP status code instead of raising on non-2xx,
    so the dispatcher can decide what a failed step means.
    """

    def __init__(
        self,
        settings: HomeAssistantSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Home Assistant client.

        Args:
            settings: Home Assistant connection settings
            http_client: Client to send requests with. Defaults to the shared pool.
        """
        self.settings = settings
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = await HttpClientPool.get_client(timeout=self.settings.timeout)
        return self._client

    async def _call_service(self, service: str, payload: dict[str, Any]) -> int:
        """
        POST to /services/media_player/<service>.

        Returns:
            HTTP status code of the response

        Raises:
            ConfigurationError: If URL or token is missing
            ExternalServiceError: If Home Assistant is unreachable
        """
        if not self.settings.is_configured():
            raise ConfigurationError("Home Assistant URL or token not set")

        client = await self._get_client()
        url = f"{self.settings.url.rstrip('/')}/services/media_player/{service}"
        try:
            response = await client.post(
                url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.settings.token}",
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("Home Assistant %s call failed: %s", service, e)
            raise ExternalServiceError(f"Home Assistant unreachable: {e}") from e

        level = logging.INFO if response.is_success else logging.WARNING
        logger.log(
            level,
            "Home Assistant %s -> %d %s",
            service,
            response.status_code,
            response.text[:200],
            extra={"service": service, "status_code": response.status_code},
        )
        return response.status_code

    async def turn_on(self, entity_id: str) -> int:
        """Power on a media player."""
        return await self._call_service("turn_on", {"entity_id": entity_id})

    async def play_media(
        self, entity_id: str, content_id: str, content_type: str = "url"
    ) -> int:
        """Play media on a media player."""
        return await self._call_service(
            "play_media",
            {
                "entity_id": entity_id,
                "media_content_type": content_type,
                "media_content_id": content_id,
            },
        )

"""External integration client implementations."""

from hamusic.infrastructure.integrations.home_assistant_client import (
    HomeAssistantClient,
)
from hamusic.infrastructure.integrations.http_pool import HttpClientPool
from hamusic.infrastructure.integrations.youtube_client import YouTubeClient

__all__ = [
    "HomeAssistantClient",
    "HttpClientPool",
    "YouTubeClient",
]

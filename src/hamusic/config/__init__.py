"""Configuration module for HA Music."""

from .settings import (
    ApiSettings,
    DatabaseSettings,
    HomeAssistantSettings,
    Settings,
    YouTubeSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "DatabaseSettings",
    "HomeAssistantSettings",
    "Settings",
    "YouTubeSettings",
    "get_settings",
]

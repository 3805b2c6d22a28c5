"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hamusic import __version__


class ApiSettings(BaseSettings):
    """HTTP API settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    prefix: str = Field(default="/api", description="Base path for all API routes")
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    port: int = Field(default=8787, description="Bind port for uvicorn")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )


class DatabaseSettings(BaseSettings):
    """Key-value store backing database settings."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_", env_file=".env", extra="ignore"
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./hamusic.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")


# Hey future me - YOUTUBE_API_KEY is the only thing you really need here. Every
# YouTube endpoint refuses to work without it, so the client checks is_configured()
# before each call and raises ConfigurationError instead of sending a doomed request.
class YouTubeSettings(BaseSettings):
    """YouTube Data API v3 settings."""

    model_config = SettingsConfigDict(
        env_prefix="YOUTUBE_", env_file=".env", extra="ignore"
    )

    api_key: str = Field(default="", description="YouTube Data API key")
    base_url: str = Field(
        default="https://www.googleapis.com/youtube/v3",
        description="YouTube Data API base URL",
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    def is_configured(self) -> bool:
        """Check if an API key is present."""
        return bool(self.api_key)


class HomeAssistantSettings(BaseSettings):
    """Home Assistant media player settings."""

    model_config = SettingsConfigDict(
        env_prefix="HOME_ASSISTANT_", env_file=".env", extra="ignore"
    )

    url: str = Field(
        default="",
        description="Home Assistant API URL including /api, e.g. http://ha.local:8123/api",
    )
    token: str = Field(default="", description="Long-lived access token")
    entity_id: str = Field(
        default="media_player.apple_tv", description="Target media player entity"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    def is_configured(self) -> bool:
        """Check if URL and token are both present."""
        return bool(self.url and self.token)


class Settings(BaseSettings):
    """Root application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = Field(default="hamusic", description="Application name")
    app_version: str = Field(default=__version__, description="Application version")
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON formatted logs")

    api: ApiSettings = Field(default_factory=ApiSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    home_assistant: HomeAssistantSettings = Field(default_factory=HomeAssistantSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

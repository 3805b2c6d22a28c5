"""Shared fixtures: settings, a temporary SQLite store and an API client."""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from hamusic.config import (
    DatabaseSettings,
    HomeAssistantSettings,
    Settings,
    YouTubeSettings,
)
from hamusic.infrastructure.persistence import (
    ArtistRepository,
    Database,
    SqlKeyValueStore,
)
from hamusic.main import create_app

YOUTUBE_BASE_URL = "https://youtube.test/youtube/v3"
HOME_ASSISTANT_URL = "http://homeassistant.test:8123/api"
ENTITY_ID = "media_player.apple_tv"


# Hey future me - every test gets its own SQLite file under tmp_path, so there's no shared
# state between tests and no cleanup to forget. External URLs point at .test hosts that
# pytest-httpx intercepts; nothing here ever leaves the machine.
@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with a temp database and fake YouTube / Home Assistant endpoints."""
    return Settings(
        log_level="DEBUG",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'hamusic.db'}"),
        youtube=YouTubeSettings(api_key="test-key", base_url=YOUTUBE_BASE_URL, timeout=5.0),
        home_assistant=HomeAssistantSettings(
            url=HOME_ASSISTANT_URL,
            token="test-token",
            entity_id=ENTITY_ID,
            timeout=5.0,
        ),
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Database with tables created, disposed after the test."""
    db = Database(settings)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def kv_store(database: Database) -> SqlKeyValueStore:
    """Key-value store on the temp database."""
    return SqlKeyValueStore(database)


@pytest.fixture
def repository(kv_store: SqlKeyValueStore) -> ArtistRepository:
    """Artist repository on the temp store."""
    return ArtistRepository(kv_store)


# The context manager runs the lifespan (tables, store, pool cleanup) in TestClient's loop.
@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """API client for an app built from the test settings."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client

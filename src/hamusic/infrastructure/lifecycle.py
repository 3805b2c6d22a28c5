"""Application lifecycle management for startup and shutdown tasks."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from sqlalchemy.engine import make_url

from hamusic.config import Settings
from hamusic.domain.exceptions import ConfigurationError
from hamusic.infrastructure.integrations.http_pool import HttpClientPool
from hamusic.infrastructure.persistence import Database, SqlKeyValueStore

logger = logging.getLogger(__name__)


# Hey future me, SQLite won't create missing parent directories for its file, and the error
# you get from the engine on first use is cryptic. Create them up front. In-memory and
# non-SQLite URLs are left alone.
def ensure_sqlite_directory(settings: Settings) -> None:
    """Create the parent directory of a file-based SQLite database.

    Raises:
        ConfigurationError: If the directory can't be created
    """
    url = make_url(settings.database.url)
    if not url.drivername.startswith("sqlite") or not url.database:
        return
    if url.database == ":memory:":
        return

    parent = Path(url.database).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to create SQLite database directory '{parent}': {exc}. "
            "Update DATABASE_URL or adjust directory permissions."
        ) from exc


# Listen future me, everything before `yield` runs at STARTUP, everything after at SHUTDOWN.
# The store lives on app.state so dependencies can reach it. The try/finally makes sure the
# engine and the shared HTTP pool are released even if startup blew up halfway.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Startup: ensure the SQLite directory, open the database, create tables and
    attach the key-value store. Shutdown: close the database and the HTTP pool.
    """
    settings: Settings = app.state.settings
    logger.info("Starting application: %s %s", settings.app_name, settings.app_version)

    try:
        ensure_sqlite_directory(settings)

        db = Database(settings)
        app.state.db = db
        await db.create_tables()
        logger.info("Database initialized: %s", settings.database.url)

        app.state.kv_store = SqlKeyValueStore(db)
        app.state.startup_time = datetime.now(UTC)

        if not settings.youtube.is_configured():
            logger.warning("YOUTUBE_API_KEY not set - YouTube lookups will fail")
        if not settings.home_assistant.is_configured():
            logger.warning(
                "HOME_ASSISTANT_URL/HOME_ASSISTANT_TOKEN not set - playback will fail"
            )

        yield

    except Exception as e:
        logger.exception("Error during application startup: %s", e)
        raise
    finally:
        logger.info("Shutting down application")

        try:
            if hasattr(app.state, "db"):
                await app.state.db.close()
                logger.info("Database connection closed")
        except Exception as e:
            logger.exception("Error closing database: %s", e)

        try:
            await HttpClientPool.close()
            logger.info("HTTP client pool closed")
        except Exception as e:
            logger.exception("Error closing HTTP client pool: %s", e)

"""Dependency injection for API endpoints."""

import logging
from typing import cast

from fastapi import Depends, HTTPException, Request

from hamusic.application.services.playback_dispatcher import PlaybackDispatcher
from hamusic.application.services.youtube_resolver import YouTubeResolver
from hamusic.application.use_cases.bulk_import import BulkImportArtistsUseCase
from hamusic.config import Settings
from hamusic.domain.ports import IKeyValueStore
from hamusic.infrastructure.integrations.home_assistant_client import (
    HomeAssistantClient,
)
from hamusic.infrastructure.integrations.youtube_client import YouTubeClient
from hamusic.infrastructure.persistence.repositories import ArtistRepository

logger = logging.getLogger(__name__)


# Hey future me - settings live on app.state (set in create_app) instead of coming straight
# from get_settings(). That way tests build an app with their own Settings object and every
# dependency below sees it, no lru_cache clearing or env patching needed.
def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return cast(Settings, request.app.state.settings)


def get_kv_store(request: Request) -> IKeyValueStore:
    """Get the key-value store from app state.

    Raises:
        HTTPException: 503 if the store isn't initialized (lifespan didn't run)
    """
    if not hasattr(request.app.state, "kv_store"):
        raise HTTPException(
            status_code=503,
            detail="Store not initialized",
        )
    return cast(IKeyValueStore, request.app.state.kv_store)


def get_artist_repository(
    store: IKeyValueStore = Depends(get_kv_store),
) -> ArtistRepository:
    """Get artist repository instance."""
    return ArtistRepository(store)


# Yo, new client objects per request but they share the pooled httpx.AsyncClient, so
# there's no connection setup cost here.
def get_youtube_client(
    settings: Settings = Depends(get_app_settings),
) -> YouTubeClient:
    """Get YouTube Data API client instance."""
    return YouTubeClient(settings.youtube)


def get_media_player_client(
    settings: Settings = Depends(get_app_settings),
) -> HomeAssistantClient:
    """Get Home Assistant media player client instance."""
    return HomeAssistantClient(settings.home_assistant)


def get_youtube_resolver(
    client: YouTubeClient = Depends(get_youtube_client),
) -> YouTubeResolver:
    """Get YouTube resolver instance."""
    return YouTubeResolver(client)


def get_playback_dispatcher(
    repository: ArtistRepository = Depends(get_artist_repository),
    media_player: HomeAssistantClient = Depends(get_media_player_client),
    settings: Settings = Depends(get_app_settings),
) -> PlaybackDispatcher:
    """Get playback dispatcher for the configured media player entity."""
    return PlaybackDispatcher(
        repository=repository,
        media_player=media_player,
        entity_id=settings.home_assistant.entity_id,
    )


def get_bulk_import_use_case(
    resolver: YouTubeResolver = Depends(get_youtube_resolver),
    repository: ArtistRepository = Depends(get_artist_repository),
) -> BulkImportArtistsUseCase:
    """Get bulk import use case instance."""
    return BulkImportArtistsUseCase(resolver=resolver, repository=repository)

"""API router initialization."""

# Hey future me, this aggregates the sub-routers. create_app() mounts api_router under
# settings.api.prefix (default /api), so paths become /api/artists, /api/youtube/search, ...
# The health router is mounted separately at the root (no prefix) for container probes.

from fastapi import APIRouter

from hamusic.api.routers import artists, health, youtube

api_router = APIRouter()

api_router.include_router(artists.router, tags=["Artists"])
api_router.include_router(youtube.router, tags=["YouTube"])

__all__ = [
    "api_router",
    "artists",
    "health",
    "youtube",
]

"""YouTube lookup endpoints."""

from fastapi import APIRouter, Depends, Query

from hamusic.api.dependencies import get_youtube_resolver
from hamusic.api.schemas import ResolvedVideoSchema
from hamusic.application.services.youtube_resolver import YouTubeResolver

router = APIRouter(prefix="/youtube")


@router.get("/search", response_model=list[ResolvedVideoSchema])
async def search_youtube(
    q: str = Query(default="", description="Free-text search query"),
    resolver: YouTubeResolver = Depends(get_youtube_resolver),
) -> list[ResolvedVideoSchema]:
    """Search YouTube videos, at most 8 results in YouTube's order."""
    videos = await resolver.search(q)
    return [ResolvedVideoSchema.from_entity(v) for v in videos]


@router.get("/video", response_model=ResolvedVideoSchema)
async def resolve_video(
    url: str = Query(..., description="YouTube video or playlist URL"),
    resolver: YouTubeResolver = Depends(get_youtube_resolver),
) -> ResolvedVideoSchema:
    """Resolve a video URL, or a playlist URL to its first video."""
    video = await resolver.resolve(url)
    return ResolvedVideoSchema.from_entity(video)

"""Resolve YouTube URLs and search queries into normalized video metadata.

Hey future me - the URL decision order matters:
1. ?list=  -> playlist, we take its FIRST item (one playlistItems call gives us id,
   title and thumbnail, no second lookup needed)
2. ?v=     -> video id taken as-is
3. youtu.be/<id>, youtube.com/watch?v=<id>, /embed/<id>, /shorts/<id> pattern match
Anything else is InvalidInputError. Only the video path needs the videos lookup.
"""

import logging
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

from hamusic.domain.entities import ReferenceKind, ResolvedVideo, VideoReference
from hamusic.domain.exceptions import (
    ConfigurationError,
    InvalidInputError,
    ResolutionFailedError,
)
from hamusic.domain.ports import IYouTubeClient

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 8

_VIDEO_ID_PATTERN = re.compile(
    r"(?:youtu\.be/|youtube\.com/(?:watch\?v=|embed/|shorts/))([\w-]{11})"
)


def parse_youtube_url(url: str, prefer_video: bool = False) -> VideoReference:
    """Extract a video or playlist reference from a YouTube URL.

    A URL with both list= and v= is a playlist, unless prefer_video is set
    (the seeder treats watch?v=X&list=Y as the video X).

    Raises:
        InvalidInputError: If url isn't a URL or doesn't point at a video/playlist
    """
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidInputError(f"Invalid YouTube URL: {url}")

    query = parse_qs(parsed.query)
    playlist_id = query.get("list", [""])[0]
    video_id = query.get("v", [""])[0]
    if video_id and prefer_video:
        return VideoReference(kind=ReferenceKind.VIDEO, id=video_id)
    if playlist_id:
        return VideoReference(kind=ReferenceKind.PLAYLIST, id=playlist_id)
    if video_id:
        return VideoReference(kind=ReferenceKind.VIDEO, id=video_id)

    match = _VIDEO_ID_PATTERN.search(candidate)
    if match:
        return VideoReference(kind=ReferenceKind.VIDEO, id=match.group(1))

    raise InvalidInputError(f"Invalid YouTube URL: {url}")


def _high_thumbnail(snippet: dict[str, Any]) -> str | None:
    return snippet.get("thumbnails", {}).get("high", {}).get("url")


def _video_from_item(item: dict[str, Any]) -> ResolvedVideo:
    snippet = item.get("snippet", {})
    return ResolvedVideo(
        youtube_id=item["id"],
        title=snippet.get("title", ""),
        duration=item.get("contentDetails", {}).get("duration", ""),
        thumbnail=_high_thumbnail(snippet) or "",
    )


class YouTubeResolver:
    """Turns YouTube URLs and queries into ResolvedVideo values."""

    def __init__(self, client: IYouTubeClient) -> None:
        """Initialize resolver with a YouTube API client."""
        self.client = client

    def ensure_configured(self) -> None:
        """Fail early when no API key is set.

        Raises:
            ConfigurationError: If the client has no API key
        """
        if not self.client.is_configured():
            raise ConfigurationError("YouTube API key not set")

    async def resolve(self, url: str) -> ResolvedVideo:
        """Resolve a video or playlist URL.

        Raises:
            InvalidInputError: If url can't be parsed
            ResolutionFailedError: If YouTube has no such video / an empty playlist
            ConfigurationError: If no API key is set
            ExternalServiceError: If the YouTube API fails
        """
        reference = parse_youtube_url(url)
        if reference.kind is ReferenceKind.PLAYLIST:
            return await self._resolve_playlist(reference.id)
        return await self.lookup_video(reference.id)

    async def _resolve_playlist(self, playlist_id: str) -> ResolvedVideo:
        items = await self.client.get_playlist_items(playlist_id, max_results=1)
        if not items:
            raise ResolutionFailedError("playlist", playlist_id)

        snippet = items[0].get("snippet", {})
        video_id = snippet.get("resourceId", {}).get("videoId")
        if not video_id:
            raise ResolutionFailedError("playlist", playlist_id)

        logger.debug("Playlist %s starts with video %s", playlist_id, video_id)
        # playlistItems has no contentDetails.duration, so duration stays empty
        return ResolvedVideo(
            youtube_id=video_id,
            title=snippet.get("title", ""),
            duration="",
            thumbnail=_high_thumbnail(snippet) or "",
        )

    async def lookup_video(self, video_id: str) -> ResolvedVideo:
        """Fetch snippet and content details for a single video id.

        Raises:
            ResolutionFailedError: If YouTube returns no item for the id
        """
        items = await self.client.get_videos([video_id], parts=("snippet", "contentDetails"))
        if not items:
            raise ResolutionFailedError("video", video_id)
        return _video_from_item(items[0])

    # Yo future me, search is two calls: `search` for ids (no durations there!) and one batched
    # `videos` call for details. They're not atomic - a video can vanish in between. We keep
    # search order and silently drop ids the second call didn't return.
    async def search(self, query: str) -> list[ResolvedVideo]:
        """Search YouTube, at most SEARCH_RESULT_LIMIT results.

        Raises:
            ConfigurationError: If no API key is set, even for a blank query
        """
        self.ensure_configured()
        if not query or not query.strip():
            logger.info("Empty YouTube search query")
            return []

        hits = await self.client.search_videos(query.strip(), max_results=SEARCH_RESULT_LIMIT)
        video_ids = [
            hit["id"]["videoId"] for hit in hits if hit.get("id", {}).get("videoId")
        ][:SEARCH_RESULT_LIMIT]
        if not video_ids:
            return []

        details = await self.client.get_videos(video_ids, parts=("contentDetails", "snippet"))
        by_id = {item["id"]: item for item in details if item.get("id")}
        results = [_video_from_item(by_id[vid]) for vid in video_ids if vid in by_id]

        if len(results) < len(video_ids):
            logger.info(
                "YouTube search dropped %d hits without details",
                len(video_ids) - len(results),
            )
        logger.info("YouTube search '%s' returned %d videos", query, len(results))
        return results

    async def thumbnail_for(self, video_id: str) -> str | None:
        """Avatar lookup: high-resolution thumbnail of a video, None if unavailable."""
        items = await self.client.get_videos([video_id], parts=("snippet",))
        if not items:
            return None
        return _high_thumbnail(items[0].get("snippet", {}))

    async def playlist_thumbnail_for(self, playlist_id: str) -> str | None:
        """Avatar lookup: high-resolution thumbnail of a playlist, None if unavailable."""
        items = await self.client.get_playlists(playlist_id)
        if not items:
            return None
        return _high_thumbnail(items[0].get("snippet", {}))

"""Application services - YouTube resolution and playback dispatch."""

from hamusic.application.services.playback_dispatcher import (
    PlaybackDispatcher,
    PlaybackOutcome,
    build_media_uri,
)
from hamusic.application.services.youtube_resolver import (
    SEARCH_RESULT_LIMIT,
    YouTubeResolver,
    parse_youtube_url,
)

__all__ = [
    "SEARCH_RESULT_LIMIT",
    "PlaybackDispatcher",
    "PlaybackOutcome",
    "YouTubeResolver",
    "build_media_uri",
    "parse_youtube_url",
]

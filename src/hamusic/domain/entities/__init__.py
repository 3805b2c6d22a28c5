"""Domain entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias


# Hey future me, ResolvedVideo is what the YouTube resolver hands back. The JSON keys are
# camelCase (youtubeId) because that's what the frontend and the stored records use, so
# to_dict()/from_dict() do the translation. Don't rename the keys - existing records in
# the store would stop parsing!
@dataclass(frozen=True)
class ResolvedVideo:
    """Normalized YouTube video metadata."""

    youtube_id: str
    title: str
    duration: str  # ISO-8601, e.g. PT3M33S. Empty when the source didn't provide one.
    thumbnail: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the stored JSON shape."""
        return {
            "youtubeId": self.youtube_id,
            "title": self.title,
            "duration": self.duration,
            "thumbnail": self.thumbnail,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResolvedVideo":
        """Build from the stored JSON shape.

        Raises:
            ValueError: If youtubeId is missing
        """
        youtube_id = data.get("youtubeId")
        if not youtube_id:
            raise ValueError("Resolved video without youtubeId")
        return cls(
            youtube_id=str(youtube_id),
            title=str(data.get("title") or ""),
            duration=str(data.get("duration") or ""),
            thumbnail=str(data.get("thumbnail") or ""),
        )


@dataclass(frozen=True)
class VideoLink:
    """A raw YouTube URL that was stored without resolving it."""

    url: str


# An artist's video is EITHER a raw link OR resolved metadata. Code that consumes it
# has to handle both (isinstance checks), there is no implicit "it's probably a dict".
Video: TypeAlias = VideoLink | ResolvedVideo


def video_from_json(value: Any) -> Video | None:
    """Decode the stored `video` field.

    Raises:
        ValueError: If the value is neither null, a string nor an object
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return VideoLink(url=value)
    if isinstance(value, dict):
        return ResolvedVideo.from_dict(value)
    raise ValueError(f"Unsupported video value: {value!r}")


def video_to_json(video: Video | None) -> str | dict[str, str] | None:
    """Encode a video for storage."""
    if video is None:
        return None
    if isinstance(video, VideoLink):
        return video.url
    return video.to_dict()


class ReferenceKind(str, Enum):
    """What a YouTube URL points at."""

    VIDEO = "video"
    PLAYLIST = "playlist"


@dataclass(frozen=True)
class VideoReference:
    """Video or playlist id extracted from a YouTube URL."""

    kind: ReferenceKind
    id: str


@dataclass
class Artist:
    """A catalog entry: one artist with an avatar and at most one video."""

    id: int
    name: str
    avatar: str = ""
    video: Video | None = None

    # Hey future me - this is what gets wrapped into youtube://...&start=0 for playback.
    # A VideoLink plays its raw URL, a ResolvedVideo its id. None means "nothing to play".
    @property
    def media_reference(self) -> str | None:
        """Reference handed to the media player."""
        if isinstance(self.video, VideoLink):
            return self.video.url
        if isinstance(self.video, ResolvedVideo):
            return self.video.youtube_id
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "video": video_to_json(self.video),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Artist":
        """Build from the stored JSON shape.

        Raises:
            ValueError: If the record is malformed (no id, no name, bad video)
        """
        if not isinstance(data, dict):
            raise ValueError("Artist record is not an object")
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Artist record without name")
        try:
            artist_id = int(data["id"])
        except (KeyError, TypeError) as e:
            raise ValueError("Artist record without valid id") from e
        return cls(
            id=artist_id,
            name=name,
            avatar=str(data.get("avatar") or ""),
            video=video_from_json(data.get("video")),
        )


@dataclass(frozen=True)
class ArtistDraft:
    """Artist fields before an id has been allocated."""

    name: str
    avatar: str = ""
    video: Video | None = None


__all__ = [
    "Artist",
    "ArtistDraft",
    "ReferenceKind",
    "ResolvedVideo",
    "Video",
    "VideoLink",
    "VideoReference",
    "video_from_json",
    "video_to_json",
]

"""API schemas for artists, playback and YouTube lookups."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hamusic.domain.entities import Artist, ResolvedVideo, Video, VideoLink


class ResolvedVideoSchema(BaseModel):
    """Resolved YouTube video as sent over the wire (camelCase youtubeId)."""

    model_config = ConfigDict(populate_by_name=True)

    youtube_id: str = Field(..., alias="youtubeId", description="11-char YouTube video id")
    title: str = Field(default="", description="Video title")
    duration: str = Field(default="", description="ISO-8601 duration, may be empty")
    thumbnail: str = Field(default="", description="High resolution thumbnail URL")

    @classmethod
    def from_entity(cls, video: ResolvedVideo) -> "ResolvedVideoSchema":
        """Convert domain value to schema."""
        return cls(
            youtube_id=video.youtube_id,
            title=video.title,
            duration=video.duration,
            thumbnail=video.thumbnail,
        )

    def to_entity(self) -> ResolvedVideo:
        """Convert schema to domain value."""
        return ResolvedVideo(
            youtube_id=self.youtube_id,
            title=self.title,
            duration=self.duration,
            thumbnail=self.thumbnail,
        )


# Hey future me - "video" on the wire is a raw URL string, a resolved video object or null.
# These two helpers are the only place that maps between that and the domain variant.
VideoField = str | ResolvedVideoSchema | None


def video_to_entity(value: VideoField) -> Video | None:
    """Map a request video field to the domain variant. Empty string means no video."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return VideoLink(url=value)
    return value.to_entity()


def video_to_schema(video: Video | None) -> VideoField:
    """Map a domain video to its wire shape."""
    if video is None:
        return None
    if isinstance(video, VideoLink):
        return video.url
    return ResolvedVideoSchema.from_entity(video)


class ArtistResponse(BaseModel):
    """Artist as returned by the API."""

    id: int
    name: str
    avatar: str = ""
    video: VideoField = None

    @classmethod
    def from_entity(cls, artist: Artist) -> "ArtistResponse":
        """Convert domain entity to response."""
        return cls(
            id=artist.id,
            name=artist.name,
            avatar=artist.avatar,
            video=video_to_schema(artist.video),
        )


class ArtistCreateRequest(BaseModel):
    """Body of POST /artists."""

    name: str = Field(..., description="Display name, must not be empty")
    avatar: str = Field(default="", description="Avatar image URL")
    video: VideoField = Field(default=None, description="YouTube URL or resolved video")


class ArtistUpdateRequest(BaseModel):
    """Body of PUT /artists/{id}. Only fields present in the body are changed."""

    name: str | None = None
    avatar: str | None = None
    video: VideoField = None

    def to_patch(self) -> dict[str, Any]:
        """Fields the caller actually sent, converted to domain values.

        A null name or avatar is treated as "not sent"; a null video clears the video.
        """
        patch: dict[str, Any] = {}
        for field_name in self.model_fields_set:
            value = getattr(self, field_name)
            if field_name == "video":
                patch["video"] = video_to_entity(value)
            elif value is not None:
                patch[field_name] = value
        return patch


class BulkImportItem(BaseModel):
    """One entry of POST /artists/bulk."""

    name: str
    url: str


class BulkImportResponse(BaseModel):
    """Result of a bulk import."""

    added: list[ArtistResponse] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)


class PlayResponse(BaseModel):
    """Result of a play request, with the status of both device calls."""

    success: bool
    message: str
    turn_on_status: int
    play_status: int | None = None


class DeleteResponse(BaseModel):
    """Delete confirmation."""

    success: bool = True

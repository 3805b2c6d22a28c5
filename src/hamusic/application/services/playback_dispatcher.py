"""Send an artist's video to the Home Assistant media player."""

import logging
from dataclasses import dataclass

from hamusic.domain.exceptions import NoVideoError
from hamusic.domain.ports import IArtistRepository, IMediaPlayerClient

logger = logging.getLogger(__name__)


def build_media_uri(reference: str) -> str:
    """Wrap a stored video reference for the YouTube app on the device."""
    return f"youtube://{reference}&start=0"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


@dataclass(frozen=True)
class PlaybackOutcome:
    """Result of a play request, including both downstream status codes."""

    success: bool
    message: str
    turn_on_status: int
    play_status: int | None = None


class PlaybackDispatcher:
    """Power on the media player, then start the artist's video.

    Hey future me - the device must be on before it accepts play_media, so the two
    calls run strictly one after the other. If turn_on is rejected we don't send
    play_media at all. The outcome only says success when BOTH calls returned 2xx.
    """

    def __init__(
        self,
        repository: IArtistRepository,
        media_player: IMediaPlayerClient,
        entity_id: str,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            repository: Artist repository to look the artist up in
            media_player: Media player command client
            entity_id: Target device, e.g. media_player.apple_tv
        """
        self.repository = repository
        self.media_player = media_player
        self.entity_id = entity_id

    async def play(self, artist_id: int) -> PlaybackOutcome:
        """Play the artist's video on the configured device.

        Raises:
            EntityNotFoundException: If the artist doesn't exist
            NoVideoError: If the artist has no video
            ConfigurationError: If Home Assistant isn't configured
            ExternalServiceError: If Home Assistant is unreachable
        """
        artist = await self.repository.get(artist_id)
        reference = artist.media_reference
        if reference is None:
            raise NoVideoError(artist_id)

        turn_on_status = await self.media_player.turn_on(self.entity_id)
        if not _is_success(turn_on_status):
            logger.warning(
                "Power-on of %s failed with %d, not sending play command",
                self.entity_id,
                turn_on_status,
            )
            return PlaybackOutcome(
                success=False,
                message=f"Power-on failed with status {turn_on_status}",
                turn_on_status=turn_on_status,
            )

        play_status = await self.media_player.play_media(
            self.entity_id, build_media_uri(reference), content_type="url"
        )
        if not _is_success(play_status):
            logger.warning(
                "Play command for artist %s on %s failed with %d",
                artist_id,
                self.entity_id,
                play_status,
            )
            return PlaybackOutcome(
                success=False,
                message=f"Play command failed with status {play_status}",
                turn_on_status=turn_on_status,
                play_status=play_status,
            )

        logger.info("Playing artist %s (%s) on %s", artist_id, artist.name, self.entity_id)
        return PlaybackOutcome(
            success=True,
            message="Playing on TV",
            turn_on_status=turn_on_status,
            play_status=play_status,
        )

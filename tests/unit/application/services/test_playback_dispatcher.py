"""Tests for PlaybackDispatcher.

Hey future me - the contract here: power on first, play second, and success only when
both answered 2xx. A rejected power-on must NOT be followed by a play command.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from hamusic.application.services.playback_dispatcher import (
    PlaybackDispatcher,
    build_media_uri,
)
from hamusic.domain.entities import Artist, ResolvedVideo, VideoLink
from hamusic.domain.exceptions import EntityNotFoundException, NoVideoError
from hamusic.domain.ports import IArtistRepository, IMediaPlayerClient

ENTITY_ID = "media_player.apple_tv"


@pytest.fixture
def repository() -> MagicMock:
    repo = MagicMock(spec=IArtistRepository)
    repo.get = AsyncMock()
    return repo


@pytest.fixture
def media_player() -> MagicMock:
    player = MagicMock(spec=IMediaPlayerClient)
    player.turn_on = AsyncMock(return_value=200)
    player.play_media = AsyncMock(return_value=200)
    return player


@pytest.fixture
def dispatcher(repository: MagicMock, media_player: MagicMock) -> PlaybackDispatcher:
    return PlaybackDispatcher(repository, media_player, ENTITY_ID)


def test_build_media_uri() -> None:
    assert build_media_uri("abc12345678") == "youtube://abc12345678&start=0"


class TestPlay:
    """play() sequencing and outcomes."""

    async def test_resolved_video_plays_by_id(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.return_value = Artist(
            id=1, name="A", video=ResolvedVideo("abc12345678", "T", "", "")
        )

        outcome = await dispatcher.play(1)

        assert outcome.success is True
        assert outcome.message == "Playing on TV"
        assert (outcome.turn_on_status, outcome.play_status) == (200, 200)
        media_player.turn_on.assert_awaited_once_with(ENTITY_ID)
        media_player.play_media.assert_awaited_once_with(
            ENTITY_ID, "youtube://abc12345678&start=0", content_type="url"
        )

    async def test_video_link_plays_raw_url(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.return_value = Artist(
            id=1, name="A", video=VideoLink("https://youtu.be/abc12345678")
        )

        await dispatcher.play(1)

        media_player.play_media.assert_awaited_once_with(
            ENTITY_ID, "youtube://https://youtu.be/abc12345678&start=0", content_type="url"
        )

    async def test_power_on_before_play(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        calls: list[str] = []
        media_player.turn_on.side_effect = lambda *a, **k: calls.append("turn_on") or 200
        media_player.play_media.side_effect = lambda *a, **k: calls.append("play") or 200
        repository.get.return_value = Artist(id=1, name="A", video=VideoLink("x"))

        await dispatcher.play(1)

        assert calls == ["turn_on", "play"]

    async def test_rejected_power_on_skips_play(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.return_value = Artist(id=1, name="A", video=VideoLink("x"))
        media_player.turn_on.return_value = 401

        outcome = await dispatcher.play(1)

        assert outcome.success is False
        assert outcome.turn_on_status == 401
        assert outcome.play_status is None
        media_player.play_media.assert_not_awaited()

    async def test_rejected_play_is_failure(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.return_value = Artist(id=1, name="A", video=VideoLink("x"))
        media_player.play_media.return_value = 500

        outcome = await dispatcher.play(1)

        assert outcome.success is False
        assert outcome.message == "Play command failed with status 500"
        assert (outcome.turn_on_status, outcome.play_status) == (200, 500)

    async def test_no_video_raises_without_device_calls(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.return_value = Artist(id=1, name="A")

        with pytest.raises(NoVideoError):
            await dispatcher.play(1)
        media_player.turn_on.assert_not_awaited()

    async def test_missing_artist_raises_not_found(
        self, dispatcher: PlaybackDispatcher, repository: MagicMock, media_player: MagicMock
    ) -> None:
        repository.get.side_effect = EntityNotFoundException("Artist", 9)

        with pytest.raises(EntityNotFoundException):
            await dispatcher.play(9)
        media_player.turn_on.assert_not_awaited()

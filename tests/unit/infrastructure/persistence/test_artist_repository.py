"""Unit tests for ArtistRepository against a real temporary SQLite store.

Hey future me - these pin down the id rules: ids come from the index (max+1), never
from a count, and never repeat after a delete. They also pin down that list/search
drop broken records but tell you how many they dropped.
"""

import asyncio
import json

import pytest

from hamusic.domain.entities import ArtistDraft, ResolvedVideo, VideoLink
from hamusic.domain.exceptions import EntityNotFoundException, InvalidInputError
from hamusic.infrastructure.persistence import (
    ARTIST_IDS_KEY,
    ArtistRepository,
    SqlKeyValueStore,
    artist_key,
)
from hamusic.infrastructure.persistence.repositories import name_sort_key


class TestAdd:
    """Id allocation on add / add_many."""

    async def test_first_artist_gets_id_one(self, repository: ArtistRepository) -> None:
        artist = await repository.add(ArtistDraft(name="A"))
        assert artist.id == 1
        assert await repository.list_ids() == [1]

    async def test_ids_are_max_plus_one(
        self, repository: ArtistRepository, kv_store: SqlKeyValueStore
    ) -> None:
        await kv_store.put(ARTIST_IDS_KEY, json.dumps([3, 7]))
        artist = await repository.add(ArtistDraft(name="B"))
        assert artist.id == 8
        assert await repository.list_ids() == [3, 7, 8]

    async def test_ids_not_reused_after_delete(self, repository: ArtistRepository) -> None:
        first = await repository.add(ArtistDraft(name="A"))
        await repository.remove(first.id)
        second = await repository.add(ArtistDraft(name="B"))
        assert second.id == 2

    async def test_ids_not_reused_after_deleting_top_of_many(
        self, repository: ArtistRepository
    ) -> None:
        for name in ("A", "B", "C"):
            await repository.add(ArtistDraft(name=name))
        await repository.remove(3)
        artist = await repository.add(ArtistDraft(name="D"))
        assert artist.id == 4
        assert await repository.list_ids() == [1, 2, 4]

    async def test_stores_record_with_video(self, repository: ArtistRepository) -> None:
        artist = await repository.add(
            ArtistDraft(name="A", avatar="a.jpg", video=VideoLink("https://youtu.be/x"))
        )
        assert await repository.get(artist.id) == artist

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name_rejected(
        self, repository: ArtistRepository, name: str
    ) -> None:
        with pytest.raises(InvalidInputError):
            await repository.add(ArtistDraft(name=name))
        assert await repository.list_ids() == []

    async def test_concurrent_adds_get_distinct_ids(
        self, repository: ArtistRepository
    ) -> None:
        artists = await asyncio.gather(
            *(repository.add(ArtistDraft(name=f"Artist {i}")) for i in range(5))
        )
        assert sorted(a.id for a in artists) == [1, 2, 3, 4, 5]
        assert sorted(await repository.list_ids()) == [1, 2, 3, 4, 5]

    async def test_add_many_allocates_consecutive_ids(
        self, repository: ArtistRepository
    ) -> None:
        await repository.add(ArtistDraft(name="Existing"))
        added = await repository.add_many([ArtistDraft(name="X"), ArtistDraft(name="Y")])
        assert [a.id for a in added] == [2, 3]
        assert await repository.list_ids() == [1, 2, 3]

    async def test_add_many_empty_batch(self, repository: ArtistRepository) -> None:
        assert await repository.add_many([]) == []
        assert await repository.list_ids() == []


class TestRead:
    """get / list_all / search."""

    async def test_get_missing_raises_not_found(self, repository: ArtistRepository) -> None:
        with pytest.raises(EntityNotFoundException):
            await repository.get(99)

    async def test_list_all_empty_store(self, repository: ArtistRepository) -> None:
        listing = await repository.list_all()
        assert listing.artists == []
        assert listing.skipped == 0

    async def test_list_all_sorts_by_name_ignoring_case_and_accents(
        self, repository: ArtistRepository
    ) -> None:
        for name in ("Zed", "Björk", "adele", "ABBA", "Ånon"):
            await repository.add(ArtistDraft(name=name))

        listing = await repository.list_all()

        assert [a.name for a in listing.artists] == ["ABBA", "adele", "Ånon", "Björk", "Zed"]

    async def test_list_all_sorts_stroke_letters_with_base_letter(
        self, repository: ArtistRepository
    ) -> None:
        for name in ("Zed", "Øystein", "Łukasz", "Oasis", "Lana"):
            await repository.add(ArtistDraft(name=name))

        listing = await repository.list_all()

        assert [a.name for a in listing.artists] == ["Lana", "Łukasz", "Oasis", "Øystein", "Zed"]

    async def test_list_all_skips_malformed_records(
        self, repository: ArtistRepository, kv_store: SqlKeyValueStore
    ) -> None:
        await repository.add(ArtistDraft(name="Good"))
        await kv_store.put(artist_key(2), "{not json")
        await kv_store.put(artist_key(3), json.dumps({"id": 3}))
        await kv_store.put(ARTIST_IDS_KEY, json.dumps([1, 2, 3, 4]))

        listing = await repository.list_all()

        assert [a.name for a in listing.artists] == ["Good"]
        assert listing.skipped == 3

    async def test_search_is_case_insensitive_substring(
        self, repository: ArtistRepository
    ) -> None:
        for name in ("The Beatles", "Beat Happening", "Nirvana"):
            await repository.add(ArtistDraft(name=name))

        listing = await repository.search("BEAT")

        assert [a.name for a in listing.artists] == ["The Beatles", "Beat Happening"]

    async def test_search_keeps_index_order(self, repository: ArtistRepository) -> None:
        for name in ("Zappa", "Abba zz"):
            await repository.add(ArtistDraft(name=name))

        listing = await repository.search("z")

        assert [a.name for a in listing.artists] == ["Zappa", "Abba zz"]

    async def test_search_no_match(self, repository: ArtistRepository) -> None:
        await repository.add(ArtistDraft(name="Nirvana"))
        assert (await repository.search("xyz")).artists == []


class TestEdit:
    """edit merges fields."""

    async def test_edit_changes_only_given_fields(self, repository: ArtistRepository) -> None:
        artist = await repository.add(
            ArtistDraft(name="A", avatar="a.jpg", video=VideoLink("https://youtu.be/x"))
        )

        updated = await repository.edit(artist.id, {"name": "B"})

        assert updated.name == "B"
        assert updated.avatar == "a.jpg"
        assert updated.video == VideoLink("https://youtu.be/x")
        assert await repository.get(artist.id) == updated

    async def test_empty_patch_keeps_record(self, repository: ArtistRepository) -> None:
        artist = await repository.add(ArtistDraft(name="A", avatar="a.jpg"))
        assert await repository.edit(artist.id, {}) == artist
        assert await repository.get(artist.id) == artist

    async def test_video_is_replaced_not_merged(self, repository: ArtistRepository) -> None:
        artist = await repository.add(
            ArtistDraft(name="A", video=ResolvedVideo("abc12345678", "Old", "PT1M", "t"))
        )
        new_video = ResolvedVideo("xyz12345678", "New", "", "")

        updated = await repository.edit(artist.id, {"video": new_video})

        assert updated.video == new_video

    async def test_edit_missing_raises_not_found(self, repository: ArtistRepository) -> None:
        with pytest.raises(EntityNotFoundException):
            await repository.edit(5, {"name": "X"})

    async def test_edit_rejects_unknown_fields(self, repository: ArtistRepository) -> None:
        artist = await repository.add(ArtistDraft(name="A"))
        with pytest.raises(InvalidInputError):
            await repository.edit(artist.id, {"id": 99})

    async def test_edit_rejects_empty_name(self, repository: ArtistRepository) -> None:
        artist = await repository.add(ArtistDraft(name="A"))
        with pytest.raises(InvalidInputError):
            await repository.edit(artist.id, {"name": ""})


class TestRemove:
    """remove drops record and index entry."""

    async def test_remove_deletes_record_and_id(
        self, repository: ArtistRepository, kv_store: SqlKeyValueStore
    ) -> None:
        await repository.add(ArtistDraft(name="A"))
        await repository.add(ArtistDraft(name="B"))

        await repository.remove(1)

        assert await repository.list_ids() == [2]
        assert await kv_store.get(artist_key(1)) is None

    async def test_remove_missing_raises_not_found(self, repository: ArtistRepository) -> None:
        with pytest.raises(EntityNotFoundException):
            await repository.remove(1)


def test_name_sort_key_folds_accents_and_case() -> None:
    assert name_sort_key("Ädele")[0] == name_sort_key("adele")[0]


def test_name_sort_key_maps_ligatures_and_strokes() -> None:
    assert name_sort_key("Æther")[0] == "aether"
    assert name_sort_key("Đorđe")[0] == "dorde"
    assert name_sort_key("Łódź")[0] == "lodz"

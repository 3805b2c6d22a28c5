"""Key-value implementation of the artist repository."""

import asyncio
import json
import logging
import unicodedata
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from hamusic.domain.entities import Artist, ArtistDraft
from hamusic.domain.exceptions import EntityNotFoundException, InvalidInputError
from hamusic.domain.ports import ArtistListing, IArtistRepository, IKeyValueStore

logger = logging.getLogger(__name__)

ARTIST_IDS_KEY = "artist:ids"
LAST_ID_KEY = "artist:last_id"
EDITABLE_FIELDS = frozenset({"name", "avatar", "video"})


def artist_key(artist_id: int) -> str:
    """Store key for a single artist record."""
    return f"artist:{artist_id}"


# Letters NFKD doesn't decompose into base letter + combining mark.
_BASE_LETTERS = str.maketrans(
    {
        "Ø": "O", "ø": "o",
        "Ł": "L", "ł": "l",
        "Đ": "D", "đ": "d",
        "Ð": "D", "ð": "d",
        "Ħ": "H", "ħ": "h",
        "Æ": "AE", "æ": "ae",
        "Œ": "OE", "œ": "oe",
        "Þ": "TH", "þ": "th",
        "ı": "i",
    }
)


def name_sort_key(name: str) -> tuple[str, str]:
    """Collation key for artist names.

    Accents are stripped, stroke and ligature letters mapped to their base
    letters, and case is folded, so "Ädele", "adele" and "Adele" land next to
    each other and "Øystein" sorts with the O's. The raw name breaks ties.
    """
    decomposed = unicodedata.normalize("NFKD", name.translate(_BASE_LETTERS))
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


class ArtistRepository(IArtistRepository):
    """Artist records and the id index stored in a key-value store."""

    # Hey future me, the index ("artist:ids") and the records ("artist:<id>") are separate keys
    # and the store has no transactions across keys. Every mutation below reads the index,
    # changes it in memory and writes it back in full - that's why they all run under the
    # store's write_lock. Reads don't take the lock.
    def __init__(self, store: IKeyValueStore) -> None:
        """Initialize repository with a key-value store."""
        self.store = store

    async def list_ids(self) -> list[int]:
        """Read the id index. Missing index means empty catalog."""
        raw = await self.store.get(ARTIST_IDS_KEY)
        if raw is None:
            return []
        return [int(artist_id) for artist_id in json.loads(raw)]

    async def save_ids(self, ids: Sequence[int]) -> None:
        """Overwrite the id index with ids."""
        await self.store.put(ARTIST_IDS_KEY, json.dumps(list(ids)))

    async def get(self, artist_id: int) -> Artist:
        """Get an artist by id.

        Raises:
            EntityNotFoundException: If no record exists for artist_id
        """
        raw = await self.store.get(artist_key(artist_id))
        if raw is None:
            raise EntityNotFoundException("Artist", artist_id)
        return Artist.from_dict(json.loads(raw))

    async def _load_or_none(self, artist_id: int) -> Artist | None:
        raw = await self.store.get(artist_key(artist_id))
        if raw is None:
            logger.warning("Artist %s is in the index but has no record", artist_id)
            return None
        try:
            return Artist.from_dict(json.loads(raw))
        except ValueError as e:
            logger.warning("Dropping malformed artist record %s: %s", artist_id, e)
            return None

    async def _fetch_all(self) -> ArtistListing:
        ids = await self.list_ids()
        loaded = await asyncio.gather(*(self._load_or_none(i) for i in ids))
        artists = [artist for artist in loaded if artist is not None]
        return ArtistListing(artists=artists, skipped=len(loaded) - len(artists))

    async def list_all(self) -> ArtistListing:
        """List all artists sorted by name."""
        listing = await self._fetch_all()
        listing.artists.sort(key=lambda artist: name_sort_key(artist.name))
        return listing

    # Hey future me - search is NOT sorted (list_all is). Results come back in
    # index order after the concurrent fetch. Clients that want sorted results sort themselves.
    async def search(self, query: str) -> ArtistListing:
        """Find artists whose name contains query, case-insensitive."""
        needle = query.casefold()
        listing = await self._fetch_all()
        listing.artists = [
            artist for artist in listing.artists if needle in artist.name.casefold()
        ]
        return listing

    async def _write(self, artist: Artist) -> None:
        await self.store.put(artist_key(artist.id), json.dumps(artist.to_dict()))

    async def _last_id(self) -> int:
        raw = await self.store.get(LAST_ID_KEY)
        return int(raw) if raw else 0

    async def _save_last_id(self, last_id: int) -> None:
        await self.store.put(LAST_ID_KEY, str(last_id))

    # Hey future me - max+1 alone would hand out the id of a just-deleted top artist again
    # (add 1, delete 1, add -> 1). The persisted high-water mark stops that. Stores without
    # the key start at 0, so for them this is plain max+1.
    @staticmethod
    def _next_id(ids: Sequence[int], last_id: int) -> int:
        return max([*ids, last_id, 0]) + 1

    @staticmethod
    def _validate_name(name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("Artist name must not be empty")
        return name

    async def add(self, draft: ArtistDraft) -> Artist:
        """Create an artist with the next free id."""
        self._validate_name(draft.name)
        async with self.store.write_lock:
            ids = await self.list_ids()
            artist = Artist(
                id=self._next_id(ids, await self._last_id()),
                name=draft.name,
                avatar=draft.avatar,
                video=draft.video,
            )
            await self._write(artist)
            await self.save_ids([*ids, artist.id])
            await self._save_last_id(artist.id)

        logger.info("Added artist %s (%s)", artist.id, artist.name)
        return artist

    async def add_many(self, drafts: Sequence[ArtistDraft]) -> list[Artist]:
        """Create several artists, writing the index once at the end.

        Ids are allocated from a running in-memory copy of the index taken when
        the batch starts, so the batch is consistent with itself.
        """
        for draft in drafts:
            self._validate_name(draft.name)

        added: list[Artist] = []
        async with self.store.write_lock:
            ids = await self.list_ids()
            last_id = await self._last_id()
            for draft in drafts:
                artist = Artist(
                    id=self._next_id(ids, last_id),
                    name=draft.name,
                    avatar=draft.avatar,
                    video=draft.video,
                )
                await self._write(artist)
                ids.append(artist.id)
                added.append(artist)
            await self.save_ids(ids)
            if added:
                await self._save_last_id(added[-1].id)

        logger.info("Added %d artists in one batch", len(added))
        return added

    async def edit(self, artist_id: int, patch: dict[str, Any]) -> Artist:
        """Merge patch into an existing artist.

        Only the keys present in patch change. A "video" key replaces the whole
        video, it's never merged with the previous one.

        Raises:
            EntityNotFoundException: If no record exists for artist_id
            InvalidInputError: If patch has unknown fields or an empty name
        """
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown artist fields: {', '.join(sorted(unknown))}")
        if "name" in patch:
            self._validate_name(patch["name"])

        async with self.store.write_lock:
            existing = await self.get(artist_id)
            updated = replace(existing, **patch)
            await self._write(updated)

        logger.info("Updated artist %s (fields: %s)", artist_id, sorted(patch) or "none")
        return updated

    async def remove(self, artist_id: int) -> None:
        """Delete an artist and drop it from the index.

        Raises:
            EntityNotFoundException: If artist_id isn't in the index
        """
        async with self.store.write_lock:
            ids = await self.list_ids()
            if artist_id not in ids:
                raise EntityNotFoundException("Artist", artist_id)
            await self.store.delete(artist_key(artist_id))
            await self.save_ids([i for i in ids if i != artist_id])

        logger.info("Removed artist %s", artist_id)

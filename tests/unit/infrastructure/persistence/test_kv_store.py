"""Unit tests for the SQL-backed key-value store."""

import asyncio

from hamusic.infrastructure.persistence import SqlKeyValueStore


class TestSqlKeyValueStore:
    """get/put/delete against a real temporary SQLite database."""

    async def test_get_missing_key_returns_none(self, kv_store: SqlKeyValueStore) -> None:
        assert await kv_store.get("artist:ids") is None

    async def test_put_then_get(self, kv_store: SqlKeyValueStore) -> None:
        await kv_store.put("artist:1", '{"id": 1}')
        assert await kv_store.get("artist:1") == '{"id": 1}'

    async def test_put_overwrites(self, kv_store: SqlKeyValueStore) -> None:
        await kv_store.put("artist:ids", "[1]")
        await kv_store.put("artist:ids", "[1, 2]")
        assert await kv_store.get("artist:ids") == "[1, 2]"

    async def test_delete_removes_key(self, kv_store: SqlKeyValueStore) -> None:
        await kv_store.put("artist:1", "x")
        await kv_store.delete("artist:1")
        assert await kv_store.get("artist:1") is None

    async def test_delete_missing_key_is_noop(self, kv_store: SqlKeyValueStore) -> None:
        await kv_store.delete("artist:404")
        assert await kv_store.get("artist:404") is None

    async def test_exposes_write_lock(self, kv_store: SqlKeyValueStore) -> None:
        assert isinstance(kv_store.write_lock, asyncio.Lock)
        assert not kv_store.write_lock.locked()

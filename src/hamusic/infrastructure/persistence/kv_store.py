"""Key-value store adapter on top of the SQLAlchemy database."""

import asyncio
import logging

from sqlalchemy import delete

from hamusic.domain.ports import IKeyValueStore
from hamusic.infrastructure.persistence.database import Database
from hamusic.infrastructure.persistence.models import KeyValueModel

logger = logging.getLogger(__name__)


class SqlKeyValueStore(IKeyValueStore):
    """IKeyValueStore backed by the kv_store table.

    Each call runs in its own short transaction, so concurrent get() calls
    (e.g. the per-id fetches of a list request) don't share a session.
    """

    def __init__(self, database: Database) -> None:
        """Initialize store with a database."""
        self.database = database
        self.write_lock = asyncio.Lock()

    async def get(self, key: str) -> str | None:
        """Get value for key, None if absent."""
        async with self.database.session_scope() as session:
            model = await session.get(KeyValueModel, key)
            return model.value if model is not None else None

    async def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        async with self.database.session_scope() as session:
            model = await session.get(KeyValueModel, key)
            if model is None:
                session.add(KeyValueModel(key=key, value=value))
            else:
                model.value = value
        logger.debug("Stored key %s (%d bytes)", key, len(value))

    async def delete(self, key: str) -> None:
        """Delete key. Deleting a missing key is a no-op."""
        async with self.database.session_scope() as session:
            await session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
        logger.debug("Deleted key %s", key)

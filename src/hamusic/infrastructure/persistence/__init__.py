"""Infrastructure persistence layer."""

from .database import Database
from .kv_store import SqlKeyValueStore
from .models import Base, KeyValueModel
from .repositories import ARTIST_IDS_KEY, LAST_ID_KEY, ArtistRepository, artist_key

__all__ = [
    "ARTIST_IDS_KEY",
    "LAST_ID_KEY",
    "ArtistRepository",
    "Base",
    "Database",
    "KeyValueModel",
    "SqlKeyValueStore",
    "artist_key",
]

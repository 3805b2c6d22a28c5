"""SQLAlchemy ORM models for HA Music."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Hey future me, this is the WHOLE schema - one key/value table. The catalog lives in it as
# "artist:ids" (JSON array of ints) plus one "artist:<id>" row per artist (JSON object). The
# repository owns those key conventions; this model knows nothing about artists.
class KeyValueModel(Base):
    """SQLAlchemy model for a single key-value entry."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    def __repr__(self) -> str:
        return f"<KeyValueModel(key='{self.key}')>"

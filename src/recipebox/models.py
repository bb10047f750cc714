"""SQLAlchemy database models."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipebox.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredItem(Base):
    """One item in a named collection of the keyed store."""

    __tablename__ = "stored_items"

    # Surrogate key keeps insertion order stable across backends
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    id: Mapped[str] = mapped_column(String, nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("idx_stored_items_collection_id", "collection", "id", unique=True),
    )

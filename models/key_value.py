"""
Key-value model: a string store addressed by fixed keys.
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class KeyValueEntry(Base):
    """One stored string value, e.g. the serialized high-score table."""
    __tablename__ = "key_value_store"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r}, size={len(self.value)})>"

"""Database model backing the SQL storage of ledger partitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base


class LedgerPartition(Base):
    """One encoded winner partition, keyed by the campaign's storage key."""

    __tablename__ = "ledger_partitions"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    """Storage key, e.g. ``contest_winners_70``."""

    payload: Mapped[str] = mapped_column(Text, nullable=False)
    """Encoded partition exactly as produced by the ledger codec."""

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    """Timestamp of the last write to this partition."""

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return f"<LedgerPartition(key={self.key!r}, bytes={len(self.payload)})>"

    @classmethod
    def get_by_key(cls, session: Session, key: str) -> Optional["LedgerPartition"]:
        """Return the partition stored under ``key`` if it exists."""

        return session.scalar(select(cls).where(cls.key == key))

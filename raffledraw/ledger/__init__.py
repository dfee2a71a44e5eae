"""Winner ledger and its storage backends."""

from __future__ import annotations

from typing import Optional

from .codec import decode_partition, encode_partition
from .ledger import WinnerLedger
from .storage import FileStorage, InMemoryStorage, SQLAlchemyStorage, StorageBackend


def make_default_ledger(backend: Optional[str] = None) -> WinnerLedger:
    """Build a ledger on the backend selected by ``RAFFLE_LEDGER_BACKEND``.

    ``"sqlalchemy"`` uses the database at ``DB_URL`` and creates the
    ``ledger_partitions`` table if it is missing. ``"file"`` writes under
    ``RAFFLE_LEDGER_DIR``. ``"memory"`` keeps everything in the process.
    """

    from .. import config

    choice = (backend or config.LEDGER_BACKEND).strip().lower()
    if choice == "memory":
        return WinnerLedger(InMemoryStorage())
    if choice == "file":
        return WinnerLedger(FileStorage(config.LEDGER_DIR))
    if choice == "sqlalchemy":
        from ..db.engine import get_sessionmaker, make_engine
        from ..models import Base

        engine = make_engine(config.DB_URL)
        Base.metadata.create_all(engine)
        return WinnerLedger(SQLAlchemyStorage(get_sessionmaker(engine)))
    raise ValueError(f"Unknown ledger backend: {choice!r}")


__all__ = [
    "FileStorage",
    "InMemoryStorage",
    "SQLAlchemyStorage",
    "StorageBackend",
    "WinnerLedger",
    "decode_partition",
    "encode_partition",
    "make_default_ledger",
]

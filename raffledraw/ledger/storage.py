"""Key/blob storage backends for ledger partitions.

Every backend stores one self-contained blob per key and replaces it
wholesale on write, so a reader observes either the previous or the new
partition and never a mix of both.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..errors import LedgerDecodeError, PersistenceError
from ..models import LedgerPartition

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def read(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or ``None`` when absent."""

    def write(self, key: str, blob: str) -> None:
        """Atomically replace the blob stored under ``key``."""

    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is a no-op."""


class InMemoryStorage:
    """Process-local storage, mainly for tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._blobs)


class FileStorage:
    """Store each key as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which is then moved
    over the target with :func:`os.replace`.
    """

    suffix = ".json"

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(f"Unable to read {path}: {exc}") from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LedgerDecodeError(f"{path} is not valid UTF-8: {exc}") from exc

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        tmp_name: Optional[str] = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self.directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(blob)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(f"Unable to write {path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_name}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise PersistenceError(f"Unable to delete {path}: {exc}") from exc


class SQLAlchemyStorage:
    """Store each key as a :class:`~raffledraw.models.LedgerPartition` row.

    Each operation runs in its own transaction, committed on success and
    rolled back on failure.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                row = LedgerPartition.get_by_key(session, key)
                return row.payload if row is not None else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Unable to read partition {key!r}: {exc}") from exc

    def write(self, key: str, blob: str) -> None:
        try:
            with self._session_factory.begin() as session:
                row = LedgerPartition.get_by_key(session, key)
                if row is None:
                    session.add(LedgerPartition(key=key, payload=blob))
                else:
                    row.payload = blob
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Unable to write partition {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with self._session_factory.begin() as session:
                row = LedgerPartition.get_by_key(session, key)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Unable to delete partition {key!r}: {exc}") from exc


__all__ = [
    "FileStorage",
    "InMemoryStorage",
    "SQLAlchemyStorage",
    "StorageBackend",
]

from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .ledger import LedgerPartition  # noqa: F401

__all__ = [
    "Base",
    "LedgerPartition",
]

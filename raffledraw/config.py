"""Runtime settings read from the environment (and a local ``.env`` file)."""

import os
from pathlib import Path

from dotenv import load_dotenv

from .db.utils import resolve_local_path, resolve_sqlite_url

load_dotenv()

# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]

DB_URL = resolve_sqlite_url(os.getenv("DB_URL", "sqlite:///./dev.db"), ROOT_DIR)

# One of "sqlalchemy", "file", or "memory"
LEDGER_BACKEND = os.getenv("RAFFLE_LEDGER_BACKEND", "sqlalchemy").strip().lower()

LEDGER_DIR = resolve_local_path(os.getenv("RAFFLE_LEDGER_DIR", "./ledger"), ROOT_DIR)

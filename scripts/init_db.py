"""Bring the ledger database up to date and summarise what it holds."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from raffledraw.db.engine import get_sessionmaker, make_engine
from raffledraw.domain import Campaign
from raffledraw.ledger import SQLAlchemyStorage, WinnerLedger


def upgrade_db(target_revision: str = "head") -> None:
    """Apply Alembic migrations up to the requested revision."""
    project_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    command.upgrade(alembic_cfg, target_revision)


def report_partitions() -> None:
    """Print how many winners each campaign's ledger partition holds."""
    engine = make_engine()
    ledger = WinnerLedger(SQLAlchemyStorage(get_sessionmaker(engine)))
    for campaign in Campaign:
        winners = ledger.get(campaign)
        latest = winners[-1].drawn_at.isoformat() if winners else "never"
        print(f"{campaign.label}: {len(winners)} winner(s), last draw {latest}")
    engine.dispose()


def main() -> None:
    """Apply migrations (default to head) and report the ledger contents."""
    upgrade_db()
    report_partitions()


if __name__ == "__main__":
    main()

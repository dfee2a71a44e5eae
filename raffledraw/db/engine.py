from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..config import DB_URL


def make_engine(database_url: Optional[str] = None, echo: bool = False):
    url = database_url or DB_URL
    return create_engine(
        url,
        echo=echo,
        future=True,
    )


def get_sessionmaker(engine):
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # Keep rows readable after the transaction closes
        future=True,
    )

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase

from raffledraw.db.metadata import metadata_obj


class Base(DeclarativeBase):
    metadata = metadata_obj

    # Ledger timestamps are always stored timezone-aware (UTC)
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }

"""JSON encoding of ledger partitions."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable

from ..db.utils import dt_iso
from ..domain import Winner
from ..errors import LedgerDecodeError


def winner_to_json(winner: Winner) -> dict:
    """Return the stored representation of ``winner``."""

    return {
        "id": winner.id,
        "contestantId": winner.contestant_id,
        "name": winner.name,
        "department": winner.department.value,
        "tickets": winner.tickets,
        "drawType": winner.campaign.value,
        "drawDate": dt_iso(winner.drawn_at),
    }


def winner_from_json(data: dict) -> Winner:
    if not isinstance(data, dict):
        raise LedgerDecodeError(f"Expected a winner object, got {type(data).__name__}")
    try:
        drawn_at = data["drawDate"]
        return Winner(
            id=data["id"],
            contestant_id=data["contestantId"],
            name=data["name"],
            department=data["department"],
            tickets=data["tickets"],
            campaign=data["drawType"],
            drawn_at=datetime.fromisoformat(drawn_at) if drawn_at else None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise LedgerDecodeError(f"Malformed winner entry: {exc}") from exc


def encode_partition(winners: Iterable[Winner]) -> str:
    """Serialize ``winners`` into a self-contained JSON array."""

    return json.dumps([winner_to_json(w) for w in winners], ensure_ascii=False)


def decode_partition(blob: str) -> list[Winner]:
    """Parse a blob produced by :func:`encode_partition`.

    Raises
    ------
    LedgerDecodeError
        If the blob is not a JSON array of well-formed winner objects.
    """

    try:
        data = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as exc:
        raise LedgerDecodeError(f"Ledger partition is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise LedgerDecodeError("Ledger partition must be a JSON array")
    return [winner_from_json(item) for item in data]


__all__ = [
    "decode_partition",
    "encode_partition",
    "winner_from_json",
    "winner_to_json",
]

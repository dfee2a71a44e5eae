"""Identifier helpers for ledger entries."""

from __future__ import annotations

import secrets
import string
from typing import Container

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_winner_id(
    prefix: str,
    taken: Container[str] = (),
    length: int = 12,
    max_attempts: int = 32,
) -> str:
    """Return ``"<prefix>-<random base62>"`` not present in ``taken``.

    The prefix carries the campaign code, so ids from different campaigns
    can never collide.
    """

    for _ in range(max_attempts):
        suffix = "".join(secrets.choice(BASE62_ALPHABET) for _ in range(length))
        candidate = f"{prefix}-{suffix}"
        if candidate not in taken:
            return candidate

    raise RuntimeError(
        "Unable to generate a unique winner identifier after multiple attempts"
    )

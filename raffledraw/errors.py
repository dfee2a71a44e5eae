"""Exception hierarchy shared by the draw engine and the winner ledger."""

from __future__ import annotations

from typing import Optional


class RaffleError(Exception):
    """Base class for every error raised by :mod:`raffledraw`."""


class EmptyPoolError(RaffleError):
    """Raised when no contestant is left to draw from."""

    user_message = "no contestants available to draw"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.user_message)


class InvalidWeightError(EmptyPoolError):
    """Raised when the remaining contestants all carry non-positive tickets.

    Subclasses :class:`EmptyPoolError` so callers can surface both with the
    same user-facing message.
    """


class InsufficientPoolError(RaffleError):
    """Raised when more winners are requested than can be drawn.

    Attributes
    ----------
    requested : int
        Number of winners the caller asked for.
    available : int
        Number of winners that could have been drawn.
    """

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested {requested} winner(s) but only {available} eligible "
            "contestant(s) remain"
        )


class PersistenceError(RaffleError):
    """Raised when the ledger storage cannot be read or written."""


class LedgerDecodeError(PersistenceError):
    """Raised when a stored ledger partition is not a valid encoded blob."""


__all__ = [
    "RaffleError",
    "EmptyPoolError",
    "InvalidWeightError",
    "InsufficientPoolError",
    "PersistenceError",
    "LedgerDecodeError",
]

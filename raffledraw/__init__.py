"""Ticket-weighted raffle draws with a durable, campaign-partitioned winner ledger."""

from .domain import Campaign, Contestant, Department, Winner
from .draw import WeightedDrawEngine, eligible_subset
from .errors import (
    EmptyPoolError,
    InsufficientPoolError,
    InvalidWeightError,
    LedgerDecodeError,
    PersistenceError,
    RaffleError,
)
from .ledger import WinnerLedger

__all__ = [
    "Campaign",
    "Contestant",
    "Department",
    "Winner",
    "WeightedDrawEngine",
    "eligible_subset",
    "EmptyPoolError",
    "InsufficientPoolError",
    "InvalidWeightError",
    "LedgerDecodeError",
    "PersistenceError",
    "RaffleError",
    "WinnerLedger",
]

"""Value objects describing campaigns, contestants, and drawn winners."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Campaign(str, Enum):
    """One of the two isolated raffle pools."""

    DISCOVERY_70 = "discovery-70"
    DISCOVERY_80 = "discovery-80"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``"70% Discovery"``."""

        return f"{self.code}% Discovery"

    @property
    def code(self) -> str:
        return self.value.rsplit("-", 1)[1]

    @property
    def storage_key(self) -> str:
        """Key under which the campaign's ledger partition is stored."""

        return f"contest_winners_{self.code}"

    @classmethod
    def parse(cls, value: "Campaign | str") -> "Campaign":
        """Coerce ``value`` into a :class:`Campaign`.

        Raises
        ------
        ValueError
            If ``value`` does not name a known campaign.
        """

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown campaign: {value!r}") from None


class Department(str, Enum):
    INTERNATIONAL_MESSAGING = "International Messaging"
    INDIA_MESSAGING = "India Messaging"
    APAC = "APAC"

    @property
    def short_name(self) -> str:
        return self.value.replace(" Messaging", "")

    @classmethod
    def parse(cls, value: "Department | str") -> "Department":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown department: {value!r}") from None


def _require_text(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string")
    if not value.strip():
        raise ValueError(f"{field} must not be empty")
    return value


def _require_tickets(value: object) -> int:
    # bool is an int subclass but never a valid ticket count
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("tickets must be an integer")
    return value


@dataclass(frozen=True)
class Contestant:
    """A raffle entrant as supplied by the contestant directory.

    Attributes
    ----------
    id : str
        Identifier unique within the directory.
    name : str
        Display name.
    department : Department
        Department the contestant belongs to.
    tickets : int
        Sampling weight. Contestants with zero or negative tickets are kept
        on record but are never eligible to win.
    campaign : Campaign
        Campaign whose pool the contestant belongs to.
    """

    id: str
    name: str
    department: Department
    tickets: int
    campaign: Campaign

    def __post_init__(self) -> None:
        _require_text(self.id, "id")
        _require_text(self.name, "name")
        _require_tickets(self.tickets)
        object.__setattr__(self, "department", Department.parse(self.department))
        object.__setattr__(self, "campaign", Campaign.parse(self.campaign))

    @classmethod
    def from_dict(cls, data: dict) -> "Contestant":
        """Build a contestant from a directory record."""

        return cls(
            id=str(data["id"]),
            name=data["name"],
            department=data["department"],
            tickets=data["tickets"],
            campaign=data.get("campaign") or data["drawType"],
        )


@dataclass(frozen=True)
class Winner:
    """A contestant recorded in the ledger as having won a draw.

    ``id`` and ``drawn_at`` stay ``None`` until the ledger assigns them on
    append. The department, name, and ticket count are copies taken at draw
    time so reports remain stable when the directory changes later.
    """

    contestant_id: str
    name: str
    department: Department
    tickets: int
    campaign: Campaign
    id: Optional[str] = None
    drawn_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_text(self.contestant_id, "contestant_id")
        _require_text(self.name, "name")
        _require_tickets(self.tickets)
        if self.id is not None:
            _require_text(self.id, "id")
        if self.drawn_at is not None:
            if not isinstance(self.drawn_at, datetime):
                raise TypeError("drawn_at must be a datetime")
            if self.drawn_at.tzinfo is None:
                # Naive timestamps are taken to be UTC
                object.__setattr__(
                    self, "drawn_at", self.drawn_at.replace(tzinfo=timezone.utc)
                )
        object.__setattr__(self, "department", Department.parse(self.department))
        object.__setattr__(self, "campaign", Campaign.parse(self.campaign))

    @classmethod
    def from_contestant(cls, contestant: Contestant) -> "Winner":
        """Snapshot ``contestant`` into a not-yet-persisted winner."""

        return cls(
            contestant_id=contestant.id,
            name=contestant.name,
            department=contestant.department,
            tickets=contestant.tickets,
            campaign=contestant.campaign,
        )

    def with_updates(self, **changes) -> "Winner":
        return replace(self, **changes)


__all__ = ["Campaign", "Department", "Contestant", "Winner"]

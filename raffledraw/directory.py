"""Read-only access to the contestants of each campaign."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Protocol, Union

from .domain import Campaign, Contestant, Department


class ContestantDirectory(Protocol):
    def list_contestants(self, campaign: Union[Campaign, str]) -> list[Contestant]:
        """Return every contestant in ``campaign``'s pool."""

    def list_contestants_by_department(
        self,
        department: Union[Department, str],
        campaign: Union[Campaign, str],
    ) -> list[Contestant]:
        """Return the contestants of ``department`` in ``campaign``'s pool."""


class StaticContestantDirectory:
    """Directory backed by a fixed snapshot of contestant records.

    Lookups return fresh lists, so callers can never mutate the snapshot.
    """

    def __init__(self, contestants: Iterable[Contestant]) -> None:
        self._contestants: tuple[Contestant, ...] = tuple(contestants)
        seen: set[tuple[Campaign, str]] = set()
        for contestant in self._contestants:
            key = (contestant.campaign, contestant.id)
            if key in seen:
                raise ValueError(
                    f"Duplicate contestant id {contestant.id!r} in "
                    f"{contestant.campaign.value!r}"
                )
            seen.add(key)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "StaticContestantDirectory":
        return cls(Contestant.from_dict(record) for record in records)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "StaticContestantDirectory":
        """Load a JSON array of contestant records from ``path``."""

        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
        if not isinstance(records, list):
            raise ValueError(f"{path} must contain a JSON array of contestants")
        return cls.from_records(records)

    def list_contestants(self, campaign: Union[Campaign, str]) -> list[Contestant]:
        campaign = Campaign.parse(campaign)
        return [c for c in self._contestants if c.campaign == campaign]

    def list_contestants_by_department(
        self,
        department: Union[Department, str],
        campaign: Union[Campaign, str],
    ) -> list[Contestant]:
        department = Department.parse(department)
        return [
            c for c in self.list_contestants(campaign) if c.department == department
        ]


__all__ = ["ContestantDirectory", "StaticContestantDirectory"]

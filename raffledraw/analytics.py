"""Reporting over the winner ledger and the contestant directory."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timezone
from typing import Optional

from .directory import ContestantDirectory
from .domain import Campaign, Department, Winner
from .ledger.ledger import WinnerLedger


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up."""

    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class DepartmentStats:
    """Contestant and winner counts for one department across both campaigns."""

    department: Department
    contestants: dict[Campaign, int]
    winners: dict[Campaign, int]

    @property
    def total_contestants(self) -> int:
        return sum(self.contestants.values())

    @property
    def total_winners(self) -> int:
        return sum(self.winners.values())

    @property
    def percentage(self) -> int:
        """Share of the department's contestants that have won, in percent."""

        if self.total_contestants == 0:
            return 0
        return round_half_up(self.total_winners / self.total_contestants * 100)


@dataclass(frozen=True)
class CampaignStats:
    campaign: Campaign
    contestants: int
    winners: int
    tickets: int

    @property
    def label(self) -> str:
        return self.campaign.label


@dataclass(frozen=True)
class DrawSession:
    """Winners recorded for one campaign on one calendar day (UTC)."""

    day: date
    campaign: Campaign
    count: int


@dataclass(frozen=True)
class Insights:
    total_contestants: int
    total_winners: int
    total_tickets: int
    draw_sessions: int
    remaining_pool: int
    average_tickets: int
    most_active_department: Optional[DepartmentStats]


class RaffleAnalytics:
    """Aggregate ledger and directory data for reporting.

    Every method reads a fresh snapshot; nothing is cached between calls.
    """

    def __init__(self, directory: ContestantDirectory, ledger: WinnerLedger) -> None:
        self._directory = directory
        self._ledger = ledger

    def department_breakdown(self) -> list[DepartmentStats]:
        winners = self._ledger.get()
        stats: list[DepartmentStats] = []
        for department in Department:
            stats.append(
                DepartmentStats(
                    department=department,
                    contestants={
                        campaign: len(
                            self._directory.list_contestants_by_department(
                                department, campaign
                            )
                        )
                        for campaign in Campaign
                    },
                    winners={
                        campaign: sum(
                            1
                            for w in winners
                            if w.department == department and w.campaign == campaign
                        )
                        for campaign in Campaign
                    },
                )
            )
        return stats

    def campaign_summary(self) -> list[CampaignStats]:
        summary: list[CampaignStats] = []
        for campaign in Campaign:
            contestants = self._directory.list_contestants(campaign)
            summary.append(
                CampaignStats(
                    campaign=campaign,
                    contestants=len(contestants),
                    winners=len(self._ledger.get(campaign)),
                    tickets=sum(c.tickets for c in contestants),
                )
            )
        return summary

    def recent_draws(self, limit: int = 7) -> list[DrawSession]:
        """Group winners by UTC day and campaign, oldest first, keeping the last ``limit``."""

        if limit < 0:
            raise ValueError("limit must not be negative")
        counts: dict[tuple[date, Campaign], int] = {}
        for winner in self._ledger.get():
            # Entries stored without a timestamp belong to no session
            if winner.drawn_at is None:
                continue
            key = (_draw_day(winner), winner.campaign)
            counts[key] = counts.get(key, 0) + 1

        sessions = [
            DrawSession(day=day, campaign=campaign, count=count)
            for (day, campaign), count in sorted(
                counts.items(), key=lambda item: (item[0][0], item[0][1].value)
            )
        ]
        return sessions[-limit:] if limit else []

    def insights(self) -> Insights:
        summary = self.campaign_summary()
        departments = self.department_breakdown()

        total_contestants = sum(s.contestants for s in summary)
        total_winners = sum(s.winners for s in summary)
        total_tickets = sum(s.tickets for s in summary)

        most_active: Optional[DepartmentStats] = None
        for stats in departments:
            if most_active is None or stats.total_winners > most_active.total_winners:
                most_active = stats

        return Insights(
            total_contestants=total_contestants,
            total_winners=total_winners,
            total_tickets=total_tickets,
            draw_sessions=len(self.recent_draws()),
            remaining_pool=total_contestants - total_winners,
            average_tickets=(
                round_half_up(total_tickets / total_contestants)
                if total_contestants
                else 0
            ),
            most_active_department=most_active,
        )


def _draw_day(winner: Winner) -> date:
    return winner.drawn_at.astimezone(timezone.utc).date()


__all__ = [
    "CampaignStats",
    "DepartmentStats",
    "DrawSession",
    "Insights",
    "RaffleAnalytics",
    "round_half_up",
]

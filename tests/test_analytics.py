from __future__ import annotations

import json
import unittest
from datetime import date, datetime, timedelta, timezone

from raffledraw import Campaign, Contestant, Department, Winner, WinnerLedger
from raffledraw.analytics import RaffleAnalytics, round_half_up
from raffledraw.directory import StaticContestantDirectory
from raffledraw.ledger import InMemoryStorage


def _contestant(cid, department, tickets, campaign) -> Contestant:
    return Contestant(
        id=cid, name=cid.upper(), department=department, tickets=tickets, campaign=campaign
    )


class RaffleAnalyticsTests(unittest.TestCase):
    def setUp(self) -> None:
        c70, c80 = Campaign.DISCOVERY_70, Campaign.DISCOVERY_80
        intl, india, apac = Department
        self.contestants = [
            _contestant("a", intl, 1, c70),
            _contestant("b", intl, 3, c70),
            _contestant("c", india, 2, c70),
            _contestant("d", apac, 4, c80),
            _contestant("e", apac, 5, c80),
            _contestant("f", india, 1, c80),
        ]
        self.directory = StaticContestantDirectory(self.contestants)
        self.ledger = WinnerLedger(InMemoryStorage())
        self.analytics = RaffleAnalytics(self.directory, self.ledger)
        self.by_id = {c.id: c for c in self.contestants}

    def _record(self, cid: str, drawn_at: datetime) -> None:
        contestant = self.by_id[cid]
        self.ledger.append(
            Winner.from_contestant(contestant).with_updates(drawn_at=drawn_at),
            contestant.campaign,
        )

    def test_empty_ledger(self) -> None:
        insights = self.analytics.insights()
        self.assertEqual(insights.total_winners, 0)
        self.assertEqual(insights.remaining_pool, 6)
        self.assertEqual(insights.draw_sessions, 0)
        self.assertEqual(self.analytics.recent_draws(), [])
        self.assertTrue(all(d.percentage == 0 for d in self.analytics.department_breakdown()))

    def test_department_breakdown(self) -> None:
        day = datetime(2026, 4, 1, 12, tzinfo=timezone.utc)
        self._record("a", day)
        self._record("d", day)
        self._record("e", day)

        stats = {s.department: s for s in self.analytics.department_breakdown()}
        intl = stats[Department.INTERNATIONAL_MESSAGING]
        self.assertEqual(intl.contestants[Campaign.DISCOVERY_70], 2)
        self.assertEqual(intl.contestants[Campaign.DISCOVERY_80], 0)
        self.assertEqual(intl.total_winners, 1)
        self.assertEqual(intl.percentage, 50)

        apac = stats[Department.APAC]
        self.assertEqual(apac.winners[Campaign.DISCOVERY_80], 2)
        self.assertEqual(apac.percentage, 100)
        self.assertEqual(stats[Department.INDIA_MESSAGING].percentage, 0)

    def test_campaign_summary(self) -> None:
        self._record("b", datetime(2026, 4, 1, tzinfo=timezone.utc))
        summary = {s.campaign: s for s in self.analytics.campaign_summary()}
        self.assertEqual(summary[Campaign.DISCOVERY_70].contestants, 3)
        self.assertEqual(summary[Campaign.DISCOVERY_70].winners, 1)
        self.assertEqual(summary[Campaign.DISCOVERY_70].tickets, 6)
        self.assertEqual(summary[Campaign.DISCOVERY_80].tickets, 10)
        self.assertEqual(summary[Campaign.DISCOVERY_80].label, "80% Discovery")

    def test_recent_draws_grouped_by_day_and_campaign(self) -> None:
        start = datetime(2026, 4, 1, 9, tzinfo=timezone.utc)
        self._record("a", start)
        self._record("b", start + timedelta(hours=3))
        self._record("d", start + timedelta(hours=1))
        self._record("c", start + timedelta(days=2))

        sessions = self.analytics.recent_draws()
        self.assertEqual(
            [(s.day, s.campaign, s.count) for s in sessions],
            [
                (date(2026, 4, 1), Campaign.DISCOVERY_70, 2),
                (date(2026, 4, 1), Campaign.DISCOVERY_80, 1),
                (date(2026, 4, 3), Campaign.DISCOVERY_70, 1),
            ],
        )
        self.assertEqual(len(self.analytics.recent_draws(limit=1)), 1)
        self.assertEqual(self.analytics.recent_draws(limit=1)[0].day, date(2026, 4, 3))

    def test_recent_draws_limit(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        ids = ["a", "b", "c", "d", "e", "f"]
        for offset, cid in enumerate(ids):
            self._record(cid, start + timedelta(days=offset * 2))
        self.assertEqual(len(self.analytics.recent_draws(limit=4)), 4)
        self.assertEqual(len(self.analytics.recent_draws()), 6)

    def test_insights(self) -> None:
        day = datetime(2026, 4, 1, tzinfo=timezone.utc)
        self._record("d", day)
        self._record("e", day)
        self._record("a", day + timedelta(days=1))

        insights = self.analytics.insights()
        self.assertEqual(insights.total_contestants, 6)
        self.assertEqual(insights.total_winners, 3)
        self.assertEqual(insights.total_tickets, 16)
        self.assertEqual(insights.remaining_pool, 3)
        self.assertEqual(insights.average_tickets, 3)
        self.assertEqual(insights.draw_sessions, 2)
        self.assertEqual(insights.most_active_department.department, Department.APAC)
        self.assertEqual(insights.most_active_department.department.short_name, "APAC")

    def test_winners_without_timestamp_are_left_out_of_sessions(self) -> None:
        entries = [
            {
                "id": "70-legacy",
                "contestantId": "a",
                "name": "A",
                "department": "International Messaging",
                "tickets": 1,
                "drawType": "discovery-70",
                "drawDate": None,
            },
            {
                "id": "70-dated",
                "contestantId": "b",
                "name": "B",
                "department": "International Messaging",
                "tickets": 3,
                "drawType": "discovery-70",
                "drawDate": "2026-04-01T10:00:00+00:00",
            },
        ]
        storage = InMemoryStorage({Campaign.DISCOVERY_70.storage_key: json.dumps(entries)})
        analytics = RaffleAnalytics(self.directory, WinnerLedger(storage))

        sessions = analytics.recent_draws()
        self.assertEqual(
            [(s.day, s.campaign, s.count) for s in sessions],
            [(date(2026, 4, 1), Campaign.DISCOVERY_70, 1)],
        )
        insights = analytics.insights()
        self.assertEqual(insights.total_winners, 2)
        self.assertEqual(insights.draw_sessions, 1)

    def test_round_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.49), 2)


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import random
import unittest

from raffledraw import (
    Campaign,
    Contestant,
    Department,
    EmptyPoolError,
    InsufficientPoolError,
    InvalidWeightError,
    PersistenceError,
    WinnerLedger,
)
from raffledraw.directory import StaticContestantDirectory
from raffledraw.ledger import InMemoryStorage
from raffledraw.workflows import run_draw


def _directory() -> StaticContestantDirectory:
    contestants = []
    departments = list(Department)
    for campaign in Campaign:
        for i in range(6):
            contestants.append(
                Contestant(
                    id=f"{campaign.code}-{i}",
                    name=f"Person {i}",
                    department=departments[i % 3],
                    tickets=i + 1,
                    campaign=campaign,
                )
            )
    return StaticContestantDirectory(contestants)


class RunDrawTests(unittest.TestCase):
    def setUp(self) -> None:
        self.directory = _directory()
        self.storage = InMemoryStorage()
        self.ledger = WinnerLedger(self.storage)

    def test_single_draw_is_recorded(self) -> None:
        winners = run_draw(
            self.directory, self.ledger, "discovery-70", rng=random.Random(3)
        )
        self.assertEqual(len(winners), 1)
        self.assertEqual(self.ledger.get(Campaign.DISCOVERY_70), winners)
        self.assertEqual(self.ledger.get(Campaign.DISCOVERY_80), [])
        self.assertTrue(winners[0].contestant_id.startswith("70-"))

    def test_repeated_draws_exhaust_pool_without_repeats(self) -> None:
        rng = random.Random(11)
        for _ in range(6):
            run_draw(self.directory, self.ledger, Campaign.DISCOVERY_80, rng=rng)
        recorded = [w.contestant_id for w in self.ledger.get(Campaign.DISCOVERY_80)]
        self.assertEqual(len(set(recorded)), 6)

        with self.assertRaises(EmptyPoolError):
            run_draw(self.directory, self.ledger, Campaign.DISCOVERY_80, rng=rng)
        self.assertEqual(len(self.ledger.get(Campaign.DISCOVERY_80)), 6)

    def test_batch_draw_and_insufficient_pool(self) -> None:
        winners = run_draw(
            self.directory, self.ledger, Campaign.DISCOVERY_70, count=4, rng=random.Random(5)
        )
        self.assertEqual(len({w.contestant_id for w in winners}), 4)

        with self.assertRaises(InsufficientPoolError) as ctx:
            run_draw(self.directory, self.ledger, Campaign.DISCOVERY_70, count=3)
        self.assertEqual(ctx.exception.available, 2)
        self.assertEqual(len(self.ledger.get(Campaign.DISCOVERY_70)), 4)

    def test_department_filter(self) -> None:
        winners = run_draw(
            self.directory,
            self.ledger,
            Campaign.DISCOVERY_70,
            count=2,
            department=Department.APAC,
            rng=random.Random(1),
        )
        self.assertEqual({w.department for w in winners}, {Department.APAC})

    def test_zero_ticket_pool_raises_invalid_weight(self) -> None:
        directory = StaticContestantDirectory(
            [
                Contestant(
                    id="z",
                    name="Zero",
                    department=Department.APAC,
                    tickets=0,
                    campaign=Campaign.DISCOVERY_70,
                )
            ]
        )
        with self.assertRaises(InvalidWeightError):
            run_draw(directory, self.ledger, Campaign.DISCOVERY_70)

    def test_corrupted_partition_fails_instead_of_overwriting(self) -> None:
        self.storage.write(Campaign.DISCOVERY_70.storage_key, "garbage")
        with self.assertLogs("raffledraw.ledger.ledger", level="WARNING"):
            with self.assertRaises(PersistenceError):
                run_draw(self.directory, self.ledger, Campaign.DISCOVERY_70)
        self.assertEqual(self.storage.read(Campaign.DISCOVERY_70.storage_key), "garbage")


if __name__ == "__main__":
    unittest.main()

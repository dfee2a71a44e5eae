"""Ticket-weighted winner selection without replacement."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Union

from ..domain import Contestant, Winner
from ..errors import EmptyPoolError, InsufficientPoolError, InvalidWeightError

logger = logging.getLogger(__name__)

Exclusion = Union[Winner, Contestant, str]


def _excluded_ids(already_won: Optional[Iterable[Exclusion]]) -> set[str]:
    """Collapse winners, contestants, or raw ids into a set of contestant ids."""

    ids: set[str] = set()
    for item in already_won or ():
        if isinstance(item, Winner):
            ids.add(item.contestant_id)
        elif isinstance(item, Contestant):
            ids.add(item.id)
        elif isinstance(item, str):
            ids.add(item)
        else:
            raise TypeError(
                f"Cannot exclude {type(item).__name__!r}; expected Winner, "
                "Contestant, or contestant id"
            )
    return ids


def _remaining(
    pool: Iterable[Contestant], excluded: set[str]
) -> list[Contestant]:
    # First occurrence wins when the pool repeats an id; order by id so the
    # cumulative walk does not depend on how the directory ordered the pool.
    seen: dict[str, Contestant] = {}
    for contestant in pool:
        if contestant.id in excluded or contestant.id in seen:
            continue
        seen[contestant.id] = contestant
    return [seen[key] for key in sorted(seen)]


def eligible_subset(
    pool: Iterable[Contestant],
    already_won: Optional[Iterable[Exclusion]] = None,
) -> list[Contestant]:
    """Return the contestants of ``pool`` that may still win.

    A contestant is eligible when its id does not appear in ``already_won``
    and it holds at least one ticket. The result is ordered by contestant id.
    """

    remaining = _remaining(pool, _excluded_ids(already_won))
    return [c for c in remaining if c.tickets > 0]


class WeightedDrawEngine:
    """Select winners with probability proportional to their ticket count.

    The engine holds no draw state between calls; every result is a function
    of the pool, the exclusion set, the requested count, and the random
    source. It never persists anything: callers hand the returned contestants
    to :meth:`raffledraw.ledger.WinnerLedger.append`.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """Create an engine.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Random source used for every draw. Pass a seeded instance for
            reproducible tests; production callers leave it unset.
        """

        self._rng = rng or random.Random()

    def draw_one(
        self,
        pool: Iterable[Contestant],
        already_won: Optional[Iterable[Exclusion]] = None,
    ) -> Contestant:
        """Draw a single winner from ``pool``.

        Parameters
        ----------
        pool : Iterable[Contestant]
            Contestants taking part in the draw.
        already_won : Optional[Iterable[Winner | Contestant | str]]
            Past winners (or their contestant ids) that must not be drawn again.

        Returns
        -------
        Contestant
            The selected contestant.

        Raises
        ------
        EmptyPoolError
            If every contestant in ``pool`` is excluded.
        InvalidWeightError
            If the contestants that remain all hold zero or negative tickets.
        """

        remaining = _remaining(pool, _excluded_ids(already_won))
        if not remaining:
            raise EmptyPoolError()
        eligible = [c for c in remaining if c.tickets > 0]
        if not eligible:
            raise InvalidWeightError(
                f"{len(remaining)} remaining contestant(s) hold no valid tickets"
            )
        return self._pick(eligible)

    def draw_many(
        self,
        pool: Iterable[Contestant],
        already_won: Optional[Iterable[Exclusion]] = None,
        count: int = 1,
    ) -> list[Contestant]:
        """Draw ``count`` distinct winners from ``pool``.

        Each drawn contestant joins the exclusion set before the next draw,
        so the result never contains duplicates.

        Raises
        ------
        ValueError
            If ``count`` is negative.
        TypeError
            If ``count`` is not an integer.
        InsufficientPoolError
            If ``count`` exceeds the number of eligible contestants. The
            exception's ``available`` attribute reports how many could be drawn.
        """

        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError("count must be an integer")
        if count < 0:
            raise ValueError("count must not be negative")

        pool = list(pool)
        excluded = _excluded_ids(already_won)
        eligible = [c for c in _remaining(pool, excluded) if c.tickets > 0]
        if count > len(eligible):
            raise InsufficientPoolError(requested=count, available=len(eligible))

        drawn: list[Contestant] = []
        for _ in range(count):
            winner = self.draw_one(eligible, excluded)
            excluded.add(winner.id)
            drawn.append(winner)

        logger.debug(
            f"Drew {len(drawn)} of {len(eligible)} eligible contestant(s)"
        )
        return drawn

    def _pick(self, eligible: list[Contestant]) -> Contestant:
        """Walk the cumulative ticket totals and stop past a uniform point."""

        total = sum(c.tickets for c in eligible)
        point = self._rng.randrange(total)
        cumulative = 0
        for contestant in eligible:
            cumulative += contestant.tickets
            if cumulative > point:
                return contestant
        # Unreachable while every weight is positive
        raise RuntimeError("Weighted walk ended without a selection")


__all__ = ["WeightedDrawEngine", "eligible_subset"]

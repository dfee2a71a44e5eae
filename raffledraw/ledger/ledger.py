"""Campaign-partitioned record of drawn winners."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Union

from ..domain import Campaign, Contestant, Winner
from ..errors import LedgerDecodeError
from .codec import decode_partition, encode_partition
from .ids import generate_winner_id
from .storage import StorageBackend

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _drawn_at_key(winner: Winner) -> datetime:
    return winner.drawn_at or _EPOCH


class WinnerLedger:
    """Durable store of winners, one independent partition per campaign.

    Each partition is encoded as a single blob and written through the
    injected :class:`~raffledraw.ledger.storage.StorageBackend`. The ledger
    assumes a single writer: callers must finish one draw-and-append
    sequence for a campaign before starting the next.
    """

    def __init__(
        self,
        storage: StorageBackend,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Create a ledger on top of ``storage``.

        Parameters
        ----------
        storage : StorageBackend
            Backend that holds the encoded partitions.
        clock : Optional[Callable[[], datetime]], default: None
            Source of the current time used to stamp new winners. Defaults to
            the timezone-aware UTC wall clock.
        """

        self._storage = storage
        self._clock = clock or _utcnow

    def get(self, campaign: Optional[Union[Campaign, str]] = None) -> list[Winner]:
        """Return recorded winners.

        With a ``campaign``, returns that partition in insertion order.
        Without one, returns every partition merged and sorted by draw time,
        most recent first.

        A partition whose blob cannot be decoded is reported as empty rather
        than raising; the failure is logged at warning level.
        """

        if campaign is None:
            merged: list[Winner] = []
            for each in Campaign:
                merged.extend(self._load_lenient(each))
            return sorted(merged, key=_drawn_at_key, reverse=True)
        return self._load_lenient(Campaign.parse(campaign))

    def append(
        self,
        winner: Union[Winner, Contestant],
        campaign: Union[Campaign, str],
    ) -> Winner:
        """Record ``winner`` in ``campaign``'s partition and persist it.

        The winner receives an identifier and a draw timestamp unless it
        already carries them. A preset id must carry the campaign prefix
        (e.g. ``"70-..."``) so ids never repeat across campaigns. Timestamps
        never decrease within a partition: a preset ``drawn_at`` older than
        the newest recorded winner is moved up to that winner's timestamp.

        Returns
        -------
        Winner
            The winner exactly as stored.

        Raises
        ------
        ValueError
            If the winner belongs to another campaign, if its contestant has
            already won in this campaign, or if its preset id lacks the
            campaign prefix or is taken.
        PersistenceError
            If the stored partition is unreadable or the write fails.
        """

        return self.append_many([winner], campaign)[0]

    def append_many(
        self,
        winners: Iterable[Union[Winner, Contestant]],
        campaign: Union[Campaign, str],
    ) -> list[Winner]:
        """Record several winners with a single partition write.

        Either every winner is persisted or none is.
        """

        campaign = Campaign.parse(campaign)
        existing = self._load_strict(campaign)

        taken_ids = {w.id for w in existing if w.id is not None}
        won = {w.contestant_id for w in existing}
        last_drawn = max((_drawn_at_key(w) for w in existing), default=_EPOCH)

        stored: list[Winner] = []
        for item in winners:
            winner = Winner.from_contestant(item) if isinstance(item, Contestant) else item
            if winner.campaign != campaign:
                raise ValueError(
                    f"Winner belongs to {winner.campaign.value!r}, "
                    f"cannot record it in {campaign.value!r}"
                )
            if winner.contestant_id in won:
                raise ValueError(
                    f"Contestant {winner.contestant_id!r} has already won in "
                    f"{campaign.value!r}"
                )
            if winner.id is not None:
                if not winner.id.startswith(f"{campaign.code}-"):
                    raise ValueError(
                        f"Winner id {winner.id!r} lacks the {campaign.code}- prefix "
                        f"required in {campaign.value!r}"
                    )
                if winner.id in taken_ids:
                    raise ValueError(f"Winner id {winner.id!r} is already recorded")

            changes: dict = {}
            if winner.id is None:
                changes["id"] = generate_winner_id(campaign.code, taken_ids)
            if winner.drawn_at is None:
                changes["drawn_at"] = max(self._clock(), last_drawn)
            elif winner.drawn_at < last_drawn:
                changes["drawn_at"] = last_drawn
            if changes:
                winner = winner.with_updates(**changes)

            taken_ids.add(winner.id)
            won.add(winner.contestant_id)
            last_drawn = max(last_drawn, _drawn_at_key(winner))
            stored.append(winner)

        if not stored:
            return []

        self._storage.write(campaign.storage_key, encode_partition(existing + stored))
        logger.debug(
            f"Recorded {len(stored)} winner(s) in {campaign.value}; "
            f"partition now holds {len(existing) + len(stored)}"
        )
        return stored

    def clear(self, campaign: Optional[Union[Campaign, str]] = None) -> None:
        """Delete one campaign's partition, or every partition when omitted."""

        targets = list(Campaign) if campaign is None else [Campaign.parse(campaign)]
        for each in targets:
            self._storage.delete(each.storage_key)
            logger.debug(f"Cleared ledger partition for {each.value}")

    def _load_strict(self, campaign: Campaign) -> list[Winner]:
        blob = self._storage.read(campaign.storage_key)
        if not blob:
            return []
        return decode_partition(blob)

    def _load_lenient(self, campaign: Campaign) -> list[Winner]:
        try:
            return self._load_strict(campaign)
        except LedgerDecodeError as exc:
            logger.warning(
                f"Ignoring undecodable ledger partition for {campaign.value}: {exc}"
            )
            return []


__all__ = ["WinnerLedger"]

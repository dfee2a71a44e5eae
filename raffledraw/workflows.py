import logging
import random
from typing import Optional, Union

from .directory import ContestantDirectory
from .domain import Campaign, Department, Winner
from .draw.engine import WeightedDrawEngine
from .ledger.ledger import WinnerLedger

logger = logging.getLogger(__name__)


def run_draw(
    directory: ContestantDirectory,
    ledger: WinnerLedger,
    campaign: Union[Campaign, str],
    count: int = 1,
    department: Optional[Union[Department, str]] = None,
    rng: Optional[random.Random] = None,
) -> list[Winner]:
    """Draw ``count`` new winners for ``campaign`` and record them.

    The workflow performs the following steps:

    1. Read the campaign's pool from ``directory``, restricted to
       ``department`` when one is given.
    2. Read the campaign's ledger partition so past winners are excluded.
    3. Select the winners with :class:`WeightedDrawEngine`.
    4. Append all of them to the ledger in one write.

    Nothing is written when the draw itself fails. Draws for the same
    campaign must not run concurrently.

    Parameters
    ----------
    directory : ContestantDirectory
        Source of contestants.
    ledger : WinnerLedger
        Ledger the winners are recorded in.
    campaign : Campaign | str
        Campaign to draw for.
    count : int, default: 1
        Number of winners to draw.
    department : Optional[Department | str]
        Restrict the pool to one department.
    rng : Optional[random.Random]
        Random source forwarded to the engine; useful for deterministic tests.

    Returns
    -------
    list[Winner]
        The newly recorded winners, with ids and timestamps assigned.

    Raises
    ------
    EmptyPoolError
        If nobody is left to draw (``InvalidWeightError`` when only
        zero-ticket contestants remain).
    InsufficientPoolError
        If fewer than ``count`` contestants are eligible.
    PersistenceError
        If the ledger cannot be read or written.
    """

    campaign = Campaign.parse(campaign)
    if department is None:
        pool = directory.list_contestants(campaign)
    else:
        pool = directory.list_contestants_by_department(department, campaign)

    already_won = ledger.get(campaign)
    engine = WeightedDrawEngine(rng=rng)
    if count == 1:
        drawn = [engine.draw_one(pool, already_won)]
    else:
        drawn = engine.draw_many(pool, already_won, count)

    winners = ledger.append_many(drawn, campaign)
    logger.info(
        f"{campaign.label}: drew {len(winners)} winner(s) from a pool of {len(pool)}"
    )
    return winners

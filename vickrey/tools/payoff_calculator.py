# tools/payoff_calculator.py

import logging
from typing import Dict, Optional

from vickrey.core.game_logic import AuctionStrategy, VickreyAuctionStrategy
from vickrey.core.models import AuctionObject, AuctionSettlement

logger = logging.getLogger(__name__)


def compute_payoffs(
    auction_object: AuctionObject,
    values: Dict[str, int],
    strategy: Optional[AuctionStrategy] = None,
) -> AuctionSettlement:
    """
    Decide the auction object and compute quasilinear payoffs.

    Assumes:
    - strategy.determine_winner(auction_object) -> AuctionOutcome (Vickrey by default)
    - Payoff for winner i:  u_i = v_i - price
    - Payoff for losers:    u_j = 0
    - values: participant name -> private value. Participants without a value
      are only allowed if they lose.
    """
    strategy = strategy or VickreyAuctionStrategy()
    outcome = strategy.determine_winner(auction_object)

    names = [p.name for p in auction_object.participants()]
    payoffs: dict[str, int] = {name: 0 for name in names}
    for name in values:
        payoffs.setdefault(name, 0)

    if not outcome.ok:
        logger.debug("No sale: %s", outcome.failure.message)
        return AuctionSettlement(
            winner_id=None,
            clearing_price=0,
            revenue=0,
            payoffs=payoffs,
            failure=outcome.failure,
        )

    result = outcome.result
    winner_id = result.winner.participant.name
    if winner_id not in values:
        raise ValueError(f"No private value given for winning participant {winner_id!r}")

    payoffs[winner_id] = values[winner_id] - result.clearing_price
    logger.debug(
        "Winner %s pays %d, payoff %d", winner_id, result.clearing_price, payoffs[winner_id]
    )

    return AuctionSettlement(
        winner_id=winner_id,
        winning_bid=result.winner.price,
        clearing_price=result.clearing_price,
        revenue=result.clearing_price,  # for a single-item auction, revenue = price
        payoffs=payoffs,
    )

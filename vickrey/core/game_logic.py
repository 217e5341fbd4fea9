# core/game_logic.py
from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from vickrey.core.models import (
    AuctionFailureKind,
    AuctionObject,
    AuctionOutcome,
    AuctionResult,
    Bid,
)


@runtime_checkable
class AuctionStrategy(Protocol):
    """
    Anything that can decide an auction object.
    Returns an AuctionOutcome holding either the result or the reason no winner exists.
    """

    def determine_winner(self, auction_object: AuctionObject) -> AuctionOutcome:
        ...


def effective_bids(auction_object: AuctionObject) -> List[Bid]:
    # Bids equal to the reserve price do not qualify
    return [b for b in auction_object.bids if b.price > auction_object.reserve_price]


class VickreyAuctionStrategy:
    """
    Sealed-bid second-price auction.

    The highest bid above reserve wins and pays the highest price offered by
    any *other* participant. See https://en.wikipedia.org/wiki/Vickrey_auction
    """

    def determine_winner(self, auction_object: AuctionObject) -> AuctionOutcome:
        bids = effective_bids(auction_object)

        if len(bids) < 2:
            return AuctionOutcome.failed(AuctionFailureKind.INSUFFICIENT_BIDS)

        if len({b.participant for b in bids}) < 2:
            return AuctionOutcome.failed(AuctionFailureKind.INSUFFICIENT_BIDDERS)

        # max() keeps the first bid reaching the top price
        highest_bid = max(bids, key=lambda b: b.price)

        # All of the winner's bids are excluded, not just the winning one
        clearing_price = max(
            b.price for b in bids if b.participant != highest_bid.participant
        )

        return AuctionOutcome.success(
            AuctionResult(
                auction_object=auction_object,
                winner=highest_bid,
                clearing_price=clearing_price,
            )
        )


class FirstPriceAuctionStrategy:
    """Sealed-bid first-price auction: the highest bid above reserve wins and pays its own price."""

    def determine_winner(self, auction_object: AuctionObject) -> AuctionOutcome:
        bids = effective_bids(auction_object)
        if not bids:
            return AuctionOutcome.failed(AuctionFailureKind.INSUFFICIENT_BIDS)

        highest_bid = max(bids, key=lambda b: b.price)
        return AuctionOutcome.success(
            AuctionResult(
                auction_object=auction_object,
                winner=highest_bid,
                clearing_price=highest_bid.price,
            )
        )


_STRATEGIES = {
    "second_price": VickreyAuctionStrategy,
    "vickrey": VickreyAuctionStrategy,
    "first_price": FirstPriceAuctionStrategy,
}


def get_strategy(mechanism: str) -> AuctionStrategy:
    try:
        return _STRATEGIES[mechanism]()
    except KeyError:
        raise ValueError(
            f"Unknown auction mechanism {mechanism!r}, expected one of {sorted(_STRATEGIES)}"
        ) from None


def run_second_price_auction(auction_object: AuctionObject) -> AuctionOutcome:
    # returns the outcome of a Vickrey evaluation of the auction object
    return VickreyAuctionStrategy().determine_winner(auction_object)

# simulator/run_demo.py

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from vickrey.config.logger import setup_logger
from vickrey.config.settings import Settings, load_settings
from vickrey.core.game_logic import AuctionStrategy, get_strategy
from vickrey.core.models import (
    AuctionFailureKind,
    AuctionObject,
    AuctionOutcome,
    AuctionResult,
    Participant,
)

# fixed name so "python -m" still logs under the vickrey tree
logger = logging.getLogger("vickrey.simulator.run_demo")

DEMO_RESERVE_PRICE = 100


def print_result(result: AuctionResult) -> None:
    print(f"Auction buyer = {result.winner.participant}")
    print(f"Auction buyer bid price = {result.winner.price}")
    print(f"Auction final price = {result.clearing_price}")


def _expect_failure(outcome: AuctionOutcome, kind: AuctionFailureKind) -> None:
    # Anything other than the expected failure is fatal
    if outcome.ok or outcome.failure.kind != kind:
        outcome.unwrap()
        raise RuntimeError(f"Expected {kind.value}, got a result")
    print(f"-> {outcome.failure.message} check OK")


def _expect_result(result: AuctionResult, buyer: str, bid_price: int, final_price: int) -> None:
    actual = (result.winner.participant.name, result.winner.price, result.clearing_price)
    if actual != (buyer, bid_price, final_price):
        raise RuntimeError(f"Expected {(buyer, bid_price, final_price)}, got {actual}")


def _save_plot(auction_object: AuctionObject, outcome: AuctionOutcome, plot_dir: Optional[str], name: str) -> None:
    if not plot_dir:
        return
    from vickrey.viz.plots import plot_bid_ledger

    os.makedirs(plot_dir, exist_ok=True)
    plot_bid_ledger(auction_object, outcome, output_path=os.path.join(plot_dir, f"{name}.png"))


def run_vickrey_scenario(
    strategy: AuctionStrategy,
    plot_dir: Optional[str] = None,
) -> AuctionResult:
    """
    Four buyers, some with several bids. The winner is "E" at 140, paying 130.
    """
    print("=> Scenario: vickrey auction")

    auction_object = AuctionObject(reserve_price=DEMO_RESERVE_PRICE)
    a_buyer = Participant(name="A")
    c_buyer = Participant(name="C")
    d_buyer = Participant(name="D")
    e_buyer = Participant(name="E")

    auction_object.add_bids(a_buyer, 110, 130)
    auction_object.add_bids(c_buyer, 125)
    auction_object.add_bids(d_buyer, 105, 115, 90)
    auction_object.add_bids(e_buyer, 132, 135, 140)
    logger.debug("Ledger has %d bids from %d buyers", len(auction_object), len(auction_object.participants()))

    outcome = strategy.determine_winner(auction_object)
    result = outcome.unwrap()

    print_result(result)
    _expect_result(result, "E", 140, 130)
    _save_plot(auction_object, outcome, plot_dir, "vickrey_auction")
    print("=> Scenario: vickrey auction OK")
    return result


def run_vickrey_limits_scenario(
    strategy: AuctionStrategy,
    plot_dir: Optional[str] = None,
) -> AuctionResult:
    """
    Walk one ledger through the limit cases:
    - not enough bids above reserve
    - not enough buyers
    - then enough of both, where B wins at 300 and pays 154
    """
    print("=> Scenario: vickrey auction limits")

    auction_object = AuctionObject(reserve_price=DEMO_RESERVE_PRICE)
    a_buyer = Participant(name="A")
    b_buyer = Participant(name="B")

    auction_object.add_bids(a_buyer, 12)
    _expect_failure(strategy.determine_winner(auction_object), AuctionFailureKind.INSUFFICIENT_BIDS)

    auction_object.add_bids(a_buyer, 120, 154)
    _expect_failure(strategy.determine_winner(auction_object), AuctionFailureKind.INSUFFICIENT_BIDDERS)

    auction_object.add_bids(b_buyer, 300, 110)
    outcome = strategy.determine_winner(auction_object)
    result = outcome.unwrap()

    print_result(result)
    _expect_result(result, "B", 300, 154)
    _save_plot(auction_object, outcome, plot_dir, "vickrey_auction_limits")
    print("=> Scenario: vickrey auction limits OK")
    return result


def main(settings: Optional[Settings] = None) -> int:
    """
    Simple CLI entrypoint: run both scenarios with the configured strategy.
    Both scenarios expect second-price rules; another mechanism fails loudly.
    """
    settings = settings or load_settings()
    setup_logger("vickrey", log_file=settings.log_file, level=settings.log_level)

    strategy = get_strategy(settings.auction.mechanism)
    logger.info("Running demo scenarios with %s", settings.auction.mechanism)

    run_vickrey_scenario(strategy, settings.plot_dir)
    run_vickrey_limits_scenario(strategy, settings.plot_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())

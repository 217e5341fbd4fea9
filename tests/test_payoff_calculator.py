import pytest

from vickrey.core.game_logic import FirstPriceAuctionStrategy
from vickrey.core.models import AuctionFailureKind, AuctionObject, Participant
from vickrey.tools.payoff_calculator import compute_payoffs


@pytest.fixture
def auction_object():
    auction_object = AuctionObject(reserve_price=100)
    auction_object.add_bids(Participant(name="A"), 110, 130)
    auction_object.add_bids(Participant(name="C"), 125)
    auction_object.add_bids(Participant(name="E"), 132, 135, 140)
    return auction_object


def test_winner_gets_value_minus_price(auction_object):
    settlement = compute_payoffs(auction_object, values={"A": 135, "C": 130, "E": 160})

    assert settlement.winner_id == "E"
    assert settlement.winning_bid == 140
    assert settlement.clearing_price == 130
    assert settlement.revenue == 130
    assert settlement.payoffs == {"A": 0, "C": 0, "E": 30}
    assert settlement.failure is None


def test_losers_without_values_get_zero(auction_object):
    settlement = compute_payoffs(auction_object, values={"E": 150, "X": 90})
    assert settlement.payoffs == {"A": 0, "C": 0, "E": 20, "X": 0}


def test_winner_needs_a_value(auction_object):
    with pytest.raises(ValueError, match="E"):
        compute_payoffs(auction_object, values={"A": 135})


def test_no_sale_when_outcome_fails():
    auction_object = AuctionObject(reserve_price=100)
    auction_object.add_bids(Participant(name="A"), 12, 120, 154)

    settlement = compute_payoffs(auction_object, values={"A": 200})

    assert settlement.winner_id is None
    assert settlement.winning_bid is None
    assert settlement.clearing_price == 0
    assert settlement.revenue == 0
    assert settlement.payoffs == {"A": 0}
    assert settlement.failure.kind == AuctionFailureKind.INSUFFICIENT_BIDDERS


def test_custom_strategy(auction_object):
    settlement = compute_payoffs(auction_object, values={"E": 160}, strategy=FirstPriceAuctionStrategy())

    assert settlement.clearing_price == 140
    assert settlement.payoffs["E"] == 20

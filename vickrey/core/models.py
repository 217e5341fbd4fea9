# core/models.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr, model_validator


class AuctionConfig(BaseModel):
    """Configuration for a single auction evaluation."""

    mechanism: str = "second_price"  # e.g. "second_price", "first_price"


class Participant(BaseModel):
    """
    Someone who places bids on an auction object.
    Identified by name only: two participants with the same name are the same buyer.
    """

    name: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name


class Bid(BaseModel):
    """A single sealed bid placed by a participant."""

    participant: Participant
    price: int

    model_config = {"frozen": True}


class AuctionObject(BaseModel):
    """
    The object being sold.

    - reserve_price: the system never sells at or below this price
    - bids: every bid placed so far, earliest first. A participant may bid several times.
    """

    reserve_price: int = Field(..., frozen=True)

    _bids: List[Bid] = PrivateAttr(default_factory=list)

    @property
    def bids(self) -> Tuple[Bid, ...]:
        return tuple(self._bids)

    def add_bids(self, participant: Participant, *prices: int) -> None:
        """Place one bid per price for the participant, in the order given."""
        for price in prices:
            self._bids.append(Bid(participant=participant, price=price))

    def participants(self) -> List[Participant]:
        """Distinct participants, in order of their first bid."""
        seen: List[Participant] = []
        for bid in self._bids:
            if bid.participant not in seen:
                seen.append(bid.participant)
        return seen

    def __len__(self) -> int:
        return len(self._bids)


class AuctionResult(BaseModel):
    """Winner and clearing price for an evaluated auction object."""

    auction_object: AuctionObject
    winner: Bid
    clearing_price: int  # what the winner pays, not necessarily winner.price

    model_config = {"frozen": True}

    def __hash__(self) -> int:
        # the ledger stays mutable, so it is left out
        return hash((self.winner, self.clearing_price))


class AuctionFailureKind(str, Enum):
    """Why no winner could be determined for the current ledger."""

    INSUFFICIENT_BIDS = "insufficient_bids"
    INSUFFICIENT_BIDDERS = "insufficient_bidders"


FAILURE_MESSAGES = {
    AuctionFailureKind.INSUFFICIENT_BIDS: "Need more bids above reserve !",
    AuctionFailureKind.INSUFFICIENT_BIDDERS: "Need more buyers !",
}


class AuctionFailure(BaseModel):
    kind: AuctionFailureKind
    message: str

    model_config = {"frozen": True}

    @classmethod
    def of(cls, kind: AuctionFailureKind) -> "AuctionFailure":
        return cls(kind=kind, message=FAILURE_MESSAGES[kind])


class AuctionError(RuntimeError):
    """Raised by AuctionOutcome.unwrap() when the outcome is a failure."""

    def __init__(self, failure: AuctionFailure):
        super().__init__(failure.message)
        self.failure = failure


class AuctionOutcome(BaseModel):
    """
    What a strategy returns: either a result or a classified failure, never both.
    """

    result: Optional[AuctionResult] = None
    failure: Optional[AuctionFailure] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_exactly_one(self) -> "AuctionOutcome":
        if (self.result is None) == (self.failure is None):
            raise ValueError("AuctionOutcome needs exactly one of result or failure")
        return self

    @classmethod
    def success(cls, result: AuctionResult) -> "AuctionOutcome":
        return cls(result=result)

    @classmethod
    def failed(cls, kind: AuctionFailureKind) -> "AuctionOutcome":
        return cls(failure=AuctionFailure.of(kind))

    @property
    def ok(self) -> bool:
        return self.result is not None

    def unwrap(self) -> AuctionResult:
        if self.failure is not None:
            raise AuctionError(self.failure)
        return self.result


class AuctionSettlement(BaseModel):
    """Result of evaluating one auction object and computing payoffs."""

    winner_id: Optional[str]  # None if no sale (e.g. not enough bids above reserve)
    winning_bid: Optional[int] = None
    clearing_price: int
    revenue: int  # equal to clearing_price for a single object, kept explicit

    payoffs: dict[str, int]  # participant name -> utility/payoff
    failure: Optional[AuctionFailure] = None

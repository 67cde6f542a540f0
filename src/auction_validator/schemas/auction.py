"""Auction parameters, state and actions, with their ledger Data encodings."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from auction_validator.core.exceptions import DecodeError
from auction_validator.schemas.plutus_data import (
    ConstrData,
    HexStr,
    PlutusData,
    byte_string,
    constr,
    expect_bytes,
    expect_constr,
    expect_int,
    integer,
)


class AuctionParams(BaseModel):
    """Fixed at auction creation and applied to every validation call.

    The highest bid (if any) is paid to ``seller``; with no bid the asset
    goes back to the seller. ``end_time`` is the bidding deadline and the
    earliest time the auction can be closed.
    """

    model_config = ConfigDict(frozen=True)

    seller: HexStr
    currency_symbol: HexStr
    token_name: HexStr
    min_bid: int = Field(..., ge=0)
    end_time: int

    def to_data(self) -> ConstrData:
        return constr(
            0,
            byte_string(self.seller),
            byte_string(self.currency_symbol),
            byte_string(self.token_name),
            integer(self.min_bid),
            integer(self.end_time),
        )

    @classmethod
    def from_data(cls, data: PlutusData) -> "AuctionParams":
        seller, cs, tn, min_bid, end_time = expect_constr(data, 0, 5, "AuctionParams")
        return cls(
            seller=expect_bytes(seller, "AuctionParams.seller"),
            currency_symbol=expect_bytes(cs, "AuctionParams.currency_symbol"),
            token_name=expect_bytes(tn, "AuctionParams.token_name"),
            min_bid=expect_int(min_bid, "AuctionParams.min_bid"),
            end_time=expect_int(end_time, "AuctionParams.end_time"),
        )


class Bid(BaseModel):
    """A bid. Two bids are equal when bidder key hash and amount match;
    the wallet address is transport data only."""

    model_config = ConfigDict(frozen=True)

    address: HexStr
    pub_key_hash: HexStr
    amount: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bid):
            return NotImplemented
        return self.pub_key_hash == other.pub_key_hash and self.amount == other.amount

    def __hash__(self) -> int:
        return hash((self.pub_key_hash, self.amount))

    def to_data(self) -> ConstrData:
        return constr(
            0,
            byte_string(self.address),
            byte_string(self.pub_key_hash),
            integer(self.amount),
        )

    @classmethod
    def from_data(cls, data: PlutusData) -> "Bid":
        address, pkh, amount = expect_constr(data, 0, 3, "Bid")
        return cls(
            address=expect_bytes(address, "Bid.address"),
            pub_key_hash=expect_bytes(pkh, "Bid.pub_key_hash"),
            amount=expect_int(amount, "Bid.amount"),
        )


class AuctionDatum(BaseModel):
    """Contract state: the highest bid so far, if one exists.

    Encoded transparently as ``Maybe Bid``.
    """

    model_config = ConfigDict(frozen=True)

    highest_bid: Bid | None = None

    def to_data(self) -> ConstrData:
        if self.highest_bid is None:
            return constr(1)
        return constr(0, self.highest_bid.to_data())

    @classmethod
    def from_data(cls, data: PlutusData) -> "AuctionDatum":
        if isinstance(data, ConstrData) and data.constructor == 1:
            expect_constr(data, 1, 0, "AuctionDatum")
            return cls(highest_bid=None)
        (bid,) = expect_constr(data, 0, 1, "AuctionDatum")
        return cls(highest_bid=Bid.from_data(bid))


class NewBid(BaseModel):
    """Place a new highest bid."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["new_bid"] = "new_bid"
    bid: Bid

    @property
    def action(self) -> str:
        return "place_bid"

    def to_data(self) -> ConstrData:
        return constr(0, self.bid.to_data())


class Payout(BaseModel):
    """Close the auction: pay the seller and deliver the asset."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["payout"] = "payout"

    @property
    def action(self) -> str:
        return "payout"

    def to_data(self) -> ConstrData:
        return constr(1)


AuctionRedeemer = Union[NewBid, Payout]


def redeemer_from_data(data: PlutusData) -> AuctionRedeemer:
    """Decode a redeemer Data value.

    Raises:
        DecodeError: If the value is not ``NewBid bid`` or ``Payout``
    """
    if not isinstance(data, ConstrData):
        raise DecodeError(f"AuctionRedeemer: expected constructor, got {type(data).__name__}")
    if data.constructor == 0:
        (bid,) = expect_constr(data, 0, 1, "NewBid")
        return NewBid(bid=Bid.from_data(bid))
    if data.constructor == 1:
        expect_constr(data, 1, 0, "Payout")
        return Payout()
    raise DecodeError(f"AuctionRedeemer: unknown constructor {data.constructor}")

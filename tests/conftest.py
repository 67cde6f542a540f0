"""Pytest configuration and fixtures for testing."""

from types import SimpleNamespace

import pytest

from auction_validator.schemas.auction import AuctionDatum, AuctionParams, Bid
from auction_validator.schemas.ledger import (
    Address,
    Interval,
    OutputDatum,
    ScriptContext,
    SpendingScript,
    TxInfo,
    TxInInfo,
    TxOut,
    TxOutDatum,
    TxOutRef,
    Value,
)
from auction_validator.services.validator_service import AuctionValidator

# Key hashes and asset identifiers (hex)
SELLER = "a1" * 28
BIDDER_1 = "b1" * 28
BIDDER_2 = "b2" * 28
BIDDER_3 = "b3" * 28
POLICY = "c0" * 28
TICKET = b"TICKET".hex()
SCRIPT_HASH = "5c" * 28
END_TIME = 1000

OWN_REF = TxOutRef(tx_id="0f" * 32, index=0)
SCRIPT_ADDRESS = Address.script(SCRIPT_HASH)


def _value(lovelace: int = 0, tickets: int = 0) -> Value:
    root: dict[str, dict[str, int]] = {}
    if lovelace:
        root[""] = {"": lovelace}
    if tickets:
        root[POLICY] = {TICKET: tickets}
    return Value(root)


class ContextBuilder:
    """Assembles a ScriptContext spending the auction output."""

    def __init__(self, state: AuctionDatum | None = None):
        self.state = state if state is not None else AuctionDatum()
        self.outputs: list[TxOut] = []
        self.valid_range = Interval.to(END_TIME - 1)
        self.include_own_input = True
        self.datum_override: object = ...

    def with_bid(self, bid: Bid | None) -> "ContextBuilder":
        self.state = AuctionDatum(highest_bid=bid)
        return self

    def valid(self, interval: Interval) -> "ContextBuilder":
        self.valid_range = interval
        return self

    def pay(self, pkh: str, lovelace: int = 0, tickets: int = 0) -> "ContextBuilder":
        self.outputs.append(TxOut(address=Address.pubkey(pkh), value=_value(lovelace, tickets)))
        return self

    def continuing(
        self,
        lovelace: int,
        tickets: int = 1,
        bid: Bid | None = None,
        datum: TxOutDatum | None = None,
    ) -> "ContextBuilder":
        if datum is None:
            datum = OutputDatum(data=AuctionDatum(highest_bid=bid).to_data())
        self.outputs.append(
            TxOut(address=SCRIPT_ADDRESS, value=_value(lovelace, tickets), datum=datum)
        )
        return self

    def without_own_input(self) -> "ContextBuilder":
        self.include_own_input = False
        return self

    def with_input_datum(self, data) -> "ContextBuilder":
        self.datum_override = data
        return self

    def build(self) -> ScriptContext:
        locked = self.state.highest_bid.amount if self.state.highest_bid else 2_000_000
        datum = self.state.to_data() if self.datum_override is ... else self.datum_override
        inputs = []
        if self.include_own_input:
            inputs.append(
                TxInInfo(
                    out_ref=OWN_REF,
                    resolved=TxOut(
                        address=SCRIPT_ADDRESS,
                        value=_value(locked, 1),
                        datum=OutputDatum(data=self.state.to_data()),
                    ),
                )
            )
        return ScriptContext(
            tx_info=TxInfo(inputs=inputs, outputs=self.outputs, valid_range=self.valid_range),
            script_info=SpendingScript(out_ref=OWN_REF, datum=datum),
        )


@pytest.fixture
def keys() -> SimpleNamespace:
    """Identifiers shared by the auction scenarios."""
    return SimpleNamespace(
        seller=SELLER,
        b1=BIDDER_1,
        b2=BIDDER_2,
        b3=BIDDER_3,
        policy=POLICY,
        ticket=TICKET,
        script_hash=SCRIPT_HASH,
        end_time=END_TIME,
        own_ref=OWN_REF,
    )


@pytest.fixture
def params() -> AuctionParams:
    """Seller S auctions one TICKET, minimum bid 10, ending at t=1000."""
    return AuctionParams(
        seller=SELLER,
        currency_symbol=POLICY,
        token_name=TICKET,
        min_bid=10,
        end_time=END_TIME,
    )


@pytest.fixture
def validator(params: AuctionParams) -> AuctionValidator:
    return AuctionValidator(params)


@pytest.fixture
def make_bid():
    """Factory for bids; the address is derived from the key hash."""

    def _make_bid(pkh: str, amount: int, address: str | None = None) -> Bid:
        return Bid(address=address or "61" + pkh, pub_key_hash=pkh, amount=amount)

    return _make_bid


@pytest.fixture
def ctx() -> ContextBuilder:
    """Fresh context builder for a no-bid auction, bidding still open."""
    return ContextBuilder()


@pytest.fixture
def make_ctx():
    """Factory for context builders starting from a given state."""
    return ContextBuilder

"""Pydantic schemas for ledger data, auction state and verdicts."""

from auction_validator.schemas.auction import (
    AuctionDatum,
    AuctionParams,
    AuctionRedeemer,
    Bid,
    NewBid,
    Payout,
    redeemer_from_data,
)
from auction_validator.schemas.ledger import (
    Address,
    Interval,
    ScriptContext,
    SpendingScript,
    TxInfo,
    TxInInfo,
    TxOut,
    TxOutRef,
    Value,
)
from auction_validator.schemas.plutus_data import PlutusData, decode_data, encode_data
from auction_validator.schemas.validation import RawValidationRequest, ValidationRequest, Verdict

__all__ = [
    "AuctionParams",
    "AuctionDatum",
    "AuctionRedeemer",
    "Bid",
    "NewBid",
    "Payout",
    "redeemer_from_data",
    "Address",
    "Interval",
    "ScriptContext",
    "SpendingScript",
    "TxInfo",
    "TxInInfo",
    "TxOut",
    "TxOutRef",
    "Value",
    "PlutusData",
    "decode_data",
    "encode_data",
    "Verdict",
    "ValidationRequest",
    "RawValidationRequest",
]

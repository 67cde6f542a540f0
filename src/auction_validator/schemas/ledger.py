"""Read-only view of the candidate transaction supplied by the host ledger.

The host has already checked signatures, script hashes and input existence
before the validator runs. These models assume the context is internally
consistent and only describe its shape.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt, model_validator

from auction_validator.schemas.plutus_data import HexStr, PlutusData

# Native currency lives under the empty currency symbol and token name
ADA_SYMBOL = ""
ADA_TOKEN = ""

_LEDGER_CONFIG = ConfigDict(extra="forbid", frozen=True)


class TxOutRef(BaseModel):
    model_config = _LEDGER_CONFIG

    tx_id: HexStr
    index: int = Field(..., ge=0)


class Credential(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["pubkey", "script"]
    hash: HexStr


class Address(BaseModel):
    model_config = _LEDGER_CONFIG

    credential: Credential
    staking: Credential | None = None

    @classmethod
    def pubkey(cls, pkh: str) -> "Address":
        return cls(credential=Credential(kind="pubkey", hash=pkh))

    @classmethod
    def script(cls, script_hash: str) -> "Address":
        return cls(credential=Credential(kind="script", hash=script_hash))

    def pub_key_hash(self) -> str | None:
        """Key hash of a pubkey payment credential, None for scripts."""
        if self.credential.kind == "pubkey":
            return self.credential.hash
        return None


def _check_unique_keys(mapping: dict, what: str) -> None:
    # Keys are normalized to lowercase hex, so "C0" and "c0" name one entry
    seen: set[str] = set()
    for key in mapping:
        if not isinstance(key, str):
            continue
        normalized = key.lower()
        if normalized in seen:
            raise ValueError(f"duplicate {what}: {key!r}")
        seen.add(normalized)


class Value(RootModel[dict[HexStr, dict[HexStr, StrictInt]]]):
    """Multi-asset value: currency symbol -> token name -> quantity."""

    model_config = ConfigDict(frozen=True)

    root: dict[HexStr, dict[HexStr, StrictInt]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def reject_colliding_keys(cls, data: object) -> object:
        if isinstance(data, dict):
            _check_unique_keys(data, "currency symbol")
            for tokens in data.values():
                if isinstance(tokens, dict):
                    _check_unique_keys(tokens, "token name")
        return data

    def value_of(self, currency_symbol: str, token_name: str) -> int:
        return self.root.get(currency_symbol, {}).get(token_name, 0)

    def lovelace_value(self) -> int:
        return self.value_of(ADA_SYMBOL, ADA_TOKEN)


class NoOutputDatum(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["none"] = "none"


class OutputDatumHash(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["hash"] = "hash"
    hash: HexStr


class OutputDatum(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["inline"] = "inline"
    data: PlutusData


TxOutDatum = Annotated[
    Union[NoOutputDatum, OutputDatumHash, OutputDatum],
    Field(discriminator="kind"),
]


class TxOut(BaseModel):
    model_config = _LEDGER_CONFIG

    address: Address
    value: Value = Field(default_factory=Value)
    datum: TxOutDatum = Field(default_factory=NoOutputDatum)


class TxInInfo(BaseModel):
    model_config = _LEDGER_CONFIG

    out_ref: TxOutRef
    resolved: TxOut


# =============================================================================
# Validity interval
# =============================================================================

Extended = Union[Literal["neg_inf", "pos_inf"], StrictInt]


def _bound_key(bound: Extended, closed: bool, step: int) -> tuple[int, int]:
    """Order key for a bound on the discrete time axis.

    An open finite bound is moved one step inward so that ``(t`` compares
    equal to ``[t+1`` and ``t)`` to ``t-1]``.
    """
    if bound == "neg_inf":
        return (0, 0)
    if bound == "pos_inf":
        return (2, 0)
    return (1, bound if closed else bound + step)


class LowerBound(BaseModel):
    model_config = _LEDGER_CONFIG

    bound: Extended
    closed: bool = True

    def key(self) -> tuple[int, int]:
        return _bound_key(self.bound, self.closed, 1)


class UpperBound(BaseModel):
    model_config = _LEDGER_CONFIG

    bound: Extended
    closed: bool = True

    def key(self) -> tuple[int, int]:
        return _bound_key(self.bound, self.closed, -1)


class Interval(BaseModel):
    """Time range (POSIX milliseconds) a transaction may be included in."""

    model_config = _LEDGER_CONFIG

    lower: LowerBound
    upper: UpperBound

    @classmethod
    def always(cls) -> "Interval":
        return cls(lower=LowerBound(bound="neg_inf"), upper=UpperBound(bound="pos_inf"))

    @classmethod
    def to(cls, end: int) -> "Interval":
        """``(-inf, end]``"""
        return cls(lower=LowerBound(bound="neg_inf"), upper=UpperBound(bound=end))

    @classmethod
    def from_(cls, start: int) -> "Interval":
        """``[start, +inf)``"""
        return cls(lower=LowerBound(bound=start), upper=UpperBound(bound="pos_inf"))

    @classmethod
    def interval(cls, start: int, end: int) -> "Interval":
        """``[start, end]``"""
        return cls(lower=LowerBound(bound=start), upper=UpperBound(bound=end))

    def contains(self, other: "Interval") -> bool:
        """True if every point of ``other`` lies inside this interval."""
        return self.lower.key() <= other.lower.key() and other.upper.key() <= self.upper.key()


# =============================================================================
# Script context
# =============================================================================

class SpendingScript(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["spending"] = "spending"
    out_ref: TxOutRef
    datum: PlutusData | None = None


class MintingScript(BaseModel):
    model_config = _LEDGER_CONFIG

    kind: Literal["minting"] = "minting"
    currency_symbol: HexStr


ScriptInfo = Annotated[Union[SpendingScript, MintingScript], Field(discriminator="kind")]


class TxInfo(BaseModel):
    model_config = _LEDGER_CONFIG

    inputs: list[TxInInfo] = Field(default_factory=list)
    outputs: list[TxOut] = Field(default_factory=list)
    valid_range: Interval = Field(default_factory=Interval.always)

    def find_input(self, out_ref: TxOutRef) -> TxInInfo | None:
        for tx_in in self.inputs:
            if tx_in.out_ref == out_ref:
                return tx_in
        return None


class ScriptContext(BaseModel):
    model_config = _LEDGER_CONFIG

    tx_info: TxInfo
    script_info: ScriptInfo

    def own_input(self) -> TxInInfo | None:
        """The input currently being validated, if this is a spend."""
        if not isinstance(self.script_info, SpendingScript):
            return None
        return self.tx_info.find_input(self.script_info.out_ref)

    def continuing_outputs(self) -> list[TxOut] | None:
        """Outputs paying back to the address of the input being spent.

        Returns None when the own input cannot be located.
        """
        own = self.own_input()
        if own is None:
            return None
        return [o for o in self.tx_info.outputs if o.address == own.resolved.address]

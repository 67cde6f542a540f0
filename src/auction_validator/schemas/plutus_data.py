"""Ledger Data values in the detailed JSON schema.

A Data value is one of::

    {"int": 42}
    {"bytes": "deadbeef"}
    {"list": [...]}
    {"map": [{"k": ..., "v": ...}]}
    {"constructor": 0, "fields": [...]}

Datums, redeemers and script parameters travel in this form. Models are
strict: unknown keys, booleans posing as integers and odd-length hex all
fail to validate.
"""

import json
import re
from typing import Annotated, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

from auction_validator.core.exceptions import DecodeError

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _check_hex(value: str) -> str:
    if not _HEX_RE.fullmatch(value):
        raise ValueError(f"not a hex byte string: {value!r}")
    return bytes.fromhex(value).hex()


# Opaque byte string, carried as lowercase hex
HexStr = Annotated[str, AfterValidator(_check_hex)]

_DATA_CONFIG = ConfigDict(extra="forbid", frozen=True)


class IntData(BaseModel):
    model_config = _DATA_CONFIG

    value: StrictInt = Field(..., alias="int")


class BytesData(BaseModel):
    model_config = _DATA_CONFIG

    value: HexStr = Field(..., alias="bytes")


class ListData(BaseModel):
    model_config = _DATA_CONFIG

    items: list["PlutusData"] = Field(..., alias="list")


class MapEntry(BaseModel):
    model_config = _DATA_CONFIG

    k: "PlutusData"
    v: "PlutusData"


class MapData(BaseModel):
    model_config = _DATA_CONFIG

    entries: list[MapEntry] = Field(..., alias="map")


class ConstrData(BaseModel):
    model_config = _DATA_CONFIG

    constructor: StrictInt = Field(..., ge=0)
    fields: list["PlutusData"] = Field(default_factory=list)


PlutusData = Union[ConstrData, MapData, ListData, IntData, BytesData]

ListData.model_rebuild()
MapEntry.model_rebuild()
MapData.model_rebuild()
ConstrData.model_rebuild()

data_adapter: TypeAdapter[PlutusData] = TypeAdapter(PlutusData)


# =============================================================================
# Builders
# =============================================================================

def integer(value: int) -> IntData:
    return IntData.model_validate({"int": value})


def byte_string(value: str) -> BytesData:
    return BytesData.model_validate({"bytes": value})


def constr(index: int, *fields: PlutusData) -> ConstrData:
    return ConstrData(constructor=index, fields=list(fields))


# =============================================================================
# Codec
# =============================================================================

def decode_data(blob: bytes | str) -> PlutusData:
    """Decode a JSON blob into a Data value.

    Raises:
        DecodeError: If the blob is not JSON or not Data-shaped
    """
    try:
        return data_adapter.validate_json(blob)
    except ValidationError as e:
        raise DecodeError(f"invalid Data: {e.error_count()} error(s)") from e


def encode_data(data: PlutusData) -> bytes:
    return json.dumps(data_adapter.dump_python(data, by_alias=True)).encode("utf-8")


# =============================================================================
# Destructuring helpers used by the typed decoders
# =============================================================================

def expect_constr(data: PlutusData, index: int, arity: int, what: str) -> list[PlutusData]:
    """Return the fields of a constructor with a known index and arity."""
    if not isinstance(data, ConstrData):
        raise DecodeError(f"{what}: expected constructor, got {type(data).__name__}")
    if data.constructor != index:
        raise DecodeError(f"{what}: expected constructor {index}, got {data.constructor}")
    if len(data.fields) != arity:
        raise DecodeError(f"{what}: expected {arity} field(s), got {len(data.fields)}")
    return data.fields


def expect_int(data: PlutusData, what: str) -> int:
    if not isinstance(data, IntData):
        raise DecodeError(f"{what}: expected int, got {type(data).__name__}")
    return data.value


def expect_bytes(data: PlutusData, what: str) -> str:
    if not isinstance(data, BytesData):
        raise DecodeError(f"{what}: expected bytes, got {type(data).__name__}")
    return data.value

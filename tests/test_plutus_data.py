"""Tests for the ledger Data JSON codec."""

import json

import pytest
from pydantic import ValidationError

from auction_validator.core.exceptions import DecodeError
from auction_validator.schemas.auction import AuctionParams
from auction_validator.schemas.plutus_data import (
    BytesData,
    ConstrData,
    IntData,
    ListData,
    MapData,
    byte_string,
    constr,
    decode_data,
    encode_data,
    expect_bytes,
    expect_constr,
    expect_int,
    integer,
)


class TestDecode:
    """Decoding JSON blobs into Data values."""

    def test_decode_each_shape(self):
        blob = json.dumps(
            {
                "constructor": 0,
                "fields": [
                    {"int": -5},
                    {"bytes": "DEADbeef"},
                    {"list": [{"int": 1}, {"int": 2}]},
                    {"map": [{"k": {"bytes": ""}, "v": {"int": 3}}]},
                ],
            }
        )

        data = decode_data(blob)

        assert isinstance(data, ConstrData)
        i, b, lst, m = data.fields
        assert isinstance(i, IntData) and i.value == -5
        assert isinstance(b, BytesData) and b.value == "deadbeef"
        assert isinstance(lst, ListData) and [x.value for x in lst.items] == [1, 2]
        assert isinstance(m, MapData) and m.entries[0].v == integer(3)

    def test_constructor_without_fields(self):
        assert decode_data('{"constructor": 1}') == constr(1)

    @pytest.mark.parametrize(
        "blob",
        [
            '{"int": 1, "bytes": "00"}',
            '{"int": "1"}',
            '{"int": true}',
            '{"bytes": "abc"}',
            '{"bytes": "de ad"}',
            '{"bytes": " dead"}',
            '{"bytes": "0xdead"}',
            '{"constructor": -1, "fields": []}',
            '{"list": {"int": 1}}',
            '{"float": 1.5}',
            '{"value": 1}',
            "42",
            "",
        ],
    )
    def test_rejects_non_data(self, blob):
        with pytest.raises(DecodeError):
            decode_data(blob)


class TestEncode:
    """Encoding uses the schema keys, not the Python field names."""

    def test_encode_uses_schema_keys(self):
        data = constr(0, integer(1), byte_string("AB"))

        assert json.loads(encode_data(data)) == {
            "constructor": 0,
            "fields": [{"int": 1}, {"bytes": "ab"}],
        }

    def test_nested_encode_decode(self):
        data = ListData.model_validate(
            {"list": [constr(1), MapData.model_validate({"map": [{"k": integer(0), "v": constr(0)}]})]}
        )

        assert decode_data(encode_data(data)) == data


class TestDestructuring:
    """Helpers used by the typed decoders."""

    def test_expect_constr_returns_fields(self):
        assert expect_constr(constr(3, integer(1)), 3, 1, "X") == [integer(1)]

    @pytest.mark.parametrize(
        "data,index,arity",
        [
            (integer(1), 0, 0),
            (constr(1), 0, 0),
            (constr(0, integer(1)), 0, 2),
        ],
    )
    def test_expect_constr_mismatch(self, data, index, arity):
        with pytest.raises(DecodeError):
            expect_constr(data, index, arity, "X")

    def test_expect_scalars(self):
        assert expect_int(integer(4), "n") == 4
        assert expect_bytes(byte_string("0a"), "b") == "0a"
        with pytest.raises(DecodeError):
            expect_int(byte_string("0a"), "n")
        with pytest.raises(DecodeError):
            expect_bytes(integer(4), "b")


class TestByteStrings:
    """Byte strings have exactly one spelling: lowercase hex, no separators."""

    def test_uppercase_normalized(self):
        assert decode_data('{"bytes": "DEADBEEF"}') == byte_string("deadbeef")

    def test_empty_allowed(self):
        assert decode_data('{"bytes": ""}').value == ""

    @pytest.mark.parametrize("value", ["de ad", "dead\n", "de\tad", "dea"])
    def test_separators_and_odd_length_rejected(self, value):
        with pytest.raises(ValidationError):
            byte_string(value)

    def test_spaced_key_hash_not_accepted_as_identifier(self, keys):
        """A seller spelled with spaces cannot pose as a different key."""
        spaced = " ".join(keys.seller[i:i + 2] for i in range(0, len(keys.seller), 2))

        with pytest.raises(ValidationError):
            AuctionParams(
                seller=spaced,
                currency_symbol=keys.policy,
                token_name=keys.ticket,
                min_bid=10,
                end_time=1000,
            )

"""Contract blueprint: the Data schemas of the auction's parameters,
datum and redeemer, laid out as a CIP-57 ``plutus.json`` document."""

from typing import Any

from auction_validator.core.config import Settings

BYTES_REF = {"$ref": "#/definitions/ByteArray"}
INT_REF = {"$ref": "#/definitions/Int"}


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/definitions/{name}"}


def _constructor(title: str, index: int, fields: list[tuple[str, dict]]) -> dict[str, Any]:
    return {
        "title": title,
        "dataType": "constructor",
        "index": index,
        "fields": [{"title": name, **schema} for name, schema in fields],
    }


DEFINITIONS: dict[str, dict[str, Any]] = {
    "ByteArray": {"dataType": "bytes"},
    "Int": {"dataType": "integer"},
    "AuctionParams": {
        "title": "AuctionParams",
        "anyOf": [
            _constructor(
                "AuctionParams",
                0,
                [
                    ("seller", BYTES_REF),
                    ("currency_symbol", BYTES_REF),
                    ("token_name", BYTES_REF),
                    ("min_bid", INT_REF),
                    ("end_time", INT_REF),
                ],
            )
        ],
    },
    "Bid": {
        "title": "Bid",
        "anyOf": [
            _constructor(
                "Bid",
                0,
                [
                    ("address", BYTES_REF),
                    ("pub_key_hash", BYTES_REF),
                    ("amount", INT_REF),
                ],
            )
        ],
    },
    "Maybe$Bid": {
        "title": "Maybe",
        "anyOf": [
            _constructor("Just", 0, [("value", _ref("Bid"))]),
            _constructor("Nothing", 1, []),
        ],
    },
    "AuctionDatum": {"title": "AuctionDatum", **_ref("Maybe$Bid")},
    "AuctionRedeemer": {
        "title": "AuctionRedeemer",
        "anyOf": [
            _constructor("NewBid", 0, [("bid", _ref("Bid"))]),
            _constructor("Payout", 1, []),
        ],
    },
}


def build_blueprint(settings: Settings) -> dict[str, Any]:
    """Build the blueprint document for the auction validator."""
    return {
        "preamble": {
            "title": settings.BLUEPRINT_TITLE,
            "description": "Single-asset English auction",
            "version": settings.APP_VERSION,
            "plutusVersion": settings.PLUTUS_VERSION,
        },
        "validators": [
            {
                "title": "auction.auction",
                "parameters": [{"title": "params", "schema": _ref("AuctionParams")}],
                "datum": {"title": "datum", "schema": _ref("AuctionDatum")},
                "redeemer": {"title": "redeemer", "schema": _ref("AuctionRedeemer")},
            }
        ],
        "definitions": DEFINITIONS,
    }

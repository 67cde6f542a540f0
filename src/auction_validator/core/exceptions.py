"""Rejection taxonomy for auction validation."""

from enum import Enum


class RejectReason(str, Enum):
    """Why a candidate transaction was rejected."""

    # Decode failures
    MALFORMED_REDEEMER = "MALFORMED_REDEEMER"
    MALFORMED_STATE = "MALFORMED_STATE"
    MALFORMED_CONTEXT = "MALFORMED_CONTEXT"

    # PlaceBid violations
    INSUFFICIENT_BID = "INSUFFICIENT_BID"
    BID_TOO_LATE = "BID_TOO_LATE"
    REFUND_NOT_FOUND = "REFUND_NOT_FOUND"
    WRONG_CONTINUING_OUTPUT_COUNT = "WRONG_CONTINUING_OUTPUT_COUNT"
    INCORRECT_OUTPUT_DATUM = "INCORRECT_OUTPUT_DATUM"
    INCORRECT_OUTPUT_VALUE = "INCORRECT_OUTPUT_VALUE"

    # Payout violations
    PAYOUT_TOO_EARLY = "PAYOUT_TOO_EARLY"
    SELLER_NOT_PAID = "SELLER_NOT_PAID"
    ASSET_NOT_DELIVERED = "ASSET_NOT_DELIVERED"


class ValidationRejected(Exception):
    """Raised by a validation check that does not hold.

    Args:
        reason: Rejection code
        message: Human readable trace, for logs only
    """

    def __init__(self, reason: RejectReason, message: str = ""):
        self.reason = reason
        self.message = message or reason.value
        super().__init__(f"{reason.value}: {self.message}")


class DecodeError(ValueError):
    """A ledger Data value does not have the expected shape."""

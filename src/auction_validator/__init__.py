"""Authorization logic for a single-asset English auction."""

from auction_validator.services.validator_service import (
    AuctionValidator,
    check,
    validate_untyped,
)

__all__ = [
    "AuctionValidator",
    "check",
    "validate_untyped",
]

"""Business logic services."""

from auction_validator.services.validator_service import (
    AuctionValidator,
    check,
    output_pays,
    validate_untyped,
)

__all__ = [
    "AuctionValidator",
    "check",
    "output_pays",
    "validate_untyped",
]

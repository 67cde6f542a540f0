"""API v1 routers."""

from auction_validator.api.v1 import blueprint, validate

__all__ = ["blueprint", "validate"]

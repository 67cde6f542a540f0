from auction_validator.core.config import settings
from auction_validator.core.exceptions import DecodeError, RejectReason, ValidationRejected

__all__ = [
    "settings",
    "RejectReason",
    "ValidationRejected",
    "DecodeError",
]

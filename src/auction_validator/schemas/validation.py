"""Validation verdict and request/response schemas."""

from pydantic import BaseModel

from auction_validator.core.exceptions import RejectReason
from auction_validator.schemas.auction import AuctionParams
from auction_validator.schemas.ledger import ScriptContext
from auction_validator.schemas.plutus_data import PlutusData


class Verdict(BaseModel):
    """Outcome of one validation call. ``reason`` is set iff rejected."""

    accepted: bool
    action: str | None = None
    reason: RejectReason | None = None
    message: str | None = None

    @classmethod
    def accept(cls, action: str) -> "Verdict":
        return cls(accepted=True, action=action)

    @classmethod
    def reject(cls, reason: RejectReason, message: str, action: str | None = None) -> "Verdict":
        return cls(accepted=False, action=action, reason=reason, message=message)


class ValidationRequest(BaseModel):
    """Schema for a typed validation request."""

    params: AuctionParams
    redeemer: PlutusData
    context: ScriptContext


class RawValidationRequest(BaseModel):
    """Schema for a validation request carrying opaque JSON blobs."""

    params: AuctionParams
    redeemer_blob: str
    context_blob: str

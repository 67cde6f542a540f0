"""Validation API endpoints.

A decided verdict, accepted or rejected, is always returned with HTTP 200.
"""

from fastapi import APIRouter

from auction_validator.schemas.validation import RawValidationRequest, ValidationRequest, Verdict
from auction_validator.services.validator_service import AuctionValidator

router = APIRouter()


@router.post("", response_model=Verdict)
async def validate_transaction(request: ValidationRequest):
    """Validate a typed script context against an auction."""
    validator = AuctionValidator(request.params)
    return validator.validate_context(request.redeemer, request.context)


@router.post("/raw", response_model=Verdict)
async def validate_raw_transaction(request: RawValidationRequest):
    """Validate opaque redeemer and context blobs against an auction.

    Malformed blobs are a rejection, not a request error.
    """
    validator = AuctionValidator(request.params)
    return validator.validate_blobs(request.redeemer_blob, request.context_blob)

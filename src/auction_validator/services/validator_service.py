"""Auction validator service.

Decides whether a candidate transaction may spend the auction's locked
output. The decision is a pure function of the auction parameters, the
current state, the requested action and the transaction context.

Precondition: the host has already authenticated the transaction
(signatures, script hashes, input existence). The context is taken as
ground truth and never re-derived.
"""

import logging
import time
from typing import Callable, Iterable

from pydantic import ValidationError

from auction_validator.core.exceptions import DecodeError, RejectReason, ValidationRejected
from auction_validator.middleware.metrics import record_verdict
from auction_validator.schemas.auction import (
    AuctionDatum,
    AuctionParams,
    AuctionRedeemer,
    Bid,
    NewBid,
    redeemer_from_data,
)
from auction_validator.schemas.ledger import (
    Interval,
    NoOutputDatum,
    OutputDatumHash,
    ScriptContext,
    SpendingScript,
    TxOut,
    TxOutDatum,
    Value,
)
from auction_validator.schemas.plutus_data import PlutusData, decode_data
from auction_validator.schemas.validation import Verdict

logger = logging.getLogger(__name__)

ValuePredicate = Callable[[Value], bool]


# =============================================================================
# Shared predicates
# =============================================================================

def lovelace_exactly(amount: int) -> ValuePredicate:
    """Match a value holding exactly ``amount`` lovelace."""
    return lambda value: value.lovelace_value() == amount


def asset_exactly(currency_symbol: str, token_name: str, quantity: int = 1) -> ValuePredicate:
    """Match a value holding exactly ``quantity`` of one asset."""
    return lambda value: value.value_of(currency_symbol, token_name) == quantity


def output_pays(outputs: Iterable[TxOut], recipient: str, value_spec: ValuePredicate) -> bool:
    """Return True if some output pays ``recipient`` a value matching ``value_spec``.

    Args:
        outputs: Transaction outputs to scan
        recipient: Public key hash of the payee
        value_spec: Predicate over the output value

    Returns:
        True if at least one output matches both recipient and value
    """
    return any(
        output.address.pub_key_hash() == recipient and value_spec(output.value)
        for output in outputs
    )


# =============================================================================
# Decoding
# =============================================================================

def decode_redeemer(data: PlutusData) -> AuctionRedeemer:
    try:
        return redeemer_from_data(data)
    except (DecodeError, ValidationError) as e:
        raise ValidationRejected(
            RejectReason.MALFORMED_REDEEMER, f"Failed to parse AuctionRedeemer: {e}"
        ) from e


def extract_state(ctx: ScriptContext) -> AuctionDatum:
    """Read the current auction state from the input being spent."""
    info = ctx.script_info
    if not isinstance(info, SpendingScript) or info.datum is None:
        raise ValidationRejected(RejectReason.MALFORMED_STATE, "Expected SpendingScript with datum")
    try:
        return AuctionDatum.from_data(info.datum)
    except (DecodeError, ValidationError) as e:
        raise ValidationRejected(
            RejectReason.MALFORMED_STATE, f"Failed to parse AuctionDatum: {e}"
        ) from e


def decode_context(blob: bytes | str) -> ScriptContext:
    try:
        return ScriptContext.model_validate_json(blob)
    except ValidationError as e:
        raise ValidationRejected(
            RejectReason.MALFORMED_CONTEXT,
            f"Failed to parse ScriptContext: {e.error_count()} error(s)",
        ) from e


# =============================================================================
# Validator
# =============================================================================

class AuctionValidator:
    """Validator for one auction instance."""

    def __init__(self, params: AuctionParams):
        self.params = params

    def validate(
        self, state: AuctionDatum, redeemer: AuctionRedeemer, ctx: ScriptContext
    ) -> Verdict:
        """Judge one candidate transaction against the current state.

        Never raises: every violated condition becomes a rejected Verdict
        carrying the first failing reason.
        """
        start_time = time.perf_counter()
        try:
            if isinstance(redeemer, NewBid):
                self._check_new_bid(redeemer.bid, state.highest_bid, ctx)
            else:
                self._check_payout(state.highest_bid, ctx)
        except ValidationRejected as e:
            verdict = Verdict.reject(e.reason, e.message, action=redeemer.action)
        else:
            verdict = Verdict.accept(redeemer.action)
        return self._finish(verdict, start_time)

    def validate_context(self, redeemer: PlutusData, ctx: ScriptContext) -> Verdict:
        """Decode the redeemer and the spent state, then validate."""
        start_time = time.perf_counter()
        try:
            action = decode_redeemer(redeemer)
            state = extract_state(ctx)
        except ValidationRejected as e:
            logger.warning(f"Decode failure: {e.reason.value} ({e.message})")
            return self._finish(Verdict.reject(e.reason, e.message), start_time)
        return self.validate(state, action, ctx)

    def validate_blobs(self, redeemer_blob: bytes | str, context_blob: bytes | str) -> Verdict:
        """Validate from the opaque JSON blobs handed over by the host."""
        start_time = time.perf_counter()
        try:
            try:
                redeemer = decode_data(redeemer_blob)
            except DecodeError as e:
                raise ValidationRejected(
                    RejectReason.MALFORMED_REDEEMER, f"Failed to parse AuctionRedeemer: {e}"
                ) from e
            ctx = decode_context(context_blob)
        except ValidationRejected as e:
            logger.warning(f"Decode failure: {e.reason.value} ({e.message})")
            return self._finish(Verdict.reject(e.reason, e.message), start_time)
        return self.validate_context(redeemer, ctx)

    def _finish(self, verdict: Verdict, start_time: float) -> Verdict:
        action = verdict.action or "unknown"
        if verdict.accepted:
            logger.debug(f"Accepted {action}")
        else:
            logger.info(f"Rejected {action}: {verdict.reason.value} ({verdict.message})")
        record_verdict(
            action,
            verdict.accepted,
            verdict.reason.value if verdict.reason else None,
            time.perf_counter() - start_time,
        )
        return verdict

    # -------------------------------------------------------------------------
    # PlaceBid
    # -------------------------------------------------------------------------

    def _check_new_bid(self, bid: Bid, highest_bid: Bid | None, ctx: ScriptContext) -> None:
        self._sufficient_bid(bid, highest_bid)
        self._valid_bid_time(ctx)
        self._refunds_previous_highest_bid(highest_bid, ctx)
        self._correct_output(bid, ctx)

    def _sufficient_bid(self, bid: Bid, highest_bid: Bid | None) -> None:
        # First bid may equal the minimum, later bids must beat the current one
        if highest_bid is not None:
            if bid.amount <= highest_bid.amount:
                raise ValidationRejected(
                    RejectReason.INSUFFICIENT_BID,
                    f"Bid {bid.amount} does not exceed highest bid {highest_bid.amount}",
                )
        elif bid.amount < self.params.min_bid:
            raise ValidationRejected(
                RejectReason.INSUFFICIENT_BID,
                f"Bid {bid.amount} is below minimum bid {self.params.min_bid}",
            )

    def _valid_bid_time(self, ctx: ScriptContext) -> None:
        if not Interval.to(self.params.end_time).contains(ctx.tx_info.valid_range):
            raise ValidationRejected(
                RejectReason.BID_TOO_LATE,
                f"Validity range may extend past end time {self.params.end_time}",
            )

    def _refunds_previous_highest_bid(self, highest_bid: Bid | None, ctx: ScriptContext) -> None:
        if highest_bid is None:
            return
        if not output_pays(
            ctx.tx_info.outputs,
            highest_bid.pub_key_hash,
            lovelace_exactly(highest_bid.amount),
        ):
            raise ValidationRejected(RejectReason.REFUND_NOT_FOUND, "Not found: refund output")

    def _correct_output(self, bid: Bid, ctx: ScriptContext) -> None:
        outputs = ctx.continuing_outputs()
        if outputs is None:
            raise ValidationRejected(
                RejectReason.MALFORMED_CONTEXT, "Own input not found among transaction inputs"
            )
        if len(outputs) != 1:
            raise ValidationRejected(
                RejectReason.WRONG_CONTINUING_OUTPUT_COUNT,
                f"Expected exactly one continuing output, got {len(outputs)}",
            )

        output = outputs[0]
        self._check_output_datum(bid, output.datum)

        value = output.value
        if not (
            value.lovelace_value() == bid.amount
            and value.value_of(self.params.currency_symbol, self.params.token_name) == 1
        ):
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_VALUE,
                f"Invalid output value: expected {bid.amount} lovelace and 1 auctioned token",
            )

    def _check_output_datum(self, bid: Bid, datum: TxOutDatum) -> None:
        if isinstance(datum, OutputDatumHash):
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_DATUM, "Expected OutputDatum, got OutputDatumHash"
            )
        if isinstance(datum, NoOutputDatum):
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_DATUM, "Expected OutputDatum, got NoOutputDatum"
            )

        try:
            new_state = AuctionDatum.from_data(datum.data)
        except (DecodeError, ValidationError) as e:
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_DATUM, "Failed to decode output datum"
            ) from e

        if new_state.highest_bid is None:
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_DATUM,
                "Invalid output datum: expected Just Bid, got Nothing",
            )
        if new_state.highest_bid != bid:
            raise ValidationRejected(
                RejectReason.INCORRECT_OUTPUT_DATUM,
                "Invalid output datum: contains a different Bid than expected",
            )

    # -------------------------------------------------------------------------
    # Payout
    # -------------------------------------------------------------------------

    def _check_payout(self, highest_bid: Bid | None, ctx: ScriptContext) -> None:
        # Asset delivery is reported before seller payment
        self._valid_payout_time(ctx)
        self._highest_bidder_gets_asset(highest_bid, ctx)
        self._seller_gets_highest_bid(highest_bid, ctx)

    def _valid_payout_time(self, ctx: ScriptContext) -> None:
        if not Interval.from_(self.params.end_time).contains(ctx.tx_info.valid_range):
            raise ValidationRejected(
                RejectReason.PAYOUT_TOO_EARLY,
                f"Validity range may start before end time {self.params.end_time}",
            )

    def _seller_gets_highest_bid(self, highest_bid: Bid | None, ctx: ScriptContext) -> None:
        # No bid: the seller only gets the asset back
        if highest_bid is None:
            return
        if not output_pays(
            ctx.tx_info.outputs,
            self.params.seller,
            lovelace_exactly(highest_bid.amount),
        ):
            raise ValidationRejected(
                RejectReason.SELLER_NOT_PAID, "Not found: Output paid to seller"
            )

    def _highest_bidder_gets_asset(self, highest_bid: Bid | None, ctx: ScriptContext) -> None:
        recipient = highest_bid.pub_key_hash if highest_bid is not None else self.params.seller
        if not output_pays(
            ctx.tx_info.outputs,
            recipient,
            asset_exactly(self.params.currency_symbol, self.params.token_name),
        ):
            raise ValidationRejected(
                RejectReason.ASSET_NOT_DELIVERED, "Not found: Output paid to highest bidder"
            )


# =============================================================================
# Host entry points
# =============================================================================

def validate_untyped(
    params: AuctionParams, redeemer_blob: bytes | str, context_blob: bytes | str
) -> bool:
    """Boolean host contract: True iff the transaction is accepted."""
    return AuctionValidator(params).validate_blobs(redeemer_blob, context_blob).accepted


def check(params: AuctionParams, redeemer_blob: bytes | str, context_blob: bytes | str) -> None:
    """Hard-failure host contract.

    Raises:
        ValidationRejected: If the transaction is rejected
    """
    verdict = AuctionValidator(params).validate_blobs(redeemer_blob, context_blob)
    if not verdict.accepted:
        raise ValidationRejected(verdict.reason, verdict.message or "")

from __future__ import annotations
import logging
from typing import Any
from pydantic import ValidationError

from ..core.eventyay import EventyayClient
from ..core.nonce import generate_nonce
from ..errors import RedemptionRejected, TransportError, UNKNOWN_ATTENDEE
from ..schemas import RedeemResponse, RedemptionRequest, RedemptionResult

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = ("ok", "redeemed")

def classify_redemption(body: Any) -> RedemptionResult:
    """Turn a redeem response body into a RedemptionResult.

    ok/redeemed with a usable position -> success kind (badge url optional);
    every other status or shape -> failed.
    """
    try:
        resp = RedeemResponse.model_validate(body)
    except ValidationError:
        logger.warning("unexpected redeem response shape: %r", body)
        return RedemptionResult(kind="failed")

    pos = resp.position
    attendee = (pos.attendee_name if pos else None) or UNKNOWN_ATTENDEE
    if resp.status in SUCCESS_STATUSES and pos is not None:
        return RedemptionResult(kind=resp.status, attendee_name=attendee, badge_url=pos.badge_url)
    return RedemptionResult(kind="failed", attendee_name=attendee, reason=resp.reason)

def build_request(secret: str, lists: list[str]) -> RedemptionRequest:
    # fresh nonce every attempt, so a resubmission is never mistaken for a replay
    return RedemptionRequest(secret=secret, lists=list(lists), nonce=generate_nonce())

async def redeem(client: EventyayClient, secret: str, lists: list[str]) -> RedemptionResult:
    req = build_request(secret, lists)
    try:
        body = await client.post_redeem(req.model_dump(mode="json"))
    except TransportError as e:
        logger.warning("redeem transport failure: %s", e)
        return RedemptionResult(kind="error")
    result = classify_redemption(body)
    logger.info("redemption %s for %s (reason=%s)", result.kind, result.attendee_name, result.reason)
    return result

def ensure_redeemed(result: RedemptionResult) -> RedemptionResult:
    if result.is_success:
        return result
    if result.kind == "error":
        raise TransportError("redeem request did not complete")
    raise RedemptionRejected(attendee_name=result.attendee_name, reason=result.reason)

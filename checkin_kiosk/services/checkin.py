"""
Check-in and badge printing, the two operations a kiosk UI triggers.

Both entry points normalise every failure into the session's error state
and never raise. While either one is running, further calls are rejected
(they return False and leave the session alone).
"""
from __future__ import annotations
import asyncio
import logging
from pydantic import ValidationError

from ..core.eventyay import EventyayClient
from ..core.printing import BadgePrinter, badge_document
from ..errors import CheckinError, DecodeError, RedemptionRejected, TransportError
from ..schemas import BadgeFetchKind, ScanPayload
from .badges import Sleeper, poll_badge
from .lists import resolve_lists
from .redemption import ensure_redeemed, redeem
from .session import SessionState

logger = logging.getLogger(__name__)

MSG_CHECKIN_OK = "Check-in successful!"
MSG_CHECKIN_REJECTED = "Check-in failed!"
MSG_CHECKIN_ERROR = "Check-in Failed!"
MSG_INVALID_CODE = "Invalid ticket code!"
MSG_PRINT_FAILED = "Failed to print badge!"
MSG_NO_BADGE = "No badge available!"

def decode_scan_payload(raw: str) -> str:
    try:
        return ScanPayload.model_validate_json(raw).ticket
    except ValidationError as e:
        raise DecodeError(f"malformed scan payload: {e.error_count()} error(s)") from e

class CheckinOrchestrator:
    def __init__(
        self,
        client: EventyayClient,
        printer: BadgePrinter,
        session: SessionState | None = None,
        *,
        poll_attempts: int = 6,
        poll_interval: float = 1.0,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.client = client
        self.printer = printer
        self.session = session or SessionState()
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval
        self._sleep = sleep

    def _reject_if_busy(self, op: str) -> bool:
        if self.session.busy:
            logger.warning("%s rejected: another operation is in progress", op)
            return True
        return False

    async def check_in(self, raw_payload: str) -> bool:
        """Run one check-in attempt. Returns False if it was rejected as overlapping."""
        if self._reject_if_busy("check-in"):
            return False
        s = self.session
        s.reset()
        s.set_checking_in(True)
        try:
            secret = decode_scan_payload(raw_payload)
            lists = await resolve_lists(self.client)
            result = ensure_redeemed(await redeem(self.client, secret, lists))
        except DecodeError as e:
            logger.warning("check-in aborted: %s", e)
            s.show_error_msg(MSG_INVALID_CODE)
        except TransportError as e:
            logger.warning("check-in aborted: %s", e)
            s.show_error_msg(MSG_CHECKIN_ERROR)
        except RedemptionRejected as e:
            s.show_error_msg(MSG_CHECKIN_REJECTED, e.attendee_name, e.reason)
        except Exception:
            logger.exception("unexpected check-in failure")
            s.show_error_msg(MSG_CHECKIN_ERROR)
        else:
            if result.badge_url:
                s.set_badge_reference(result.badge_url)
            s.show_success_msg(MSG_CHECKIN_OK, result.attendee_name)
        finally:
            s.set_checking_in(False)
        return True

    async def print_badge(self, badge_reference: str | None = None) -> bool:
        """Poll for the badge PDF and print it. Returns False if rejected as overlapping."""
        if self._reject_if_busy("print"):
            return False
        s = self.session
        ref = badge_reference or s.badge_reference
        if not ref:
            s.show_error_msg(MSG_NO_BADGE, s.attendee_name)
            return True
        s.set_printing(True)
        try:
            outcome = await poll_badge(
                self.client.fetch_badge, ref,
                max_attempts=self.poll_attempts, interval=self.poll_interval, sleep=self._sleep,
            )
            if outcome.kind is not BadgeFetchKind.ready:
                raise outcome.error
            async with badge_document(outcome.document) as path:
                await self.printer.print_document(path)
            logger.info("badge %s printed for %s", ref, s.attendee_name)
        except CheckinError as e:
            logger.error("error printing badge %s: %s", ref, e)
            s.show_error_msg(MSG_PRINT_FAILED, s.attendee_name)
        except Exception:
            logger.exception("unexpected failure printing badge %s", ref)
            s.show_error_msg(MSG_PRINT_FAILED, s.attendee_name)
        finally:
            s.set_printing(False)
        return True

from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable

from ..errors import BadgeTimeout
from ..schemas import BadgeFetchKind, BadgeFetchOutcome

logger = logging.getLogger(__name__)

BadgeFetcher = Callable[[str], Awaitable[BadgeFetchOutcome]]
Sleeper = Callable[[float], Awaitable[None]]

async def poll_badge(
    fetch: BadgeFetcher,
    badge_reference: str,
    *,
    max_attempts: int = 6,
    interval: float = 1.0,
    sleep: Sleeper = asyncio.sleep,
) -> BadgeFetchOutcome:
    """
    Fetch a badge that the server may still be rendering.

    The first attempt runs immediately; only a pending (HTTP 409) outcome is
    retried, `interval` seconds apart, for at most `max_attempts` attempts in
    total. Ready and failed outcomes end the loop right away. At least one
    fetch is always made.
    """
    max_attempts = max(1, max_attempts)
    for attempt in range(1, max_attempts + 1):
        outcome = await fetch(badge_reference)
        if outcome.kind is not BadgeFetchKind.pending:
            return outcome
        if attempt < max_attempts:
            logger.debug("badge %s still generating (attempt %d/%d)", badge_reference, attempt, max_attempts)
            await sleep(interval)
    logger.warning("badge %s not ready after %d attempts", badge_reference, max_attempts)
    return BadgeFetchOutcome.failed(BadgeTimeout(max_attempts))

from __future__ import annotations
import logging
from ..core.eventyay import EventyayClient

logger = logging.getLogger(__name__)

async def resolve_lists(client: EventyayClient) -> list[str]:
    """All check-in list ids of the configured event, in server order.

    TransportError propagates: without lists there is nothing to redeem against.
    """
    page = await client.get_checkin_lists()
    ids = [str(lst.id) for lst in page.results]
    logger.debug("resolved %d check-in lists for %s", len(ids), client.event_slug)
    return ids

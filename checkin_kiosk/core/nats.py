from __future__ import annotations
import asyncio
import logging
from typing import Sequence
from nats.aio.client import Client as NATS

from ..schemas import SessionSnapshot
from .config import get_settings

logger = logging.getLogger(__name__)
_nats = NATS()

async def nats_connect():
    if not _nats.is_connected:
        settings = get_settings()
        servers: Sequence[str] = [u.strip() for u in settings.nats_urls.split(",") if u.strip()]
        await _nats.connect(servers=servers)

async def nats_close():
    try:
        if _nats.is_connected:
            await _nats.drain()
    except Exception:
        logger.warning("NATS drain failed", exc_info=True)

async def publish_session(snapshot: SessionSnapshot):
    await nats_connect()
    await _nats.publish(get_settings().nats_subject_session, snapshot.model_dump_json().encode("utf-8"))

class SessionForwarder:
    """Session listener that mirrors every snapshot onto NATS, best-effort."""

    def __init__(self, publish=publish_session):
        self._publish = publish
        self._tasks: set[asyncio.Task] = set()

    def __call__(self, snapshot: SessionSnapshot) -> None:
        task = asyncio.get_running_loop().create_task(self._send(snapshot))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send(self, snapshot: SessionSnapshot) -> None:
        try:
            await self._publish(snapshot)
        except Exception:
            logger.warning("could not forward session snapshot to NATS", exc_info=True)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

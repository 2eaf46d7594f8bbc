import asyncio
from unittest.mock import AsyncMock

from checkin_kiosk.core.nats import SessionForwarder
from checkin_kiosk.services.session import SessionState


def test_forwarder_publishes_each_change():
    publish = AsyncMock()

    async def run():
        forwarder = SessionForwarder(publish=publish)
        s = SessionState()
        s.subscribe(forwarder)
        s.set_badge_reference("/b/1")
        s.show_success_msg("Check-in successful!", "Jane Doe")
        await forwarder.drain()

    asyncio.run(run())

    assert publish.await_count == 2
    assert publish.await_args_list[-1].args[0].message.attendee_name == "Jane Doe"


def test_forwarder_failure_does_not_touch_session():
    publish = AsyncMock(side_effect=ConnectionError("no servers available"))

    async def run():
        forwarder = SessionForwarder(publish=publish)
        s = SessionState()
        s.subscribe(forwarder)
        s.show_error_msg("Check-in failed!")
        await forwarder.drain()
        return s

    s = asyncio.run(run())

    assert s.show_error
    publish.assert_awaited_once()

"""
Shared fixtures. The eventyay API is simulated with httpx.MockTransport,
so no test touches the network, a printer or the wall clock.
"""

import os

os.environ.setdefault("EVENTYAY_API_TOKEN", "device-token")
os.environ.setdefault("EVENTYAY_ORGANIZER", "org")
os.environ.setdefault("EVENTYAY_EVENT_SLUG", "conf")

import json
from pathlib import Path

import httpx
import pytest

from checkin_kiosk.core.eventyay import EventyayClient

BASE_URL = "https://eventyay.test"
LISTS_PATH = "/api/v1/organizers/org/events/conf/checkinlists/"
REDEEM_PATH = "/api/v1/organizers/org/checkinrpc/redeem/"
PDF = b"%PDF-1.4 badge"


def make_client(handler) -> EventyayClient:
    return EventyayClient(
        base_url=BASE_URL,
        api_token="device-token",
        organizer="org",
        event_slug="conf",
        transport=httpx.MockTransport(handler),
    )


class FakeEventyay:
    """Scriptable eventyay server: responses are queued per path, requests recorded."""

    def __init__(self, lists=("1", "2")):
        self.requests: list[httpx.Request] = []
        self.lists_response = httpx.Response(200, json={"results": [{"id": int(i)} for i in lists]})
        self.redeem_responses: list[httpx.Response] = []
        self.badge_responses: list[httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == LISTS_PATH:
            return self.lists_response
        if request.url.path == REDEEM_PATH:
            return self.redeem_responses.pop(0)
        return self.badge_responses.pop(0)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def redeem_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path == REDEEM_PATH]


class FakeSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakePrinter:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.printed: list[bytes] = []
        self.paths: list[Path] = []

    async def print_document(self, path: Path) -> None:
        self.paths.append(path)
        self.printed.append(path.read_bytes())
        if self.error is not None:
            raise self.error


@pytest.fixture
def server():
    return FakeEventyay()


@pytest.fixture
def client(server):
    return make_client(server)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def printer():
    return FakePrinter()

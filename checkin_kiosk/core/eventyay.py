"""
Thin async client for the eventyay (pretix-compatible) REST API.

All calls authenticate with the kiosk's device token. HTTP and network
failures are raised as TransportError; the 409 "badge still rendering"
answer is reported as a pending BadgeFetchOutcome instead.
"""
from __future__ import annotations
import logging
from typing import Any
import httpx

from ..errors import TransportError
from ..schemas import BadgeFetchOutcome, CheckinListPage
from .config import Settings

logger = logging.getLogger(__name__)

class EventyayClient:
    def __init__(
        self,
        *,
        base_url: str,
        api_token: str,
        organizer: str,
        event_slug: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.organizer = organizer
        self.event_slug = event_slug
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Device {api_token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> EventyayClient:
        return cls(
            base_url=settings.eventyay_url,
            api_token=settings.eventyay_api_token,
            organizer=settings.eventyay_organizer,
            event_slug=settings.eventyay_event_slug,
            timeout=settings.http_timeout_seconds,
            **kwargs,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get_checkin_lists(self) -> CheckinListPage:
        path = f"/api/v1/organizers/{self.organizer}/events/{self.event_slug}/checkinlists/"
        try:
            r = await self._http.get(path, headers={"Accept": "application/json"})
            r.raise_for_status()
            return CheckinListPage.model_validate(r.json())
        except httpx.HTTPStatusError as e:
            raise TransportError(f"check-in lists request failed: {e}", status_code=e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"check-in lists request failed: {e}") from e

    async def post_redeem(self, body: dict[str, Any]) -> Any:
        """
        POST a redemption request and return the decoded JSON body.

        Rejected redemptions come back as 4xx with the usual
        ``{"status": ..., "position": ...}`` body; those are returned for
        classification. Anything else non-2xx is a TransportError.
        """
        path = f"/api/v1/organizers/{self.organizer}/checkinrpc/redeem/"
        try:
            r = await self._http.post(path, json=body, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise TransportError(f"redeem request failed: {e}") from e

        if r.is_success:
            try:
                return r.json()
            except ValueError as e:
                raise TransportError("redeem response is not JSON", status_code=r.status_code) from e

        try:
            data = r.json()
        except ValueError:
            data = None
        if r.is_client_error and isinstance(data, dict) and "status" in data:
            return data
        raise TransportError(f"redeem request failed with HTTP {r.status_code}", status_code=r.status_code)

    async def fetch_badge(self, url: str) -> BadgeFetchOutcome:
        # url is what the redeem call handed out; relative ones resolve against base_url
        try:
            r = await self._http.get(url)
        except httpx.HTTPError as e:
            return BadgeFetchOutcome.failed(TransportError(f"badge request failed: {e}"))
        if r.status_code == 409:
            return BadgeFetchOutcome.pending()
        if not r.is_success:
            return BadgeFetchOutcome.failed(
                TransportError(f"badge request failed with HTTP {r.status_code}", status_code=r.status_code)
            )
        return BadgeFetchOutcome.ready(r.content)

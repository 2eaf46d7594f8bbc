"""
Kiosk feedback state shared with the presentation layer.

One SessionState lives for the whole service. The orchestrator is its only
writer; readers either poll `snapshot()` or subscribe to be called with a
fresh snapshot after every change.
"""
from __future__ import annotations
import logging
from typing import Callable

from ..errors import UNKNOWN_ATTENDEE
from ..schemas import SessionMessage, SessionSnapshot, SessionStatus

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]

class SessionState:
    def __init__(self):
        self._listeners: list[Listener] = []
        self._clear()

    def _clear(self) -> None:
        self.message: SessionMessage | None = None
        self.status = SessionStatus.idle
        self.badge_reference: str | None = None
        self.printing = False
        self.checking_in = False

    # --- observers
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _publish(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("session listener %r failed", listener)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            message=self.message.model_copy() if self.message else None,
            status=self.status,
            badge_reference=self.badge_reference,
            printing=self.printing,
            checking_in=self.checking_in,
        )

    # --- derived flags
    @property
    def show_success(self) -> bool:
        return self.status is SessionStatus.success

    @property
    def show_error(self) -> bool:
        return self.status is SessionStatus.error

    @property
    def busy(self) -> bool:
        return self.checking_in or self.printing

    @property
    def attendee_name(self) -> str:
        return self.message.attendee_name if self.message else UNKNOWN_ATTENDEE

    # --- mutations
    def reset(self) -> None:
        self._clear()
        self._publish()

    def show_success_msg(self, text: str, attendee_name: str | None) -> None:
        self.message = SessionMessage(text=text, attendee_name=attendee_name or UNKNOWN_ATTENDEE)
        self.status = SessionStatus.success
        self._publish()

    def show_error_msg(self, text: str, attendee_name: str | None = None, reason: str | None = None) -> None:
        self.message = SessionMessage(text=text, attendee_name=attendee_name or UNKNOWN_ATTENDEE, reason=reason)
        self.status = SessionStatus.error
        self._publish()

    def set_badge_reference(self, url: str | None) -> None:
        self.badge_reference = url
        self._publish()

    def set_checking_in(self, value: bool) -> None:
        self.checking_in = value
        self._publish()

    def set_printing(self, value: bool) -> None:
        self.printing = value
        self._publish()

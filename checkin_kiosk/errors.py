from __future__ import annotations

UNKNOWN_ATTENDEE = "Unknown Attendee"

class CheckinError(Exception):
    """Base class for every failure surfaced by the kiosk."""

class DecodeError(CheckinError):
    """Scanned payload is not JSON or carries no ticket secret."""

class TransportError(CheckinError):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

class RedemptionRejected(CheckinError):
    def __init__(self, message: str = "redemption rejected", *, attendee_name: str | None = None, reason: str | None = None):
        super().__init__(message)
        self.attendee_name = attendee_name or UNKNOWN_ATTENDEE
        self.reason = reason

class BadgeTimeout(CheckinError):
    def __init__(self, attempts: int):
        super().__init__(f"badge not ready after {attempts} attempts")
        self.attempts = attempts

class PrintError(CheckinError):
    """Print command exited with an error."""

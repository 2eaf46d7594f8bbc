from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Literal
from pydantic import BaseModel, Field, field_validator

from .errors import CheckinError, UNKNOWN_ATTENDEE

# --- scan payload (produced by the camera pipeline)
class ScanPayload(BaseModel):
    ticket: str = Field(min_length=1)

    @field_validator("ticket", mode="before")
    @classmethod
    def _numeric_ticket(cls, v):
        # some printed codes carry the secret as a bare number
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

# --- eventyay wire shapes
class CheckinList(BaseModel):
    id: int | str
    name: str | None = None

class CheckinListPage(BaseModel):
    results: list[CheckinList]

class RedemptionRequest(BaseModel):
    secret: str
    source_type: Literal["barcode"] = "barcode"
    lists: list[str]
    force: bool = False
    ignore_unpaid: bool = False
    nonce: str
    datetime: dt.datetime | None = None  # None = server "now"
    questions_supported: bool = False

class PositionDownload(BaseModel):
    output: str | None = None
    url: str | None = None

class RedeemPosition(BaseModel):
    attendee_name: str | None = None
    downloads: list[PositionDownload] | None = None

    @property
    def badge_url(self) -> str | None:
        for d in self.downloads or []:
            if d.output == "badge" and d.url:
                return d.url
        return None

class RedeemResponse(BaseModel):
    status: str
    reason: str | None = None
    position: RedeemPosition | None = None

# --- classified outcomes
RedemptionKind = Literal["ok", "redeemed", "failed", "error"]

class RedemptionResult(BaseModel):
    kind: RedemptionKind
    attendee_name: str = UNKNOWN_ATTENDEE
    badge_url: str | None = None
    reason: str | None = None

    @property
    def is_success(self) -> bool:
        return self.kind in ("ok", "redeemed")

class BadgeFetchKind(str, Enum):
    ready = "ready"
    pending = "pending"
    failed = "failed"

@dataclass(frozen=True)
class BadgeFetchOutcome:
    kind: BadgeFetchKind
    document: bytes | None = None
    error: CheckinError | None = None

    @classmethod
    def ready(cls, document: bytes) -> BadgeFetchOutcome:
        return cls(BadgeFetchKind.ready, document=document)

    @classmethod
    def pending(cls) -> BadgeFetchOutcome:
        return cls(BadgeFetchKind.pending)

    @classmethod
    def failed(cls, error: CheckinError) -> BadgeFetchOutcome:
        return cls(BadgeFetchKind.failed, error=error)

# --- session (what the presentation layer binds to)
class SessionStatus(str, Enum):
    idle = "idle"
    success = "success"
    error = "error"

class SessionMessage(BaseModel):
    text: str
    attendee_name: str = UNKNOWN_ATTENDEE
    reason: str | None = None

class SessionSnapshot(BaseModel):
    message: SessionMessage | None = None
    status: SessionStatus = SessionStatus.idle
    badge_reference: str | None = None
    printing: bool = False
    checking_in: bool = False

    @property
    def show_success(self) -> bool:
        return self.status is SessionStatus.success

    @property
    def show_error(self) -> bool:
        return self.status is SessionStatus.error

# --- HTTP binding
class CheckinCreate(BaseModel):
    payload: str  # raw decoded QR text

class PrintCreate(BaseModel):
    badge_url: str | None = None  # defaults to the session's badge reference

from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_orchestrator
from ..schemas import CheckinCreate, PrintCreate, SessionSnapshot
from ..services.checkin import CheckinOrchestrator

router = APIRouter(prefix="/session", tags=["session"])

@router.get("", response_model=SessionSnapshot)
async def read_session(orch: CheckinOrchestrator = Depends(get_orchestrator)):
    return orch.session.snapshot()

# --- 1) Scanner hands over a decoded QR payload
@router.post("/checkin", response_model=SessionSnapshot)
async def check_in(payload: CheckinCreate, orch: CheckinOrchestrator = Depends(get_orchestrator)):
    if not await orch.check_in(payload.payload):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Another operation is in progress")
    return orch.session.snapshot()

# --- 2) Operator asks for the badge of the last check-in (or an explicit one)
@router.post("/print", response_model=SessionSnapshot)
async def print_badge(payload: PrintCreate | None = None, orch: CheckinOrchestrator = Depends(get_orchestrator)):
    badge_url = payload.badge_url if payload else None
    if not await orch.print_badge(badge_url):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Another operation is in progress")
    return orch.session.snapshot()

@router.post("/reset", response_model=SessionSnapshot)
async def reset(orch: CheckinOrchestrator = Depends(get_orchestrator)):
    if orch.session.busy:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Another operation is in progress")
    orch.session.reset()
    return orch.session.snapshot()

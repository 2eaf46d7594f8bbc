from __future__ import annotations
from fastapi import Request

from .services.checkin import CheckinOrchestrator

def get_orchestrator(request: Request) -> CheckinOrchestrator:
    return request.app.state.orchestrator

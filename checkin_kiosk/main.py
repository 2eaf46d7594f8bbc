from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from .core.config import get_settings
from .core.eventyay import EventyayClient
from .core.nats import SessionForwarder, nats_connect, nats_close
from .core.printing import LpPrinter
from .routers import session
from .services.checkin import CheckinOrchestrator

settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

def build_orchestrator() -> CheckinOrchestrator:
    return CheckinOrchestrator(
        EventyayClient.from_settings(settings),
        LpPrinter(settings.print_command, settings.printer_name),
        poll_attempts=settings.badge_poll_attempts,
        poll_interval=settings.badge_poll_interval_seconds,
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    orch = build_orchestrator()
    app.state.orchestrator = orch
    forwarder = None
    if settings.use_nats_for_session:
        # best-effort; the kiosk still works without a display bus
        try:
            await nats_connect()
            forwarder = SessionForwarder()
            orch.session.subscribe(forwarder)
        except Exception:
            logger.warning("NATS unavailable, session updates stay local", exc_info=True)
    yield
    if forwarder is not None:
        await forwarder.drain()
        await nats_close()
    await orch.client.aclose()

app = FastAPI(title="checkin-kiosk-svc", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session.router)

@app.get("/health")
async def health():
    return {"status": "ok", "service": "checkin-kiosk-svc"}

Instrumentator().instrument(app).expose(app)

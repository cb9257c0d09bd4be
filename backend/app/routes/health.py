"""
Task Board Backend — Liveness & Health Routes
===============================================

What:  GET / (plain-text liveness) and GET /health (dependency probe).
Who:   Called by uptime monitors, Docker health checks and load balancers.

Status levels for /health:
    - healthy:   store answers a ping
    - unhealthy: store unreachable or never connected

Both routes answer 200 so a store outage does not get the process restarted;
monitors read the `status` field.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from app import __version__
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness string")
async def root() -> str:
    return "Hello World!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Pings the document store; never raises."""
    store = getattr(request.app.state, "store", None)
    connected = await store.ping() if store is not None else False
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )

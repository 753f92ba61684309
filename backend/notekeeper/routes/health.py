"""
NoteKeeper Backend - Health Check Route
========================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Reports version, uptime and how many notes the store holds.

There are no external dependencies to probe (no database, no upstream API),
so the only failure mode is the process not answering at all.
"""

import logging
import time

from fastapi import APIRouter, Depends

from notekeeper import __version__
from notekeeper.routes.notes import get_note_store
from notekeeper.schemas.note import HealthResponse
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        notes=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )

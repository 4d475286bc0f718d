"""Health check endpoint for the piefolio API."""

import time
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Request

from .. import __version__
from ..config.logging import get_logger
from ..services.loader.sources import is_remote
from .models.responses import StatusResponse

logger = get_logger(__name__)
router = APIRouter()

# Track application start time for uptime calculation
_app_start_time = time.time()


def check_source(source: str) -> Dict[str, Any]:
    """Report whether a loader input is reachable without fetching it."""
    if is_remote(source):
        return {"status": "remote", "source": source}

    exists = Path(source).is_file()
    return {"status": "healthy" if exists else "missing", "source": source}


@router.get("/health", response_model=StatusResponse, summary="Health Check")
async def health_check(request: Request) -> StatusResponse:
    """
    Report application health.

    The service is degraded when a local input file is missing, since the
    portfolio endpoints would then answer with 503.
    """
    loader = request.app.state.loader

    sources = {
        "snapshot": check_source(loader.snapshot_source),
        "allocations": check_source(loader.allocations_source),
    }
    missing = any(check["status"] == "missing" for check in sources.values())

    data = {
        "status": "degraded" if missing else "healthy",
        "version": __version__,
        "uptime_seconds": time.time() - _app_start_time,
        "sources": sources,
    }

    logger.debug("Health check completed", status=data["status"])
    return StatusResponse.create(
        data=data, request_id=getattr(request.state, "request_id", None)
    )

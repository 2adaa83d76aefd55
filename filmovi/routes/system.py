"""
Filmovi API — System Routes
============================

What:  Liveness text at `/` and a dependency health check at `/health`.
Who:   `/` is what people open in a browser to see the server is up;
       `/health` is for Docker health checks and load balancers.

Status levels for /health:
    - healthy:   database answered SELECT 1
    - unhealthy: database unreachable (still HTTP 200; read the body)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from filmovi import __version__
from filmovi.config import settings
from filmovi.database import Database
from filmovi.dependencies import get_database
from filmovi.schemas.movie import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Provjera je li server živ",
)
async def root() -> str:
    return f"✅ Server je živ na portu {settings.port}"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the database behind the API is reachable.",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    """
    What:    Pings the database and reports the aggregate status.
    Why 200 on failure: the body carries the verdict; orchestration probes
             read `status` instead of relying on the HTTP code.
    """
    if await database.ping():
        return HealthResponse(status="healthy", version=__version__, database="connected")

    logger.warning("Health check: database unreachable")
    return HealthResponse(status="unhealthy", version=__version__, database="disconnected")

"""
Inventra Backend — Health Check Route
=======================================

What:  Liveness endpoint for Docker health checks and load balancers.
How:   Reports version, uptime and the size of the validation configuration
       the running process was built with.
"""

import logging
import time

from fastapi import APIRouter, Request

from app import __version__
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    A process with an empty rule registry rejects every bound request with
    "Entidad no reconocida", so it reports itself as unhealthy.
    """
    registry = request.app.state.registry
    bindings = request.app.state.bindings

    status = "healthy" if len(registry) > 0 else "unhealthy"
    if status != "healthy":
        logger.warning("Health check: no validation rule tables registered")

    return HealthResponse(
        status=status,
        version=__version__,
        rule_sets=len(registry),
        bound_operations=len(bindings),
        uptime_seconds=round(time.time() - _start_time, 2),
    )

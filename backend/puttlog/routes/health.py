"""
PuttLog Backend - Health Check Route
=====================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Always answers 200 with {"ok": true} while the process serves requests,
       and reports database reachability alongside for dashboards.
"""

import logging

from fastapi import APIRouter, Request

from puttlog import __version__
from puttlog.schemas.session import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Check the service and its database.

    The database probe is a SELECT 1; a failure is reported in the body but
    does not change the status code.
    """
    database = getattr(request.app.state, "database", None)
    db_status = "connected"
    if database is None or not await database.ping():
        db_status = "disconnected"
        logger.warning("Health check: database unreachable")

    return HealthResponse(ok=True, version=__version__, database=db_status)

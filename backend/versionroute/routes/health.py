"""
versionroute — Health Check Route
===================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Reports service version, the configured version header and the size
       of the version routing table.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   Route table frozen and serving (HTTP 200)
    - starting:  Route table still open for registration (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter

from versionroute import __version__
from versionroute.config import settings
from versionroute.routing.versioned_router import default_route_table
from versionroute.schemas.routing import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy" if default_route_table.frozen else "starting",
        version=__version__,
        version_header=settings.version_header,
        versioned_routes=len(default_route_table),
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
CRM Proxy — Health Check Route
===============================

What:  Liveness endpoint for container health checks and load balancers.
How:   Reports version, configured upstream and uptime. It deliberately
       makes no upstream call: the proxy has no credentials of its own.
"""

import time

from fastapi import APIRouter

from crm_proxy import __version__
from crm_proxy.config import settings
from crm_proxy.schemas.forwarding import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        upstream=settings.hubspot_base_url,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
CRM Proxy — Access Log Middleware
==================================

What:  One access-log line per proxied call, keyed by route template.
How:   Wraps call_next(); after routing, reads the matched route and whether
       the status came from HubSpot or was produced locally.

Line format:
    PATCH /contacts/email/{email} -> 200 (upstream) 143.2ms [a1b2c3d4]
    POST /tickets -> 400 (local) 0.8ms [e5f6a7b8]

Privacy:
    Logged:     method, route template, status, origin, duration, request ID
    Not logged: raw path (carries emails and record IDs), query string,
                bodies, Authorization, client IP
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from crm_proxy.middleware.request_id import request_id_var

logger = logging.getLogger("crm_proxy.access")

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """Path pattern of the matched route, e.g. /deals/{id}."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def status_origin(request: Request) -> str:
    """'upstream' when the object route relayed a HubSpot answer."""
    if getattr(request.state, "upstream_status", None) is None:
        return "local"
    return "upstream"


def level_for(status: int) -> int:
    # Relayed HubSpot 4xx are the caller's problem, still worth a WARNING
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the object routes; /health polling stays quiet."""

    QUIET_ROUTES = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s -> unhandled error %.1fms [%s]",
                request.method,
                route_template(request),
                (time.perf_counter() - started) * 1000,
                request_id_var.get(""),
            )
            raise

        route = route_template(request)
        if route in self.QUIET_ROUTES:
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        origin = status_origin(request)
        logger.log(
            level_for(response.status_code),
            "%s %s -> %d (%s) %.1fms [%s]",
            request.method,
            route,
            response.status_code,
            origin,
            elapsed_ms,
            request_id_var.get(""),
            extra={
                "request_id": request_id_var.get(""),
                "route": route,
                "status": response.status_code,
                "origin": origin,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response

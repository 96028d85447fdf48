"""
CRM Proxy — Request ID Middleware
==================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
Why:   Lets an agent or operator match a proxied call to its log lines,
       including the ERROR line written when an upstream call fails.
How:   Honours a caller-supplied X-Request-ID, otherwise generates a short UUID;
       stores it in a ContextVar read by the logging middleware and error handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores the request ID in a ContextVar and request.state, echoes it back."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars is plenty for correlation and reads well in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response

"""
CRM Proxy — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the few ways a forward can fail.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the forwarder, credential normalization and the CRM client.

Exception Hierarchy:
    CRMProxyError (base)
    ├── ValidationError          → 400 Bad Request (missing param/body/field)
    ├── AuthorizationError       → 401 Unauthorized (missing/empty token)
    └── UpstreamTransportError   → 500 Internal Server Error (call never completed)

An upstream call that completes with a 4xx/5xx is NOT an exception: its
status and body are relayed to the caller unchanged.
"""

from typing import Any, Dict, Optional


class CRMProxyError(Exception):
    """
    Base exception for all CRM proxy errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info, returned as `details`
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CRMProxyError):
    """
    Raised when the inbound request lacks something the upstream call needs.

    When:    Missing path parameter, missing/non-object JSON body, missing
             required body field (`properties`, `name`, `namePart`).
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthorizationError(CRMProxyError):
    """
    Raised when no usable bearer token was supplied.

    The proxy never validates tokens; it only refuses to forward a request
    that carries none. Upstream decides whether the token is any good.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Missing Authorization header",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamTransportError(CRMProxyError):
    """
    Raised when the upstream call could not be completed.

    When:    Connection refused, DNS failure, timeout, or a response body
             that is not valid JSON.
    HTTP:    500 Internal Server Error
    Never retried. The low-level failure text is kept in `reason`.
    """

    def __init__(
        self,
        reason: str,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason

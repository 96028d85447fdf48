"""
CRM Proxy — Pydantic Envelope Schemas
======================================

What:  Transient request/response envelopes plus the API error and health shapes.
Why:   Gives the forwarder and the CRM client one typed contract between them,
       and documents error responses in the OpenAPI output.
When:  Built per request; discarded once the response is sent.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Forwarding Envelopes
# ══════════════════════════════════════════════════════════════════════════


class ForwardRequest(BaseModel):
    """
    What:  A fully resolved upstream call, produced by the forwarder.
    Who:   Consumed by CRMClient.send().

    `path_template` and `path_params` are kept alongside the resolved `url`
    so log lines can show which route family a call belongs to.
    """
    method: str = Field(description="Upstream HTTP method (GET/POST/PATCH/DELETE)")
    path_template: str = Field(description="Object path with placeholders, e.g. /contacts/{id}")
    path_params: Dict[str, str] = Field(default_factory=dict)
    url: str = Field(description="Absolute upstream URL")
    query: List[Tuple[str, str]] = Field(default_factory=list, description="Ordered, possibly repeated pairs")
    body: Optional[Any] = Field(default=None, description="JSON body, None for bodiless calls")
    authorization: str = Field(description="Normalized 'Bearer <token>' value")


class ForwardResponse(BaseModel):
    """
    What:  Upstream status and payload, relayed verbatim.

    `payload` is None when upstream sent no body or answered 204.
    """
    status_code: int
    payload: Optional[Any] = None

    @property
    def is_empty(self) -> bool:
        return self.status_code == 204 or self.payload is None


# ══════════════════════════════════════════════════════════════════════════
# API Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error envelope for locally generated errors.

    Example:
        {
            "error": "upstream_transport_error",
            "message": "Internal Server Error",
            "details": {"reason": "[Errno -2] Name or service not known"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health. Makes no upstream call."""
    status: str = Field(description="Service status")
    version: str = Field(description="Application version")
    upstream: str = Field(description="Configured upstream CRM base URL")
    uptime_seconds: float = Field(description="Seconds since service started")

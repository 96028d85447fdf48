"""
CRM Proxy — Bearer Token Normalization
=======================================

What:  Turns whatever the caller put in `Authorization` into `Bearer <token>`.
When:  Once per request, at the boundary, before any route-specific logic.

Policy (applies to every route):
    missing / blank header      → AuthorizationError (401)
    "Bearer abc", "bearer  abc" → "Bearer abc"
    "abc"                       → "Bearer abc"
    "Bearer " (no token)        → AuthorizationError (401)

The token itself is opaque: it is never inspected, validated or logged.
"""

import re
from typing import Optional

from crm_proxy.exceptions import AuthorizationError

_BEARER_PREFIX = re.compile(r"^\s*bearer(\s+|$)", re.IGNORECASE)


def normalize_bearer(header_value: Optional[str]) -> str:
    """Return the canonical `Bearer <token>` value or raise AuthorizationError."""
    if header_value is None or not header_value.strip():
        raise AuthorizationError("Missing Authorization header")

    token = _BEARER_PREFIX.sub("", header_value, count=1).strip()
    if not token:
        raise AuthorizationError("Authorization header carries no token")

    return f"Bearer {token}"

"""
CRM Proxy — HubSpot Client (httpx)
===================================

What:  Concrete CRMClient that talks to the HubSpot REST API over httpx.
Why:   One outbound HTTP idiom for every route, with one error type and one
       timeout policy.
How:   A shared httpx.AsyncClient connection pool, created lazily on first
       use and closed during application shutdown.

Failure translation:
    httpx.HTTPError (connect, DNS, timeout, protocol) → UpstreamTransportError
    Undecodable JSON body                            → UpstreamTransportError
    Any completed exchange (2xx/4xx/5xx)             → ForwardResponse, relayed as-is
"""

import logging
import time
from typing import Any, Optional

import httpx

from crm_proxy import __version__
from crm_proxy.config import settings
from crm_proxy.exceptions import UpstreamTransportError
from crm_proxy.schemas.forwarding import ForwardRequest, ForwardResponse
from crm_proxy.services.crm_base import CRMClient

logger = logging.getLogger(__name__)


class HubSpotClient(CRMClient):
    """
    httpx-backed client for the HubSpot CRM v3 API.

    A single instance is shared across requests: it holds no per-request
    state, only the connection pool.
    """

    USER_AGENT = f"crm-proxy/{__version__}"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.upstream_timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json", "User-Agent": self.USER_AGENT},
            )
        return self._client

    async def send(self, request: ForwardRequest) -> ForwardResponse:
        start_time = time.perf_counter()
        try:
            # json= sets Content-Type: application/json when a body is present
            response = await self._get_client().request(
                request.method,
                request.url,
                params=request.query or None,
                headers={"Authorization": request.authorization},
                json=request.body,
            )
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Upstream %s %s failed after %.0fms: %s",
                request.method,
                request.path_template,
                duration_ms,
                str(e) or type(e).__name__,
            )
            raise UpstreamTransportError(
                reason=str(e) or type(e).__name__,
                context={"error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "Upstream %s %s -> %d in %.0fms",
            request.method,
            request.path_template,
            response.status_code,
            duration_ms,
        )

        return ForwardResponse(
            status_code=response.status_code,
            payload=self._decode(response),
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Parse the upstream body. 204 and empty bodies become None."""
        if response.status_code == 204 or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "Upstream returned non-JSON body (status=%d, content-type=%s)",
                response.status_code,
                response.headers.get("content-type", "unknown"),
            )
            raise UpstreamTransportError(
                reason=f"Invalid JSON in upstream response: {e}",
                context={"upstream_status": response.status_code},
            ) from e

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so that all requests reuse one connection pool
hubspot_client = HubSpotClient()

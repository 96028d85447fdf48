"""
CRM Proxy — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_crm_client: AsyncMock standing in for the upstream CRM client
    ├── forwarder: Forwarder wired to mock_crm_client
    ├── hubspot: Real HubSpotClient (pair with respx_mock)
    └── test_client: HTTPX AsyncClient talking to the FastAPI app in-process

Upstream HTTP is mocked with respx (`respx_mock` fixture from the respx plugin).
"""

import os
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any crm_proxy imports
os.environ["HUBSPOT_BASE_URL"] = "https://api.hubapi.com"
os.environ["UPSTREAM_TIMEOUT_SECONDS"] = "5"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from crm_proxy.schemas.forwarding import ForwardResponse
from crm_proxy.services.crm_base import CRMClient
from crm_proxy.services.forwarder import Forwarder
from crm_proxy.services.hubspot_client import HubSpotClient

HUBSPOT = "https://api.hubapi.com"


@pytest.fixture
def mock_crm_client():
    """
    Provides a mock CRMClient that answers 200 {"ok": true} by default.

    Usage:
        mock_crm_client.send.return_value = ForwardResponse(status_code=404, payload={...})
        sent = mock_crm_client.send.await_args.args[0]   # the ForwardRequest
    """
    client = AsyncMock(spec=CRMClient)
    client.send.return_value = ForwardResponse(status_code=200, payload={"ok": True})
    return client


@pytest.fixture
def forwarder(mock_crm_client):
    return Forwarder(client=mock_crm_client, base_url=HUBSPOT)


@pytest_asyncio.fixture
async def hubspot():
    client = HubSpotClient(timeout=5)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from crm_proxy.main import app
    from crm_proxy.services.hubspot_client import hubspot_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # The shared pool is bound to this test's event loop
    await hubspot_client.aclose()

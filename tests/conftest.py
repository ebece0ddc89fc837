"""
Pytest configuration for ai-sdk-client tests.

HTTP is faked two ways:
- `httpx.MockTransport` handlers for chunk-level streaming behavior.
- The FastAPI app in `tests/fake_server.py` (via `httpx.ASGITransport`) for the
  MCP session flow.
"""

import httpx
import pytest

from ai_sdk_client.transport.config import ClientConfig
from ai_sdk_client.transport.http import HttpTransport
from tests.fake_server import create_app

BASE_URL = "http://testserver"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        strapi_url=BASE_URL,
        api_base_url=f"{BASE_URL}/api/ai-sdk",
        mcp_url=f"{BASE_URL}/api/ai-sdk/mcp",
        api_token="test-token",
        timeout_seconds=5.0,
        client_name="test-client",
        client_version="1.0.0",
    )


@pytest.fixture
def make_transport(config):
    """Build an `HttpTransport` whose requests are answered by `handler`."""

    def _make(handler) -> HttpTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpTransport(config, client=client)

    return _make


@pytest.fixture
def fake_app():
    return create_app()


@pytest.fixture
def asgi_transport(config, fake_app) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=fake_app))
    return HttpTransport(config, client=client)



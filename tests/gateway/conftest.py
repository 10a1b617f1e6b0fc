"""Gateway fixtures — gateway app forwarding into the in-process Books API.

Invariants:
    - Upstream httpx client uses ASGITransport over bookstore.main:app,
      so the downstream host in the route file is never dialed
    - Route table loaded from the repository's gateway_routes.json
    - Overrides cleared after every test
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from bookstore.gateway.main import app as gateway_app
from bookstore.gateway.route_table import load_route_table
from bookstore.gateway.routes import get_http_client, get_route_table
from bookstore.main import app as api_app


@pytest.fixture
def route_table(routes_file):
    return load_route_table(routes_file)


@pytest.fixture
def gateway_factory(route_table):
    """Open a gateway test client whose upstream calls go to `upstream`."""
    def _open(upstream: httpx.AsyncClient) -> AsyncClient:
        gateway_app.dependency_overrides[get_route_table] = lambda: route_table
        gateway_app.dependency_overrides[get_http_client] = lambda: upstream
        return AsyncClient(
            transport=ASGITransport(app=gateway_app), base_url="http://gateway",
        )

    yield _open
    gateway_app.dependency_overrides.clear()


@pytest.fixture
async def gateway(client, gateway_factory):
    """Gateway client in front of the API (the `client` fixture wires its DB)."""
    upstream = AsyncClient(transport=ASGITransport(app=api_app))
    async with gateway_factory(upstream) as gw:
        yield gw
    await upstream.aclose()

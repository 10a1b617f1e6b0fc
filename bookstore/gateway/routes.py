"""Gateway Routes — health probe plus the catch-all forwarding endpoint.

Invariants:
    - Every method on every path not claimed by /gateway/* is forwarded
    - Unmatched requests → 404 ROUTE_NOT_FOUND, never forwarded
    - Matching runs on the encoded path, so %3F or %2F in a segment is
      forwarded as sent and never becomes a query or a path separator
    - Route table and HTTP client come from app.state (set in lifespan)
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, Response

from bookstore.core.domain_types import HttpMethod
from bookstore.core.errors import RouteNotFoundError
from bookstore.gateway.proxy import ProxyForwarder, request_path
from bookstore.gateway.route_table import RouteTable

logger = logging.getLogger(__name__)
router = APIRouter()


def get_route_table(request: Request) -> RouteTable:
    return request.app.state.route_table


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_forwarder(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ProxyForwarder:
    return ProxyForwarder(client)


@router.get("/gateway/health", tags=["health"])
async def gateway_health(route_table: RouteTable = Depends(get_route_table)):
    """Liveness probe with the number of loaded routes."""
    return {
        "status": "healthy",
        "service": "bookstore-gateway",
        "routes": len(route_table),
    }


@router.api_route(
    "/{path:path}",
    methods=[m.value for m in HttpMethod],
    include_in_schema=False,
)
async def forward(
    request: Request,
    route_table: RouteTable = Depends(get_route_table),
    forwarder: ProxyForwarder = Depends(get_forwarder),
) -> Response:
    """Forward the request to the first matching downstream route."""
    path = request_path(request)
    match = route_table.match(request.method, path)
    if match is None:
        raise RouteNotFoundError(request.method, path)
    return await forwarder.forward(request, match)

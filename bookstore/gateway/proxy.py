"""Proxy Forwarder — sends a matched request downstream and relays the reply as-is.

Invariants:
    - Method, encoded path segments, query string, body and end-to-end
      headers forwarded verbatim (read from the ASGI scope, never re-parsed)
    - Hop-by-hop headers and Host never cross the proxy
    - Upstream status, raw (still-encoded) body and headers returned unchanged
    - Transport failures raise UpstreamUnavailableError; no retries
"""

import logging
from urllib.parse import quote

import httpx
from fastapi import Request, Response

from bookstore.core.errors import UpstreamUnavailableError
from bookstore.gateway.route_table import RouteMatch

logger = logging.getLogger(__name__)

HOP_BY_HOP_HEADERS = frozenset({
    "connection", "keep-alive", "proxy-authenticate", "proxy-authorization",
    "te", "trailer", "trailers", "transfer-encoding", "upgrade",
})

# Recomputed by httpx / by the outgoing Response
_REQUEST_DROP = HOP_BY_HOP_HEADERS | {"host", "content-length"}
_RESPONSE_DROP = HOP_BY_HOP_HEADERS | {"content-length"}

_NO_BODY_STATUSES = frozenset({204, 304})


def request_path(request: Request) -> str:
    """Request path exactly as sent, percent-escapes intact."""
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return quote(request.scope["path"])
    return raw_path.split(b"?", 1)[0].decode("latin-1")


def request_query(request: Request) -> str:
    return request.scope.get("query_string", b"").decode("latin-1")


def forwardable_headers(
    items: list[tuple[str, str]], drop: frozenset[str],
) -> list[tuple[str, str]]:
    return [(k, v) for k, v in items if k.lower() not in drop]


class ProxyForwarder:
    """Forwards gateway requests over a shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def forward(self, request: Request, match: RouteMatch) -> Response:
        url = match.downstream_url
        query = request_query(request)
        if query:
            url = f"{url}?{query}"
        upstream_request = self.client.build_request(
            request.method,
            url,
            headers=forwardable_headers(
                request.headers.items(), _REQUEST_DROP,
            ),
            content=await request.body(),
        )
        try:
            upstream = await self.client.send(upstream_request, stream=True)
        except httpx.TransportError as e:
            logger.error(
                f"Upstream {match.downstream_url} unreachable: {e}",
                extra={"upstream": match.downstream_url, "method": request.method},
            )
            raise UpstreamUnavailableError(match.downstream_url)
        try:
            body = b"".join([chunk async for chunk in upstream.aiter_raw()])
        finally:
            await upstream.aclose()

        logger.info(
            f"{request.method} {request_path(request)} -> {url}",
            extra={
                "method": request.method,
                "path": request_path(request),
                "upstream": match.downstream_url,
                "status_code": upstream.status_code,
            },
        )
        return _relay(upstream, body)


def _relay(upstream: httpx.Response, body: bytes) -> Response:
    """Build the client response from the upstream reply."""
    response = Response(content=body, status_code=upstream.status_code)
    raw_headers = [
        (k.encode("latin-1"), v.encode("latin-1"))
        for k, v in forwardable_headers(
            upstream.headers.multi_items(), _RESPONSE_DROP,
        )
    ]
    if upstream.status_code >= 200 and upstream.status_code not in _NO_BODY_STATUSES:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    response.raw_headers = raw_headers
    return response

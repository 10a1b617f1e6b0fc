"""Bookstore Gateway — reverse proxy in front of the Books API.

Invariants:
    - Route table loaded once from GATEWAY_ROUTES_FILE in lifespan
    - One httpx.AsyncClient per process, closed on shutdown
    - CORS allows any origin, method and header by default (settings-driven)
    - Shares the API's global error handlers and error envelope

Run with: uvicorn bookstore.gateway.main:app --port 8000
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api.error_handlers import register_error_handlers
from bookstore.config import get_settings
from bookstore.gateway import routes
from bookstore.gateway.route_table import load_route_table
from bookstore.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.route_table = load_route_table(settings.gateway_routes_file)
    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        logger.info("Bookstore gateway started")
        yield
    logger.info("Bookstore gateway shutting down")


app = FastAPI(
    title="Bookstore Gateway", version="1.0.0", lifespan=lifespan,
    docs_url=None, redoc_url=None, openapi_url=None,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.gateway_cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)

register_error_handlers(app)

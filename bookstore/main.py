"""Bookstore API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BookstoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - DatabaseSessionManager created in lifespan and held on app.state

Run with: uvicorn bookstore.main:app --port 5000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api.error_handlers import register_error_handlers
from bookstore.api.routes import books, health
from bookstore.config import get_settings
from bookstore.db.session import create_schema
from bookstore.infrastructure.database import DatabaseSessionManager
from bookstore.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await create_schema(db_manager.engine)
    app.state.db_manager = db_manager
    logger.info("Bookstore API started")
    yield
    logger.info("Bookstore API shutting down")
    await db_manager.dispose()


app = FastAPI(
    title="Bookstore API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(books.router)

register_error_handlers(app)

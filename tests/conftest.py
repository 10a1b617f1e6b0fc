"""Root conftest — shared test configuration, async DB and API test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Environment pinned before any bookstore module reads settings
"""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "GATEWAY_ROUTES_FILE", str(REPO_ROOT / "gateway_routes.json"),
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from bookstore.db.base import Base  # noqa: E402
from bookstore.db.session import create_schema  # noqa: E402
from bookstore.infrastructure.database import get_db  # noqa: E402
from bookstore.main import app  # noqa: E402


@pytest.fixture
def routes_file() -> Path:
    return REPO_ROOT / "gateway_routes.json"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    await create_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """API test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def dune_payload() -> dict:
    return {
        "title": "Dune",
        "author": "Herbert",
        "noOfPages": 412,
        "language": "English",
        "category": "SciFi",
        "price": 9.99,
        "imageUrl": "http://x/dune.jpg",
    }


@pytest.fixture
def make_payload(dune_payload):
    """Build a valid camelCase payload, overriding selected fields."""
    def _make(**overrides) -> dict:
        return {**dune_payload, **overrides}
    return _make

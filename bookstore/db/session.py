"""Schema Bootstrap — create the books table on a fresh database.

Invariants:
    - Idempotent: existing tables are left untouched
    - Used by the API lifespan (DATABASE_AUTO_CREATE) and test fixtures;
      Alembic owns schema changes beyond the initial table
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from bookstore.db.base import Base


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata."""
    import bookstore.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

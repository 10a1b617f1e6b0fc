"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Connection string and gateway route file come from the environment or .env
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - One Settings class for both ASGI apps; each app reads only its own fields
    - SQLite file database by default so the API runs without extra services
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./bookstore.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Create missing tables on API startup; disable when running Alembic
    database_auto_create: bool = True

    # API
    cors_origins: list[str] = ["*"]

    # Gateway
    gateway_routes_file: str = "gateway_routes.json"
    gateway_cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

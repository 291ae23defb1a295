from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool


_DRIVER_PREFIXES = (
    "postgresql+asyncpg://",
    "postgresql+psycopg2://",
    "postgresql+psycopg://",
    "postgresql://",
    "postgres://",
)


def _with_driver(url: str, driver: str) -> str:
    for prefix in _DRIVER_PREFIXES:
        if url.startswith(prefix):
            return f"postgresql+{driver}://" + url[len(prefix) :]
    return url


def async_database_url(url: str) -> str:
    """Rewrite a Postgres URL to the asyncpg driver used by the seeders."""
    return _with_driver(url, "asyncpg")


def sync_database_url(url: str) -> str:
    """Rewrite a Postgres URL to psycopg (v3), which Alembic runs on."""
    return _with_driver(url, "psycopg")


def create_engine(database_url: str) -> AsyncEngine:
    # NullPool avoids cross-event-loop pooled connections during tests and keeps behavior simple.
    return create_async_engine(async_database_url(database_url), pool_pre_ping=True, poolclass=NullPool)

"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode: create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

The engine is built once at import time from settings and handed to
route handlers through Depends(get_db); handlers never open their own
connections.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inkwell.config import settings
from inkwell.db.models import Base


def build_engine(database_url: str) -> AsyncEngine:
    """Create an engine. Pool sizing only applies to server databases."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=settings.debug)
    # Connection pool: min 5, max 20 connections.
    return create_async_engine(
        database_url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=15,
    )


engine = build_engine(settings.database_url)

# Session factory: each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency. Yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(target: AsyncEngine | None = None) -> None:
    """Create every table known to the ORM metadata (idempotent)."""
    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

"""Async engine and session factory for the session store."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, settings

_POOLER_MARKERS = ("pooler", "pgbouncer")


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    connect_args: dict[str, Any] = {}
    # asyncpg's prepared statement cache breaks behind transaction-mode poolers
    if any(marker in config.database_url for marker in _POOLER_MARKERS):
        connect_args["statement_cache_size"] = 0

    return create_async_engine(
        config.async_database_url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        connect_args=connect_args,
    )


engine = build_engine(settings)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for request-scoped checks (health)."""
    async with async_session_factory() as session:
        yield session

"""Async engine and session factory for the complaints database."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def uses_transaction_pooler(url: str) -> bool:
    """Whether the URL points at Supabase's Supavisor pooler."""
    return "pooler.supabase.com" in url or ":6543/" in url


def _connect_args(url: str) -> dict[str, Any]:
    # Transaction-mode pooling cannot share asyncpg prepared statements
    if uses_transaction_pooler(url):
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    connect_args=_connect_args(settings.database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for request-scoped raw queries (health probes)."""
    async with async_session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()

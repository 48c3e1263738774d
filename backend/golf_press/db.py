import os
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[sessionmaker] = None
Base = declarative_base()


def _normalize_url(database_url: str) -> str:
    """Map plain driver URLs onto their async drivers."""

    for plain, async_driver in (
        ("postgresql://", "postgresql+asyncpg://"),
        ("postgres://", "postgresql+asyncpg://"),
        ("sqlite://", "sqlite+aiosqlite://"),
    ):
        if database_url.startswith(plain):
            return async_driver + database_url[len(plain):]
    return database_url


def _engine_options(database_url: str) -> Dict[str, Any]:
    if not database_url.startswith("sqlite+aiosqlite://"):
        return {"pool_pre_ping": True}
    # In-memory SQLite only lives as long as its single connection.
    if ":memory:" in database_url:
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"poolclass": NullPool}


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it from ``DATABASE_URL``.

    Creation is deferred to first use so tests can set the URL at runtime.
    """

    global engine, AsyncSessionLocal

    if engine is None:
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise RuntimeError("DATABASE_URL environment variable is required")
        database_url = _normalize_url(database_url)
        engine = create_async_engine(database_url, **_engine_options(database_url))
        AsyncSessionLocal = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    return engine


async def create_tables() -> None:
    """Create the match table when running without Alembic (SQLite deployments)."""

    from . import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    if AsyncSessionLocal is None:
        get_engine()

    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session

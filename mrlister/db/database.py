"""
Database engine and session management for async SQLAlchemy.

The engine is built lazily so the in-memory storage backend never needs a
database driver installed.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from mrlister.config import get_settings
from mrlister.db.models import Base
from mrlister.db.query_logger import attach_query_logger


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine from settings."""
    settings = get_settings()
    url = database_url or settings.database_url
    options: dict = {"echo": settings.app_debug}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=settings.database_pool_pre_ping,
            pool_timeout=settings.database_pool_timeout,
        )
    engine = create_async_engine(url, **options)
    attach_query_logger(engine, settings.query_slow_threshold_ms)
    return engine


@lru_cache
def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first use."""
    return create_engine()


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create any missing tables. Used at startup by the SQL backend."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """
    Unit of work: commit on success, roll back on any error.

    Usage:
        async with session_scope() as session:
            store = SqlInventoryStore(session)
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

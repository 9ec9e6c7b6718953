"""
Database configuration and session management.

Uses SQLModel for ORM with async support. The engine is created lazily on
first use and cached for the lifetime of the process; everything reaches it
through get_engine() / get_session_factory().
"""

import asyncio
import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import AsyncGenerator, Iterator, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from .config import settings
from .exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """
    Convert a database URL to its async driver form.

    SQLite: sqlite:/// -> sqlite+aiosqlite:///
    PostgreSQL: postgresql:// -> postgresql+asyncpg://
    """
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


@lru_cache
def get_engine() -> AsyncEngine:
    """
    Get the process-wide async engine, creating it on first call.

    Raises:
        StoreUnavailable: If no database URL is configured.
    """
    if not settings.has_database_config:
        logger.error("DATABASE_URL is not configured")
        raise StoreUnavailable()

    url = to_async_url(settings.database_url)
    connect_args = {}
    # Both aiosqlite and asyncpg accept a connect timeout
    if url.startswith(("sqlite+aiosqlite", "postgresql+asyncpg")):
        connect_args["timeout"] = settings.database_connect_timeout

    return create_async_engine(
        url,
        echo=settings.debug,
        future=True,
        connect_args=connect_args,
    )


@lru_cache
def get_session_factory() -> sessionmaker:
    """Get the cached async session factory bound to get_engine()."""
    return sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db() -> None:
    """
    Initialize the database by creating all tables.

    Should be called on application startup.
    """
    # Register table models on the metadata
    from rapideat.models import AuthSession, Restaurant, User  # noqa: F401

    with translate_store_errors("schema"):
        async with get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections and forget the cached engine."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Yields:
        AsyncSession: Database session for the request.

    Example:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
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


async def get_optional_db() -> AsyncGenerator[Optional[AsyncSession], None]:
    """
    Read-only session dependency that yields None when no database is configured.

    Used by endpoints that can fall back to static data.
    """
    if not settings.has_database_config:
        yield None
        return

    async with get_session_factory()() as session:
        yield session


@contextmanager
def translate_store_errors(store: str) -> Iterator[None]:
    """
    Turn driver/connection failures into StoreUnavailable.

    Only the error class and driver message are logged; statement
    parameters (emails, lookup hashes) stay out of the log.
    """
    try:
        yield
    except StoreUnavailable:
        raise
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        cause = exc.orig if isinstance(exc, DBAPIError) and exc.orig is not None else exc
        logger.error(f"{store} store unavailable: {type(cause).__name__}: {cause}")
        raise StoreUnavailable() from exc

"""
Async engine, sessions and the request transaction.

PostgreSQL (asyncpg) is the production backend; SQLite (aiosqlite) is
accepted for local runs and tests, in which case pooling and server-side
timeouts are skipped.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import file_logger, pool_kwargs, settings

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def _connect_args(database_url: str) -> dict[str, Any]:
    if "asyncpg" not in database_url:
        return {}
    return {
        "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
        "server_settings": {
            "statement_timeout": str(STATEMENT_TIMEOUT_MS),
            "lock_timeout": str(STATEMENT_TIMEOUT_MS),
        },
    }


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """
    Create an engine with the pool and timeout options for its backend.

    Args:
        database_url: SQLAlchemy async URL
        **overrides: Extra `create_async_engine` options, applied last

    Returns:
        AsyncEngine: A new engine
    """
    options: dict[str, Any] = {
        "echo": settings.DATABASE_ECHO,
        "connect_args": _connect_args(database_url),
        **pool_kwargs(database_url),
    }
    options.update(overrides)
    return create_async_engine(database_url, **options)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    # Rows stay readable after commit so handlers can render them
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL)
async_session_maker = build_session_maker(engine)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Open a session that commits on clean exit and rolls back on error.

    Example:
        ```python
        async with transaction() as session:
            await UserRepository(session).create("jane", "jane@example.com")
        ```
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction rolled back")
            raise


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    FastAPI dependency yielding the request's session.

    A post save, its topic sync and its tag sync share this transaction, so
    they are applied together or not at all.
    """
    async with transaction() as session:
        yield session


async def ping() -> bool:
    """Return True when the database answers `SELECT 1`."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database ping failed")
        return False
    return True


async def init_db() -> None:
    """
    Create any missing tables.

    Used on startup for development databases; Alembic owns the schema in
    production.
    """
    import app.models  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema ready")


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")

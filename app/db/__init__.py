"""Database engine, sessions and schema bootstrap."""

from app.db.database import (
    async_session_maker,
    build_engine,
    build_session_maker,
    close_db,
    engine,
    get_session,
    init_db,
    ping,
    transaction,
)

__all__ = [
    "async_session_maker",
    "build_engine",
    "build_session_maker",
    "close_db",
    "engine",
    "get_session",
    "init_db",
    "ping",
    "transaction",
]

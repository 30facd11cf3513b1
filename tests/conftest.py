# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before app settings are imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DEBUG"] = "false"

from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.db import build_engine, build_session_maker
from app.managers.token_manager import create_access_token
from app.models import UserDB


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with every table created."""
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return build_session_maker(engine)


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session whose writes are only flushed, never committed."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def author(session_maker: async_sessionmaker[SQLModelAsyncSession]) -> UserDB:
    """A committed active user."""
    async with session_maker() as session:
        user = UserDB(username="author", email="author@example.com", display_name="Author")
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
async def other_author(session_maker: async_sessionmaker[SQLModelAsyncSession]) -> UserDB:
    """A second committed user, to check per-user scoping."""
    async with session_maker() as session:
        user = UserDB(username="other", email="other@example.com")
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
def auth_headers(author: UserDB) -> dict[str, str]:
    """Create auth headers with a valid access token for `author`."""
    token = create_access_token(
        user_id=author.uuid,
        username=author.username,
        expires_delta=timedelta(minutes=30),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_author: UserDB) -> dict[str, str]:
    token = create_access_token(user_id=other_author.uuid, username=other_author.username)
    return {"Authorization": f"Bearer {token}"}

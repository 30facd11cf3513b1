# tests/repositories/conftest.py
"""Pytest fixtures for repository tests."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import PostDB
from app.repositories import PostRepository, TagRepository, TopicRepository
from app.utils.helpers import utc_now



@pytest.fixture
def post_repo(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


@pytest.fixture
def tag_repo(session: AsyncSession) -> TagRepository:
    return TagRepository(session)


@pytest.fixture
def topic_repo(session: AsyncSession) -> TopicRepository:
    return TopicRepository(session)


@pytest.fixture
def make_post(post_repo: PostRepository) -> Callable[..., Awaitable[PostDB]]:
    """Factory that persists a post for a user."""

    async def factory(
        user_id: UUID,
        slug: str | None = None,
        published_at: datetime | None = None,
        created_at: datetime | None = None,
    ) -> PostDB:
        post = PostDB(
            id=uuid4(),
            user_id=user_id,
            slug=slug or f"post-{uuid4().hex[:8]}",
            title="Title",
            published_at=published_at,
            created_at=created_at or utc_now(),
        )
        return await post_repo.save(post)

    return factory


@pytest.fixture
def yesterday() -> datetime:
    return utc_now() - timedelta(days=1)


@pytest.fixture
def tomorrow() -> datetime:
    return utc_now() + timedelta(days=1)

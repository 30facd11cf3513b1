# tests/services/conftest.py
"""Pytest fixtures for service tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import PostRepository, TagRepository, TopicRepository
from app.services import PostAssociationReconciler, PostService


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
def reconciler(
    post_repo: PostRepository,
    tag_repo: TagRepository,
    topic_repo: TopicRepository,
) -> PostAssociationReconciler:
    return PostAssociationReconciler(post_repo, tag_repo, topic_repo)


@pytest.fixture
def service(
    post_repo: PostRepository,
    tag_repo: TagRepository,
    topic_repo: TopicRepository,
) -> PostService:
    return PostService(post_repo, tag_repo, topic_repo)

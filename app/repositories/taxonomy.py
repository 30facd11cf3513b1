"""Tag and topic repositories for database operations."""

from logging import getLogger
from typing import TypeVar
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlmodel import SQLModel

from app.configs import file_logger
from app.models import PostTagLink, PostTopicLink, TagDB, TopicDB
from app.repositories.base import OwnedRepository

logger = file_logger(getLogger(__name__))

ModelT = TypeVar("ModelT", bound=TagDB | TopicDB)


class TaxonomyRepository(OwnedRepository[ModelT]):
    """
    Shared operations for user-owned name/slug records linked to posts.

    Attributes:
        link_model: Association table joining posts to this model.
        link_field: Column on `link_model` referencing this model's id.
    """

    link_model: type[SQLModel]
    link_field: str

    async def all_for_user(self, user_id: UUID) -> list[ModelT]:
        """
        Get all of the user's records ordered by name.

        Args:
            user_id: Owner UUID

        Returns:
            list[ModelT]: The user's records
        """
        statement = self._owned(user_id).order_by(self.model.name)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def for_post(self, post_id: UUID) -> list[ModelT]:
        """
        Get the records linked to a post.

        Args:
            post_id: Post UUID

        Returns:
            list[ModelT]: Linked records ordered by name
        """
        link_column = getattr(self.link_model, self.link_field)
        link_post_column = getattr(self.link_model, "post_id")
        statement = (
            select(self.model)
            .join(self.link_model, link_column == self.model.id)
            .where(link_post_column == post_id)
            .order_by(self.model.name)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, user_id: UUID, name: str, slug: str) -> ModelT:
        """
        Create a record owned by the user with a fresh id.

        Args:
            user_id: Owner UUID
            name: Display name
            slug: Slug, unique within the user's scope

        Returns:
            ModelT: Created record

        Raises:
            DuplicateEntryError: If the user already has this slug
        """
        record = self.model(id=uuid4(), user_id=user_id, name=name, slug=slug)
        record = await self._add_and_refresh(record)
        logger.info(f"Created {self.model.__tablename__} record '{slug}' for user {user_id}")
        return record


class TagRepository(TaxonomyRepository[TagDB]):
    """Repository for Tag database operations."""

    model = TagDB
    link_model = PostTagLink
    link_field = "tag_id"


class TopicRepository(TaxonomyRepository[TopicDB]):
    """Repository for Topic database operations."""

    model = TopicDB
    link_model = PostTopicLink
    link_field = "topic_id"

    async def for_post_one(self, post_id: UUID) -> TopicDB | None:
        """
        Get a post's topic.

        Args:
            post_id: Post UUID

        Returns:
            TopicDB | None: The topic, or None when the post has none
        """
        topics = await self.for_post(post_id)
        return topics[0] if topics else None

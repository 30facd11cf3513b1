"""Post repository for database operations."""

from datetime import datetime
from logging import getLogger
from typing import Literal, TypeAlias
from uuid import UUID

from sqlalchemy import ColumnElement, and_, delete, desc, func, insert, or_, select

from app.configs import file_logger
from app.models import PostDB, PostTagLink, PostTopicLink, PostViewDB
from app.repositories.base import OwnedRepository
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

PostType: TypeAlias = Literal["draft", "published"]


def published_clause(now: datetime) -> ColumnElement[bool]:
    """Posts whose publication date is set and not in the future."""
    # pyrefly: ignore [missing-attribute]
    return and_(PostDB.published_at.is_not(None), PostDB.published_at <= now)


def draft_clause(now: datetime) -> ColumnElement[bool]:
    """Posts with no publication date or one still in the future."""
    # pyrefly: ignore [missing-attribute]
    return or_(PostDB.published_at.is_(None), PostDB.published_at > now)


class PostRepository(OwnedRepository[PostDB]):
    """
    Repository for Post database operations.

    Besides the post rows themselves, this repository owns the
    `posts_tags` and `posts_topics` association rows.
    """

    model = PostDB

    def _type_clause(self, post_type: PostType, now: datetime) -> ColumnElement[bool]:
        return draft_clause(now) if post_type == "draft" else published_clause(now)

    async def paginate(
        self,
        user_id: UUID,
        post_type: PostType = "published",
        page: int = 1,
        per_page: int = 15,
    ) -> tuple[list[tuple[PostDB, int]], int]:
        """
        Get a page of the user's posts of one type, newest first.

        Args:
            user_id: Owner UUID
            post_type: "draft" or "published"
            page: 1-based page number
            per_page: Page size

        Returns:
            tuple: ``([(post, views_count), ...], total)``
        """
        now = utc_now()
        type_clause = self._type_clause(post_type, now)

        views_count = (
            select(func.count(PostViewDB.id))
            # pyrefly: ignore [bad-argument-type]
            .where(PostViewDB.post_id == PostDB.id)
            .correlate(PostDB)
            .scalar_subquery()
            .label("views_count")
        )
        statement = (
            select(PostDB, views_count)
            # pyrefly: ignore [bad-argument-type]
            .where(PostDB.user_id == user_id, type_clause)
            # pyrefly: ignore [bad-argument-type]
            .order_by(desc(PostDB.created_at), desc(PostDB.id))
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.execute(statement)
        rows = [(post, int(count or 0)) for post, count in result.all()]

        total = await self.count(user_id, post_type, now=now)
        return rows, total

    async def count(
        self,
        user_id: UUID,
        post_type: PostType,
        now: datetime | None = None,
    ) -> int:
        """
        Count the user's posts of one type.

        Args:
            user_id: Owner UUID
            post_type: "draft" or "published"
            now: Reference time for the publication check

        Returns:
            int: Number of matching posts
        """
        statement = (
            select(func.count())
            .select_from(PostDB)
            # pyrefly: ignore [bad-argument-type]
            .where(PostDB.user_id == user_id, self._type_clause(post_type, now or utc_now()))
        )
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def save(self, post: PostDB) -> PostDB:
        """
        Insert or update a post.

        Args:
            post: Post to persist

        Returns:
            PostDB: Refreshed post

        Raises:
            DuplicateEntryError: If the id or (user, slug) already exists
        """
        post.updated_at = utc_now()
        return await self._add_and_refresh(post)

    async def tag_ids(self, post_id: UUID) -> set[UUID]:
        """Return the ids of the tags currently linked to a post."""
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(PostTagLink.tag_id).where(PostTagLink.post_id == post_id),
        )
        return set(result.scalars().all())

    async def sync_tags(self, post_id: UUID, tag_ids: list[UUID]) -> None:
        """
        Replace the post's tag links with exactly `tag_ids`.

        Links not in the new set are deleted, new ones inserted, and
        unchanged links are left alone.

        Args:
            post_id: Post UUID
            tag_ids: Desired tag ids (duplicates are ignored)
        """
        desired = set(tag_ids)
        current = await self.tag_ids(post_id)

        if detached := current - desired:
            await self.session.execute(
                delete(PostTagLink).where(
                    # pyrefly: ignore [bad-argument-type]
                    PostTagLink.post_id == post_id,
                    # pyrefly: ignore [missing-attribute]
                    PostTagLink.tag_id.in_(list(detached)),
                ),
            )
        if attached := desired - current:
            await self.session.execute(
                insert(PostTagLink),
                [{"post_id": post_id, "tag_id": tag_id} for tag_id in attached],
            )
        logger.debug(
            f"Synced tags for post {post_id}: +{len(attached)} -{len(detached)}",
        )

    async def topic_id(self, post_id: UUID) -> UUID | None:
        """Return the id of the post's topic, if any."""
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(PostTopicLink.topic_id).where(PostTopicLink.post_id == post_id),
        )
        return result.scalar_one_or_none()

    async def sync_topic(self, post_id: UUID, topic_id: UUID | None) -> None:
        """
        Replace the post's topic link.

        Args:
            post_id: Post UUID
            topic_id: Desired topic id, or None to clear the topic
        """
        current = await self.topic_id(post_id)
        if current == topic_id:
            return

        if current is not None:
            await self.session.execute(
                # pyrefly: ignore [bad-argument-type]
                delete(PostTopicLink).where(PostTopicLink.post_id == post_id),
            )
        if topic_id is not None:
            await self.session.execute(
                insert(PostTopicLink),
                [{"post_id": post_id, "topic_id": topic_id}],
            )

    async def delete(self, post: PostDB) -> None:
        """
        Delete a post together with its association and view rows.

        Args:
            post: Post to delete
        """
        for link_model in (PostTagLink, PostTopicLink, PostViewDB):
            await self.session.execute(
                # pyrefly: ignore [missing-attribute]
                delete(link_model).where(link_model.post_id == post.id),
            )
        await self.session.delete(post)
        await self.session.flush()

"""Post service: listing, editor bootstrap, save and delete for the admin panel."""

from logging import getLogger
from math import ceil
from typing import Any
from uuid import UUID, uuid4

from app.configs import NEW_POST_SENTINEL, file_logger
from app.configs.settings import VALIDATION_REQUIRED, VALIDATION_UNIQUE
from app.errors import PostMovedError, PostNotFoundError, ValidationError
from app.models import PostDB, TagDB, TopicDB
from app.repositories import PostRepository, TagRepository, TopicRepository
from app.repositories.post import PostType
from app.schemas.post import (
    PostIndexResponse,
    PostListItem,
    PostPage,
    PostResponse,
    PostSave,
    PostShowResponse,
    TaxonomyItem,
)
from app.services.associations import PostAssociationReconciler
from app.utils.helpers import format_datetime

logger = file_logger(getLogger(__name__))


def is_new_post(post_id: str) -> bool:
    """Return True when the id is the creation sentinel."""
    return post_id == NEW_POST_SENTINEL


def parse_post_id(post_id: str) -> UUID | None:
    """Parse a path id into a UUID, or None when it is not one."""
    try:
        return UUID(post_id)
    except ValueError:
        return None


def post_fields(post: PostDB) -> dict[str, Any]:
    """
    Flatten a post row into response fields.

    Args:
        post: Database post

    Returns:
        dict[str, Any]: Columns with timestamps rendered as ISO-8601
    """
    return {
        "id": post.id,
        "user_id": post.user_id,
        "slug": post.slug,
        "title": post.title,
        "summary": post.summary,
        "body": post.body,
        "published_at": format_datetime(post.published_at),
        "featured_image": post.featured_image,
        "featured_image_caption": post.featured_image_caption,
        "meta": post.meta,
        "created_at": format_datetime(post.created_at),
        "updated_at": format_datetime(post.updated_at),
    }


def taxonomy_items(records: list[TagDB] | list[TopicDB]) -> list[TaxonomyItem]:
    return [TaxonomyItem.model_validate(record) for record in records]


class PostService:
    """
    Operations behind the posts endpoints.

    The requesting user's id is passed to every operation; nothing here
    reads an ambient "current user".
    """

    def __init__(
        self,
        posts: PostRepository,
        tags: TagRepository,
        topics: TopicRepository,
    ) -> None:
        self.posts = posts
        self.tags = tags
        self.topics = topics
        self.reconciler = PostAssociationReconciler(posts, tags, topics)

    async def index(
        self,
        user_id: UUID,
        post_type: PostType = "published",
        page: int = 1,
        per_page: int = 15,
    ) -> PostIndexResponse:
        """
        List one page of the user's drafts or published posts.

        Args:
            user_id: Requesting user
            post_type: "draft" or "published"
            page: 1-based page number
            per_page: Page size

        Returns:
            PostIndexResponse: The page plus draft and published totals
        """
        rows, total = await self.posts.paginate(user_id, post_type, page, per_page)
        draft_count = await self.posts.count(user_id, "draft")
        published_count = await self.posts.count(user_id, "published")

        data = [PostListItem(**post_fields(post), views_count=views) for post, views in rows]
        return PostIndexResponse(
            posts=PostPage(
                data=data,
                total=total,
                page=page,
                per_page=per_page,
                last_page=max(ceil(total / per_page), 1),
            ),
            draft_count=draft_count,
            published_count=published_count,
        )

    async def show(self, user_id: UUID, post_id: str) -> PostShowResponse:
        """
        Load a post for the editor, or bootstrap a new one.

        Args:
            user_id: Requesting user
            post_id: Post id or the creation sentinel

        Returns:
            PostShowResponse: The post plus the user's tags and topics

        Raises:
            PostMovedError: If the id is neither the sentinel nor an owned post
        """
        if is_new_post(post_id):
            post = self.new_post_shell()
        else:
            existing = await self._owned_post(user_id, post_id)
            if existing is None:
                raise PostMovedError(post_id)
            post = await self.to_response(existing)

        return PostShowResponse(
            post=post,
            tags=taxonomy_items(await self.tags.all_for_user(user_id)),
            topics=taxonomy_items(await self.topics.all_for_user(user_id)),
        )

    @staticmethod
    def new_post_shell() -> PostResponse:
        """Return an unsaved post with a fresh id and a derived slug."""
        post_id = uuid4()
        return PostResponse(id=post_id, slug=f"post-{post_id}")

    async def save(
        self,
        user_id: UUID | None,
        post_id: str,
        payload: PostSave,
    ) -> PostResponse:
        """
        Create or update a post, then reconcile its topic and tags.

        Validation runs before any write. The caller's transaction makes the
        upsert and both syncs atomic.

        Args:
            user_id: Requesting user
            post_id: Existing post id or the creation sentinel
            payload: Validated request body

        Returns:
            PostResponse: The reloaded post with tags and topic

        Raises:
            ValidationError: If the user is missing or the slug is taken
            PostNotFoundError: If a non-sentinel id is not one of the user's posts
        """
        if user_id is None:
            raise ValidationError.for_field("user_id", VALIDATION_REQUIRED, "required")

        creating = is_new_post(post_id)
        exclude_id = None if creating else parse_post_id(post_id)
        # pyrefly: ignore [bad-argument-type]
        if await self.posts.slug_exists(user_id, payload.slug, exclude_id=exclude_id):
            raise ValidationError.for_field("slug", VALIDATION_UNIQUE, "unique")

        if creating:
            post = PostDB(id=payload.id or uuid4(), user_id=user_id)
        else:
            post = await self._owned_post(user_id, post_id)
            if post is None:
                raise PostNotFoundError(post_id)

        post.slug = payload.slug
        post.title = payload.title
        post.summary = payload.summary
        post.body = payload.body
        post.published_at = payload.published_at
        post.featured_image = payload.featured_image
        post.featured_image_caption = payload.featured_image_caption
        post.meta = payload.meta_dict()
        post = await self.posts.save(post)

        await self.reconciler.sync_topic(user_id, post.id, payload.topic)
        await self.reconciler.sync_tags(user_id, post.id, payload.tags)

        logger.info(f"{'Created' if creating else 'Updated'} post {post.id} for user {user_id}")
        return await self.to_response(post)

    async def destroy(self, user_id: UUID, post_id: str) -> None:
        """
        Delete one of the user's posts.

        Args:
            user_id: Requesting user
            post_id: Post id

        Raises:
            PostNotFoundError: If the id is not one of the user's posts
        """
        post = await self._owned_post(user_id, post_id)
        if post is None:
            raise PostNotFoundError(post_id)

        await self.posts.delete(post)
        logger.info(f"Deleted post {post_id} for user {user_id}")

    async def tag_items(self, user_id: UUID) -> list[TaxonomyItem]:
        return taxonomy_items(await self.tags.all_for_user(user_id))

    async def topic_items(self, user_id: UUID) -> list[TaxonomyItem]:
        return taxonomy_items(await self.topics.all_for_user(user_id))

    async def to_response(self, post: PostDB) -> PostResponse:
        """Render a stored post with its current tags and topic."""
        tags = await self.tags.for_post(post.id)
        topic = await self.topics.for_post_one(post.id)
        return PostResponse(
            **post_fields(post),
            tags=taxonomy_items(tags),
            topic=TaxonomyItem.model_validate(topic) if topic else None,
        )

    async def _owned_post(self, user_id: UUID, post_id: str) -> PostDB | None:
        parsed = parse_post_id(post_id)
        if parsed is None:
            return None
        return await self.posts.get_for_user(user_id, parsed)

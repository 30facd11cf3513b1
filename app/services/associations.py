"""Tag and topic reconciliation for saved posts."""

from logging import getLogger
from uuid import UUID

from app.configs import file_logger
from app.models import TagDB
from app.repositories import PostRepository, TagRepository, TopicRepository
from app.schemas.post import TaxonomyInput

logger = file_logger(getLogger(__name__))


class PostAssociationReconciler:
    """
    Find-or-create a post's tags and topic by slug, then sync the links.

    All lookups are scoped to the requesting user, so two users may use the
    same slug without sharing the underlying tag or topic.
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

    async def sync_topic(
        self,
        user_id: UUID,
        post_id: UUID,
        incoming: TaxonomyInput | None,
    ) -> UUID | None:
        """
        Set the post's topic to the incoming descriptor, or clear it.

        Args:
            user_id: Requesting user
            post_id: Post being saved
            incoming: Topic descriptor, None to clear

        Returns:
            UUID | None: Id of the linked topic
        """
        topic_id = None
        if incoming:
            topic = await self.topics.get_by_slug(user_id, incoming.slug)
            if topic is None:
                topic = await self.topics.create(user_id, incoming.name, incoming.slug)
            topic_id = topic.id

        await self.posts.sync_topic(post_id, topic_id)
        return topic_id

    async def sync_tags(
        self,
        user_id: UUID,
        post_id: UUID,
        incoming: list[TaxonomyInput] | None,
    ) -> list[UUID]:
        """
        Set the post's tags to exactly the incoming descriptors.

        The user's tags are fetched once; descriptors with an unknown slug
        create a tag, and repeated slugs resolve to the same tag.

        Args:
            user_id: Requesting user
            post_id: Post being saved
            incoming: Tag descriptors, None or empty to detach all

        Returns:
            list[UUID]: Ids of the linked tags, in first-seen order
        """
        tag_ids: list[UUID] = []
        if incoming:
            by_slug: dict[str, TagDB] = {
                tag.slug: tag for tag in await self.tags.all_for_user(user_id)
            }
            for descriptor in incoming:
                tag = by_slug.get(descriptor.slug)
                if tag is None:
                    tag = await self.tags.create(user_id, descriptor.name, descriptor.slug)
                    by_slug[tag.slug] = tag
                tag_ids.append(tag.id)
            tag_ids = list(dict.fromkeys(tag_ids))

        await self.posts.sync_tags(post_id, tag_ids)
        logger.debug(f"Post {post_id} linked to {len(tag_ids)} tag(s)")
        return tag_ids

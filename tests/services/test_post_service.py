# tests/services/test_post_service.py
"""Tests for app/services/posts.py module."""

from datetime import timedelta
from uuid import uuid4

import pytest

from app.configs import NEW_POST_SENTINEL
from app.errors import PostMovedError, PostNotFoundError, ValidationError
from app.models import UserDB
from app.repositories import PostRepository, TagRepository, TopicRepository
from app.schemas import PostSave, TaxonomyInput
from app.services import PostService
from app.services.posts import is_new_post, parse_post_id
from app.utils.helpers import utc_now


def hello_world(**overrides: object) -> PostSave:
    data: dict[str, object] = {
        "slug": "hello-world",
        "title": "Hello World",
        "body": "<p>Hello</p>",
        "published_at": utc_now() - timedelta(hours=1),
        "tags": [{"name": "Go", "slug": "go"}],
        "topic": {"name": "Backend", "slug": "backend"},
    }
    data.update(overrides)
    return PostSave.model_validate(data)


class TestHelpers:
    """Tests for the id helpers."""

    def test_is_new_post(self) -> None:
        assert is_new_post(NEW_POST_SENTINEL)
        assert not is_new_post(str(uuid4()))

    def test_parse_post_id(self) -> None:
        post_id = uuid4()
        assert parse_post_id(str(post_id)) == post_id
        assert parse_post_id("not-a-uuid") is None


class TestSave:
    """Tests for PostService.save."""

    @pytest.mark.asyncio
    async def test_create_with_tags_and_topic(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        post = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())

        assert post.slug == "hello-world"
        assert post.user_id == author.uuid
        assert [tag.slug for tag in post.tags] == ["go"]
        assert post.topic is not None
        assert post.topic.slug == "backend"
        assert post.published_at is not None

    @pytest.mark.asyncio
    async def test_create_with_one_tag_and_null_topic(
        self,
        service: PostService,
        post_repo: PostRepository,
        tag_repo: TagRepository,
        topic_repo: TopicRepository,
        author: UserDB,
    ) -> None:
        post = await service.save(
            author.uuid,
            NEW_POST_SENTINEL,
            PostSave.model_validate(
                {"slug": "hello-world", "tags": [{"name": "Go", "slug": "go"}], "topic": None},
            ),
        )

        assert [(tag.name, tag.slug) for tag in post.tags] == [("Go", "go")]
        assert post.topic is None
        assert [tag.name for tag in await tag_repo.all_for_user(author.uuid)] == ["Go"]
        assert await topic_repo.all_for_user(author.uuid) == []
        assert await post_repo.topic_id(post.id) is None

    @pytest.mark.asyncio
    async def test_create_uses_client_supplied_id(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        post_id = uuid4()

        post = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world(id=post_id))

        assert post.id == post_id

    @pytest.mark.asyncio
    async def test_update_overwrites_fields_and_keeps_own_slug(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        created = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())

        updated = await service.save(
            author.uuid,
            str(created.id),
            hello_world(title="Renamed", tags=[{"name": "Rust", "slug": "rust"}], topic=None),
        )

        assert updated.id == created.id
        assert updated.title == "Renamed"
        assert [tag.slug for tag in updated.tags] == ["rust"]
        assert updated.topic is None

    @pytest.mark.asyncio
    async def test_duplicate_slug_fails_for_same_user(
        self,
        service: PostService,
        post_repo: PostRepository,
        author: UserDB,
    ) -> None:
        await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())

        with pytest.raises(ValidationError) as exc_info:
            await service.save(author.uuid, NEW_POST_SENTINEL, hello_world(tags=None))

        assert exc_info.value.status_code == 422
        assert exc_info.value.errors[0]["field"] == "slug"
        assert exc_info.value.errors[0]["type"] == "unique"
        assert await post_repo.count(author.uuid, "published") == 1

    @pytest.mark.asyncio
    async def test_same_slug_allowed_for_different_users(
        self,
        service: PostService,
        author: UserDB,
        other_author: UserDB,
    ) -> None:
        mine = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())
        theirs = await service.save(other_author.uuid, NEW_POST_SENTINEL, hello_world())

        assert mine.id != theirs.id
        assert mine.slug == theirs.slug

    @pytest.mark.asyncio
    async def test_failed_validation_writes_nothing(
        self,
        service: PostService,
        tag_repo: TagRepository,
        author: UserDB,
    ) -> None:
        await service.save(author.uuid, NEW_POST_SENTINEL, hello_world(tags=None))

        with pytest.raises(ValidationError):
            await service.save(
                author.uuid,
                NEW_POST_SENTINEL,
                hello_world(tags=[{"name": "New", "slug": "new"}]),
            )

        assert await tag_repo.get_by_slug(author.uuid, "new") is None

    @pytest.mark.asyncio
    async def test_missing_user_fails(self, service: PostService) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.save(None, NEW_POST_SENTINEL, hello_world())

        assert exc_info.value.errors[0]["field"] == "user_id"

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        with pytest.raises(PostNotFoundError):
            await service.save(author.uuid, str(uuid4()), hello_world())

    @pytest.mark.asyncio
    async def test_cannot_update_another_users_post(
        self,
        service: PostService,
        author: UserDB,
        other_author: UserDB,
    ) -> None:
        theirs = await service.save(other_author.uuid, NEW_POST_SENTINEL, hello_world())

        with pytest.raises(PostNotFoundError):
            await service.save(author.uuid, str(theirs.id), hello_world(slug="stolen"))


class TestShow:
    """Tests for PostService.show."""

    @pytest.mark.asyncio
    async def test_sentinel_returns_fresh_shell(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        first = await service.show(author.uuid, NEW_POST_SENTINEL)
        second = await service.show(author.uuid, NEW_POST_SENTINEL)

        assert first.post.id != second.post.id
        assert first.post.slug == f"post-{first.post.id}"
        assert first.post.title is None
        assert first.post.tags == []

    @pytest.mark.asyncio
    async def test_existing_post_with_taxonomies(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        created = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())

        shown = await service.show(author.uuid, str(created.id))

        assert shown.post.id == created.id
        assert [tag.slug for tag in shown.post.tags] == ["go"]
        assert shown.post.topic is not None
        assert [tag.slug for tag in shown.tags] == ["go"]
        assert [topic.slug for topic in shown.topics] == ["backend"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", ["not-a-uuid", str(uuid4())])
    async def test_unresolvable_id_moves(
        self,
        service: PostService,
        author: UserDB,
        post_id: str,
    ) -> None:
        with pytest.raises(PostMovedError) as exc_info:
            await service.show(author.uuid, post_id)

        assert exc_info.value.status_code == 301

    @pytest.mark.asyncio
    async def test_another_users_post_moves(
        self,
        service: PostService,
        author: UserDB,
        other_author: UserDB,
    ) -> None:
        theirs = await service.save(other_author.uuid, NEW_POST_SENTINEL, hello_world())

        with pytest.raises(PostMovedError):
            await service.show(author.uuid, str(theirs.id))


class TestIndex:
    """Tests for PostService.index."""

    @pytest.mark.asyncio
    async def test_counts_and_envelope(
        self,
        service: PostService,
        author: UserDB,
        other_author: UserDB,
    ) -> None:
        await service.save(author.uuid, NEW_POST_SENTINEL, hello_world(slug="one"))
        await service.save(author.uuid, NEW_POST_SENTINEL, hello_world(slug="two"))
        await service.save(
            author.uuid,
            NEW_POST_SENTINEL,
            hello_world(slug="draft", published_at=None),
        )
        await service.save(other_author.uuid, NEW_POST_SENTINEL, hello_world())

        result = await service.index(author.uuid, "published", page=1, per_page=1)

        assert result.draft_count == 1
        assert result.published_count == 2
        assert result.posts.total == 2
        assert result.posts.per_page == 1
        assert result.posts.last_page == 2
        assert len(result.posts.data) == 1
        assert result.posts.data[0].views_count == 0

    @pytest.mark.asyncio
    async def test_empty_listing_has_one_page(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        result = await service.index(author.uuid, "draft")

        assert result.posts.total == 0
        assert result.posts.data == []
        assert result.posts.last_page == 1


class TestDestroy:
    """Tests for PostService.destroy."""

    @pytest.mark.asyncio
    async def test_deletes_own_post(
        self,
        service: PostService,
        post_repo: PostRepository,
        author: UserDB,
    ) -> None:
        created = await service.save(author.uuid, NEW_POST_SENTINEL, hello_world())

        await service.destroy(author.uuid, str(created.id))

        assert await post_repo.get_for_user(author.uuid, created.id) is None

    @pytest.mark.asyncio
    async def test_other_users_post_is_not_found(
        self,
        service: PostService,
        post_repo: PostRepository,
        author: UserDB,
        other_author: UserDB,
    ) -> None:
        theirs = await service.save(other_author.uuid, NEW_POST_SENTINEL, hello_world())

        with pytest.raises(PostNotFoundError):
            await service.destroy(author.uuid, str(theirs.id))

        assert await post_repo.get_for_user(other_author.uuid, theirs.id) is not None

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(
        self,
        service: PostService,
        author: UserDB,
    ) -> None:
        with pytest.raises(PostNotFoundError):
            await service.destroy(author.uuid, "nope")


@pytest.mark.asyncio
async def test_taxonomy_items(service: PostService, author: UserDB) -> None:
    await service.save(
        author.uuid,
        NEW_POST_SENTINEL,
        hello_world(tags=[TaxonomyInput(name="Rust", slug="rust"), {"name": "Go", "slug": "go"}]),
    )

    assert [tag.slug for tag in await service.tag_items(author.uuid)] == ["go", "rust"]
    assert [topic.slug for topic in await service.topic_items(author.uuid)] == ["backend"]

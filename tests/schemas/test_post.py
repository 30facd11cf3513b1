"""Tests for app/schemas/post.py module."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from app.schemas import PostIndexResponse, PostPage, PostSave


class TestPostSave:
    """Tests for the save request body."""

    def test_minimal_body(self) -> None:
        payload = PostSave.model_validate({"slug": "hello_world-2"})

        assert payload.title == "Title"
        assert payload.tags is None
        assert payload.topic is None
        assert payload.meta_dict() == {"description": None, "title": None, "canonical_link": None}

    @pytest.mark.parametrize(
        "slug",
        [None, "", "with space", "slash/es", "hello-world\n", "tab\tbed", "dot.ted"],
    )
    def test_rejects_bad_slugs(self, slug: str | None) -> None:
        with pytest.raises(ValidationError):
            PostSave.model_validate({"slug": slug})

    @pytest.mark.parametrize("slug", ["café", "ümlaut-2", "日本語_post"])
    def test_accepts_unicode_letters(self, slug: str) -> None:
        assert PostSave.model_validate({"slug": slug}).slug == slug

    @pytest.mark.parametrize("topic", [None, {}, [], ""])
    def test_empty_topic_is_none(self, topic: object) -> None:
        assert PostSave.model_validate({"slug": "a", "topic": topic}).topic is None

    def test_null_meta_is_empty(self) -> None:
        payload = PostSave.model_validate({"slug": "a", "meta": None})

        assert payload.meta_dict() == {"description": None, "title": None, "canonical_link": None}

    def test_missing_slug_is_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PostSave.model_validate({})

        assert "This field is required." in str(exc_info.value)

    def test_published_at_normalized_to_utc(self) -> None:
        payload = PostSave.model_validate(
            {"slug": "a", "published_at": "2025-01-01T17:00:00+08:00"},
        )

        assert payload.published_at == datetime(2025, 1, 1, 9, tzinfo=UTC)
        assert payload.published_at.tzinfo is UTC

    def test_naive_published_at_taken_as_utc(self) -> None:
        payload = PostSave.model_validate({"slug": "a", "published_at": "2025-01-01T09:00:00"})

        assert payload.published_at == datetime(2025, 1, 1, 9, tzinfo=UTC)

    def test_meta_round_trips(self) -> None:
        payload = PostSave.model_validate(
            {"slug": "a", "meta": {"description": "d", "canonical_link": "https://x.test/a"}},
        )

        assert payload.meta_dict() == {
            "description": "d",
            "title": None,
            "canonical_link": "https://x.test/a",
        }


def test_index_response_uses_camel_case_keys() -> None:
    response = PostIndexResponse(
        posts=PostPage(data=[], total=0, page=1, per_page=15, last_page=1),
        draft_count=2,
        published_count=3,
    )

    dumped = response.model_dump(by_alias=True)

    assert dumped["draftCount"] == 2
    assert dumped["publishedCount"] == 3
    assert dumped["posts"]["perPage"] == 15
    assert dumped["posts"]["lastPage"] == 1

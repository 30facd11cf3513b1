"""
Post schemas for the admin panel API.

Request bodies use the field names the editor sends (snake_case); the
listing envelope uses camelCase keys (`draftCount`, `perPage`, ...).
"""

from datetime import UTC, datetime
from re import fullmatch
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs.settings import (
    DEFAULT_POST_TITLE,
    VALIDATION_ALPHA_DASH,
    VALIDATION_REQUIRED,
)

# Unicode letters, digits, underscores and dashes
ALPHA_DASH = r"[\w-]+"


class TaxonomyItem(BaseModel):
    """A tag or topic as shown to the editor."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str


class TaxonomyInput(BaseModel):
    """An incoming tag or topic descriptor; created when the slug is unknown."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Go"])
    slug: str = Field(..., min_length=1, max_length=255, examples=["go"])


class PostMeta(BaseModel):
    """SEO metadata stored alongside a post."""

    description: str | None = None
    title: str | None = None
    canonical_link: str | None = None


class PostSave(BaseModel):
    """Request body for creating or updating a post."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID | None = Field(
        default=None,
        description="Client-generated post id (used when creating)",
    )
    slug: str | None = Field(
        default=None,
        validate_default=True,
        max_length=255,
        description="Slug, unique among the author's posts",
        examples=["hello-world"],
    )
    title: str | None = Field(
        default=DEFAULT_POST_TITLE,
        validate_default=True,
        max_length=255,
        examples=["Hello World"],
    )
    summary: str | None = None
    body: str | None = None
    published_at: datetime | None = Field(
        default=None,
        description="Publication time; null or future keeps the post a draft",
    )
    featured_image: str | None = None
    featured_image_caption: str | None = None
    meta: PostMeta = Field(default_factory=PostMeta)
    tags: list[TaxonomyInput] | None = Field(
        default=None,
        description="Tags to attach; absent or empty detaches all tags",
    )
    topic: TaxonomyInput | None = Field(
        default=None,
        description="Topic to attach; absent clears the topic",
    )

    @field_validator("slug")
    @classmethod
    def slug_is_alpha_dash(cls, value: str | None) -> str:
        """Require a slug made only of letters, digits, dashes and underscores."""
        if not value:
            raise ValueError(VALIDATION_REQUIRED)
        if not fullmatch(ALPHA_DASH, value):
            raise ValueError(VALIDATION_ALPHA_DASH)
        return value

    @field_validator("topic", mode="before")
    @classmethod
    def empty_topic_clears(cls, value: Any) -> Any:
        """Any empty topic value (`null`, `{}`, `[]`, `""`) means no topic."""
        return value or None

    @field_validator("meta", mode="before")
    @classmethod
    def null_meta_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("title")
    @classmethod
    def default_title(cls, value: str | None) -> str:
        return value or DEFAULT_POST_TITLE

    @field_validator("published_at")
    @classmethod
    def published_at_in_utc(cls, value: datetime | None) -> datetime | None:
        """Store publication times in UTC; naive values are taken as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def meta_dict(self) -> dict[str, Any]:
        return self.meta.model_dump()


class PostFields(BaseModel):
    """Columns shared by every post representation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID | None = None
    slug: str
    title: str | None = None
    summary: str | None = None
    body: str | None = None
    published_at: str | None = None
    featured_image: str | None = None
    featured_image_caption: str | None = None
    meta: PostMeta | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PostResponse(PostFields):
    """A single post with its tags and topic."""

    tags: list[TaxonomyItem] = Field(default_factory=list)
    topic: TaxonomyItem | None = None


class PostListItem(PostFields):
    """A post in a listing, annotated with its view count."""

    views_count: int = 0


class PostPage(BaseModel):
    """One page of posts."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[PostListItem]
    total: int
    page: int
    per_page: int = Field(alias="perPage")
    last_page: int = Field(alias="lastPage")


class PostIndexResponse(BaseModel):
    """Posts listing with per-state counts."""

    model_config = ConfigDict(populate_by_name=True)

    posts: PostPage
    draft_count: int = Field(alias="draftCount")
    published_count: int = Field(alias="publishedCount")


class PostShowResponse(BaseModel):
    """A post (or a new-post shell) plus the author's tags and topics."""

    post: PostResponse
    tags: list[TaxonomyItem]
    topics: list[TaxonomyItem]

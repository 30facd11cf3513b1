"""Post database models using SQLModel."""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
MetaType = JSON().with_variant(JSONB(), "postgresql")


class PostDB(SQLModel, table=True):
    """
    Post database model.

    Posts are scoped to their owning user: the slug is unique per user,
    not globally. Tags and the topic are linked through `posts_tags` and
    `posts_topics`.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        UniqueConstraint("user_id", "slug", name="uq_posts_user_slug"),
        Index("ix_posts_user_published", "user_id", "published_at"),
        Index("ix_posts_user_created", "user_id", "created_at"),
    )

    # Primary key (supplied by the client on first save)
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Owner (foreign key to users.uuid)",
    )

    slug: str = Field(
        sa_column=Column(String(255), nullable=False, index=True),
        description="URL-friendly slug (unique per user)",
    )
    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Post title",
    )
    summary: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Post summary",
    )
    body: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Post body",
    )
    published_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), index=True),
        description="Publication timestamp (null or future means draft)",
    )
    featured_image: str | None = Field(
        default=None,
        sa_column=Column(String(2048)),
        description="Featured image URL",
    )
    featured_image_caption: str | None = Field(
        default=None,
        sa_column=Column(String(2048)),
        description="Featured image caption",
    )
    meta: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(MetaType),
        description="SEO metadata (description, title, canonical_link)",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "slug": "hello-world",
                "title": "Hello World",
                "summary": "A first post",
                "body": "<p>Hello</p>",
                "published_at": "2025-01-01T09:00:00+00:00",
                "meta": {
                    "description": "A first post",
                    "title": "Hello World",
                    "canonical_link": None,
                },
            },
        },
    )


class PostTagLink(SQLModel, table=True):
    """Association row between a post and a tag."""

    __tablename__ = cast("declared_attr[str]", "posts_tags")

    post_id: UUID = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    tag_id: UUID = Field(
        sa_column=Column(
            "tag_id",
            ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )


class PostTopicLink(SQLModel, table=True):
    """Association row between a post and its topic; `post_id` alone is the key."""

    __tablename__ = cast("declared_attr[str]", "posts_topics")

    post_id: UUID = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    topic_id: UUID = Field(
        sa_column=Column(
            "topic_id",
            ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )


class PostViewDB(SQLModel, table=True):
    """A recorded page view of a post; only counted by this service."""

    __tablename__ = cast("declared_attr[str]", "post_views")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    post_id: UUID = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    ip: str | None = Field(default=None, sa_column=Column(String(45)))
    agent: str | None = Field(default=None, sa_column=Column(Text))
    referer: str | None = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

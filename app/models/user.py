"""Author table."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.utils.helpers import utc_now


class UserDB(SQLModel, table=True):
    """
    An author of posts.

    Owns posts, tags and topics. Credentials live with the identity
    provider; the API only resolves the id carried in a bearer token.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    uuid: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    username: str = Field(sa_column=Column(String(50), unique=True, nullable=False, index=True))
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False, index=True))
    display_name: str | None = Field(default=None, sa_column=Column(String(200)))
    # Deactivated authors keep their posts but are refused by the API
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default="true"),
    )
    created_at: datetime = Field(
        default_factory=lambda: utc_now().replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True)))

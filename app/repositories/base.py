"""Base repository for user-scoped database operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import from_integrity_error

ModelT = TypeVar("ModelT", bound=SQLModel)


class OwnedRepository(Generic[ModelT]):
    """
    Base repository for records owned by a user.

    Every lookup is scoped by the owning user's id, so slugs and ids from
    one user's scope never resolve against another's.

    Attributes:
        model: The SQLModel database model type.
        owner_field: The name of the owning-user column (default: "user_id").
    """

    model: type[ModelT]
    id_field: str = "id"
    owner_field: str = "user_id"
    slug_field: str = "slug"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    def _owned(self, user_id: UUID) -> Select[Any]:
        """Return a select statement restricted to the user's records."""
        owner_column = getattr(self.model, self.owner_field)
        return select(self.model).where(owner_column == user_id)

    async def get_for_user(self, user_id: UUID, record_id: UUID) -> ModelT | None:
        """
        Get one of the user's records by ID.

        Args:
            user_id: Owner UUID
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found and owned by the user, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = self._owned(user_id).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_slug(self, user_id: UUID, slug: str) -> ModelT | None:
        """
        Get one of the user's records by slug.

        Args:
            user_id: Owner UUID
            slug: Slug to look up

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        slug_column = getattr(self.model, self.slug_field)
        statement = self._owned(user_id).where(slug_column == slug)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def slug_exists(
        self,
        user_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if the user already has a record with this slug.

        Args:
            user_id: Owner UUID
            slug: Slug to check
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if another record uses the slug, False otherwise
        """
        owner_column = getattr(self.model, self.owner_field)
        slug_column = getattr(self.model, self.slug_field)
        statement = select(1).where(owner_column == user_id, slug_column == slug)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        The surrounding request transaction is left to roll back on failure.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            raise from_integrity_error(e) from e
        return record

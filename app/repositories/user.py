"""Author lookups used by authentication and local provisioning."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors.database import from_integrity_error
from app.models.user import UserDB


class UserRepository:
    """
    Repository for the `users` table.

    Users are not owned by anyone, so this does not extend
    `OwnedRepository`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _one(self, *criteria: object) -> UserDB | None:
        # pyrefly: ignore [bad-argument-type]
        result = await self.session.execute(select(UserDB).where(*criteria))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """Resolve the subject of a bearer token."""
        # pyrefly: ignore [bad-argument-type]
        return await self._one(UserDB.uuid == user_id)

    async def get_by_username(self, username: str) -> UserDB | None:
        # pyrefly: ignore [bad-argument-type]
        return await self._one(UserDB.username == username)

    async def create(
        self,
        username: str,
        email: str,
        display_name: str | None = None,
    ) -> UserDB:
        """
        Provision an author.

        Args:
            username: Unique login name
            email: Unique email address
            display_name: Optional name shown in the admin panel

        Returns:
            UserDB: The flushed user, with its generated id

        Raises:
            DuplicateEntryError: If the username or email is taken
        """
        user = UserDB(username=username, email=email, display_name=display_name)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise from_integrity_error(
                e,
                duplicate_detail=f"Author '{username}' <{email}> already exists",
            ) from e
        await self.session.refresh(user)
        return user

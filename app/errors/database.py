"""Database errors and the translation of driver integrity failures."""

from logging import getLogger

from sqlalchemy.exc import IntegrityError
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))

# Substrings PostgreSQL (asyncpg) and SQLite use for unique violations
UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate")


class DatabaseError(BaseAppError):
    """Root of all persistence failures; 500 unless a subclass says otherwise."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail)


class DatabaseInitializationError(DatabaseError):
    def __init__(self, detail: str = "Failed to initialize database") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """A unique constraint (post id, per-user slug, username...) was violated."""

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class RecordNotFoundError(DatabaseError):
    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


def from_integrity_error(exc: IntegrityError, duplicate_detail: str | None = None) -> DatabaseError:
    """
    Map a flush-time `IntegrityError` onto the application's error types.

    Args:
        exc: Error raised by SQLAlchemy
        duplicate_detail: Message to use when the cause is a unique violation

    Returns:
        DatabaseError: `DuplicateEntryError` for unique violations,
        a plain `DatabaseError` otherwise
    """
    message = str(exc.orig) if exc.orig else str(exc)
    if any(marker in message.lower() for marker in UNIQUE_VIOLATION_MARKERS):
        return DuplicateEntryError(duplicate_detail or message)
    logger.error(f"Integrity error: {message}")
    return DatabaseError(f"Database integrity error: {message}")


database_exception_handler = create_exception_handler(logger)

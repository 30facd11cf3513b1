from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.post import PostMovedError, PostNotFoundError, post_moved_exception_handler
from app.errors.validation import (
    ValidationError,
    service_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "create_exception_handler",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "RecordNotFoundError",
    "database_exception_handler",
    "PostMovedError",
    "PostNotFoundError",
    "post_moved_exception_handler",
    "ValidationError",
    "service_validation_exception_handler",
    "validation_exception_handler",
]

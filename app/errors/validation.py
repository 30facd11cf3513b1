"""
Validation errors.

Both request-parsing failures (raised by FastAPI) and checks that need the
database (slug uniqueness, owner presence) render the same body::

    {"detail": "Validation failed",
     "errors": [{"field": "slug", "message": "...", "type": "unique"}]}
"""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT

from app.configs import file_logger
from app.configs.settings import VALIDATION_FAILED
from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class ValidationError(BaseAppError):
    """Field-level failure detected by a service after the body was parsed."""

    def __init__(self, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(VALIDATION_FAILED, HTTP_422_UNPROCESSABLE_CONTENT)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str, error_type: str) -> "ValidationError":
        return cls([field_error(field, message, error_type)])


def field_error(field: str, message: str, error_type: str) -> dict[str, Any]:
    return {"field": field, "message": message, "type": error_type}


def _from_pydantic(error: dict[str, Any]) -> dict[str, Any]:
    # First loc entry is the source ("body", "query", "path")
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    entry = field_error(
        field,
        error.get("msg", "Invalid value"),
        error.get("type", "validation_error"),
    )
    if ctx := error.get("ctx"):
        entry["context"] = {
            key: str(value) if isinstance(value, Exception) else value
            for key, value in ctx.items()
        }
    return entry


async def validation_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Render a `RequestValidationError` in the shared validation body.

    Args:
        request: The incoming request.
        exc: The RequestValidationError raised while parsing.

    Returns:
        ORJSONResponse: 422 with one entry per failing field.
    """
    errors = [_from_pydantic(error) for error in cast(RequestValidationError, exc).errors()]
    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {errors}",
    )
    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content=ValidationError(errors).payload(),
    )


service_validation_exception_handler = create_exception_handler(logger)

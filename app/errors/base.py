"""Application error root and the JSON handler factory shared by error modules."""

from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any, TypeAlias

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.utils.helpers import host

ErrorHandler: TypeAlias = Callable[[Request, Exception], Awaitable[ORJSONResponse]]


class BaseAppError(Exception):
    """
    Error carrying its own HTTP status.

    Subclasses may set extra public attributes (for example `errors`); they
    are rendered next to `detail` in the response body.
    """

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    def payload(self) -> dict[str, Any]:
        """Return the JSON body for this error."""
        extras = {
            key: value
            for key, value in vars(self).items()
            if key not in ("detail", "status_code") and not key.startswith("_")
        }
        return {"detail": self.detail, **extras}


def create_exception_handler(logger: Logger) -> ErrorHandler:
    """
    Build an exception handler that logs through `logger`.

    `BaseAppError` instances render their own payload; anything else becomes
    a bare 500.

    Args:
        logger: Module logger of the error family being handled.

    Returns:
        ErrorHandler: Coroutine suitable for `FastAPI.exception_handlers`.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if isinstance(exc, BaseAppError):
            status_code, content = exc.status_code, exc.payload()
        else:
            status_code, content = HTTP_500_INTERNAL_SERVER_ERROR, {"detail": "Internal Server Error"}

        logger.warning(f"{content['detail']} for ip: {host(request)} for endpoint {request.url.path}")
        return ORJSONResponse(content=content, status_code=status_code)

    return handler

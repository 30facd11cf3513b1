"""Post-specific errors."""

from logging import getLogger

from fastapi import Request
from starlette.responses import Response
from starlette.status import HTTP_301_MOVED_PERMANENTLY

from app.configs import file_logger
from app.errors.base import BaseAppError
from app.errors.database import RecordNotFoundError
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class PostNotFoundError(RecordNotFoundError):
    """Raised when a post id does not resolve to one of the requester's posts."""

    def __init__(self, post_id: object) -> None:
        super().__init__(f"Post {post_id} not found")


class PostMovedError(BaseAppError):
    """
    Raised when a post is requested by an id that is neither the creation
    sentinel nor one of the requester's posts.

    Rendered as an empty 301 rather than a 404.
    """

    def __init__(self, post_id: object) -> None:
        super().__init__(f"Post {post_id} is not available", HTTP_301_MOVED_PERMANENTLY)


async def post_moved_exception_handler(request: Request, exc: Exception) -> Response:
    """Return an empty-bodied 301 for unresolvable post ids."""
    logger.info(f"{exc} for ip: {host(request)} for endpoint {request.url.path}")
    return Response(status_code=HTTP_301_MOVED_PERMANENTLY)

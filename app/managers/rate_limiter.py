# app/managers/rate_limiter.py

"""
Rate limiting for the admin API (slowapi).

Requests are bucketed by API key, then by the author named in a valid
bearer token, then by client IP. Each route picks one of the tiers below;
API-key callers get the higher figure.
"""

from collections.abc import Callable
from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig, file_logger
from app.managers.token_manager import decode_access_token

logger = file_logger(getLogger(__name__))

API_KEY_PREFIX = "apikey:"


def tiered(default: str, with_api_key: str) -> Callable[[str], str]:
    """Return a slowapi limit provider choosing a figure from the bucket key."""

    def limit_for(key: str) -> str:
        return with_api_key if key.startswith(API_KEY_PREFIX) else default

    return limit_for


READ_LIMIT = tiered("60/minute", "120/minute")
WRITE_LIMIT = tiered("30/minute", "60/minute")
DELETE_LIMIT = tiered("10/minute", "30/minute")


def get_identifier(request: Request) -> str:
    """
    Bucket key for a request.

    Args:
        request: FastAPI request object.

    Returns:
        str: `apikey:<key>`, `user:<uuid>` or `ip:<address>`.
    """
    if api_key := request.headers.get("X-API-Key"):
        return f"{API_KEY_PREFIX}{api_key}"

    scheme, _, token = (request.headers.get("Authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and (token_data := decode_access_token(token)):
        return f"user:{token_data.user_id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def close_limiter() -> None:
    limiter.reset()
    logger.info("Rate limiter shutdown complete")


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render a 429 with the exceeded limit and the Retry-After hint."""
    limit_exc = cast(RateLimitExceeded, exc)
    # slowapi's own handler computes Retry-After from the limiter window
    retry_after = _rate_limit_exceeded_handler(request, limit_exc).headers.get("retry-after", "60")
    logger.warning(f"Rate limit exceeded for {get_identifier(request)} on {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": limit_exc.detail,
            "retry_after": f"{retry_after} seconds",
        },
        headers={"Retry-After": retry_after},
    )

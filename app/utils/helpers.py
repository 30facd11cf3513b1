"""Small request and time helpers shared across the app."""

from datetime import UTC, datetime

from fastapi import Request
from fastapi.routing import APIRoute
from starlette.routing import Match, Route


def host(request: Request) -> str:
    """Return the client IP, or "unknown" behind transports without one."""
    return request.client.host if request.client else "unknown"


def utc_now() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(tz=UTC).replace(microsecond=0)


def today_str() -> str:
    """Local wall-clock time as `YYYY-MM-DD HH:MM:SS`."""
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def get_summary(request: Request) -> str | None:
    """
    Name the route a request resolves to, for log lines.

    API routes report their OpenAPI summary; plain routes (docs, openapi.json)
    their name. Unmatched paths give None.
    """
    for route in request.scope["app"].routes:
        if not isinstance(route, Route):
            continue
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.summary if isinstance(route, APIRoute) else route.name
    return None


def format_datetime(value: datetime | None) -> str | None:
    """
    Format a stored timestamp for responses.

    Naive values (as returned by SQLite) are treated as UTC.

    Args:
        value: Timestamp to format.

    Returns:
        str | None: ISO-8601 string, or None when unset.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()

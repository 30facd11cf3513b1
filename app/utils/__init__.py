"""Utility helper functions."""

from app.utils.helpers import format_datetime, get_summary, host, today_str, utc_now

__all__ = [
    "format_datetime",
    "get_summary",
    "host",
    "today_str",
    "utc_now",
]

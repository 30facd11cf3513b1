# tests/utils/test_helpers.py
"""Tests for app/utils/helpers.py module."""

import re
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import MagicMock

from fastapi import FastAPI
from starlette.testclient import TestClient

from app.utils.helpers import format_datetime, get_summary, host, today_str, utc_now


class TestTodayStr:
    """Tests for today_str function."""

    def test_format_matches_expected_pattern(self) -> None:
        """Test that the date format matches YYYY-MM-DD HH:MM:SS."""
        result = today_str()
        pattern = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"
        assert re.match(pattern, result), f"Date format mismatch: {result}"


class TestUtcNow:
    def test_is_aware_and_whole_seconds(self) -> None:
        now = utc_now()

        assert now.tzinfo is UTC
        assert now.microsecond == 0


class TestFormatDatetime:
    """Tests for format_datetime function."""

    def test_none(self) -> None:
        assert format_datetime(None) is None

    def test_naive_is_treated_as_utc(self) -> None:
        assert format_datetime(datetime(2025, 1, 1, 9)) == "2025-01-01T09:00:00+00:00"

    def test_aware_keeps_offset(self) -> None:
        value = datetime(2025, 1, 1, 9, tzinfo=timezone(timedelta(hours=8)))

        assert format_datetime(value) == "2025-01-01T09:00:00+08:00"


class TestHost:
    def test_client_host(self) -> None:
        request = MagicMock()
        request.client.host = "10.0.0.1"

        assert host(request) == "10.0.0.1"

    def test_missing_client(self) -> None:
        request = MagicMock()
        request.client = None

        assert host(request) == "unknown"


class TestGetSummary:
    """Tests for get_summary function."""

    def test_returns_route_summary(self) -> None:
        app = FastAPI()
        captured: dict[str, str | None] = {}

        @app.get("/ping", summary="Ping the service")
        async def ping_route() -> dict[str, str]:
            return {"status": "ok"}

        @app.middleware("http")
        async def capture(request, call_next):  # noqa: ANN001, ANN202
            captured["summary"] = get_summary(request)
            return await call_next(request)

        with TestClient(app) as client:
            client.get("/ping")

        assert captured["summary"] == "Ping the service"

    def test_unknown_path_has_no_summary(self) -> None:
        app = FastAPI()
        captured: dict[str, str | None] = {"summary": "unset"}

        @app.middleware("http")
        async def capture(request, call_next):  # noqa: ANN001, ANN202
            captured["summary"] = get_summary(request)
            return await call_next(request)

        with TestClient(app) as client:
            client.get("/missing")

        assert captured["summary"] is None

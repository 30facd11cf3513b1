# app/middleware/middleware.py
"""
HTTP plumbing for the admin posts API.

Console logging goes through rich; module loggers additionally write JSON
lines to the rotating log file when `LOG_TO_FILE` is set. The lifespan
handler creates missing tables on startup and releases the engine pool and
limiter storage on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import close_db, init_db
from app.managers.rate_limiter import close_limiter
from app.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

basicConfig(
    level="DEBUG" if settings.DEBUG else "INFO",
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("rich"))

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Prepare the schema before serving; release pools after."""
    logger.info(f"Starting {app.title} v{app.version} ({settings.ENVIRONMENT})")
    try:
        await init_db()
    except Exception:
        logger.exception("Database initialization failed")
        raise
    logger.info("Ready. Docs at /docs, health at /health")

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await close_db()
        await close_limiter()
    except Exception:
        logger.exception("Error during shutdown")


def configure_cors(app: FastAPI) -> None:
    """Allow the admin panel origins, plus the production frontend when set."""
    origins = [*settings.CORS_ORIGINS]
    if settings.PRODUCTION_FRONTEND_URL:
        origins.append(settings.PRODUCTION_FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its route summary, status and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Reuse the caller's id so panel and API logs can be joined
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        route = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info(f"[{request_id}] {route} from ip: {host(request)}")

        started = perf_counter()
        response = await call_next(request)
        elapsed_ms = (perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(f"[{request_id}] {response.status_code} in {elapsed_ms:.1f}ms")
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser hardening headers; HSTS only in production."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(
            {
                "X-Content-Type-Options": "nosniff",
                "X-Frame-Options": "DENY",
                "Referrer-Policy": "strict-origin-when-cross-origin",
            },
        )
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

# app/main.py

"""
Canvas Admin Backend.

Assembles the posts API: middleware, exception handlers, the posts and
taxonomy routers, plus the `/` and `/health` service endpoints.
"""

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse, Response
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.db import ping
from app.errors import (
    DatabaseError,
    PostMovedError,
    ValidationError,
    database_exception_handler,
    post_moved_exception_handler,
    service_validation_exception_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import posts_router, taxonomy_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

EXCEPTION_HANDLERS = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (DatabaseError, database_exception_handler),
    (ValidationError, service_validation_exception_handler),
    (PostMovedError, post_moved_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

service_router = APIRouter()


@service_router.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 09:00:00",
                        "database": "connected",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Report the API version and whether the database answers.

    Always 200; an unreachable database downgrades `status` to "degraded".

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        Service version and database reachability.
    """
    database_ok = await ping()
    return HealthCheckResponse(
        version=request.app.version,
        status="ok" if database_ok else "degraded",
        timestamp=today_str(),
        database="connected" if database_ok else "unavailable",
    )


@service_router.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to Canvas Admin Backend"},
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="root_access",
)
@limiter.limit("5/minute")
async def root(request: Request, response: Response) -> dict[str, str]:
    return {"message": f"Welcome to {request.app.title}"}


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    application = FastAPI(
        title=settings.APP_NAME,
        description="Posts API for the admin panel",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        swagger_ui_parameters={"docExpansion": "none", "operationsSorter": "method"},
    )

    # Added in reverse: the last middleware added runs first
    configure_cors(application)
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(GZipMiddleware, minimum_size=1000)
    application.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    for router in (service_router, posts_router, taxonomy_router):
        application.include_router(router)

    for exc_type, handler in EXCEPTION_HANDLERS:
        application.add_exception_handler(exc_type, handler)

    application.state.limiter = limiter
    return application


app = create_app()

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.exceptions import ServiceError
from src.core.logging import configure_logging, correlation_id_var, org_var, viewer_var
from src.core.settings import get_app_settings
from src.db.run_migrations import main as run_alembic
from src.db.seed import seed_all
from src.schemas.common import ErrorInfo, ErrorResponse, MessageResponse

# Routers
from src.api.routes.org_home import router as org_home_router

# Configure structured logging once at import
configure_logging()
logger = logging.getLogger(__name__)

settings = get_app_settings()

openapi_tags = [
    {"name": "Health", "description": "Liveness probes."},
    {"name": "Organizations", "description": "Organization home pages."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    token_viewer = viewer_var.set(None)
    token_org = org_var.set(None)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)
        viewer_var.reset(token_viewer)
        org_var.reset(token_org)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=details),
        correlation_id=getattr(request.state, "correlation_id", None),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(tz=timezone.utc),
    )
    headers = {"X-Correlation-ID": err.correlation_id} if err.correlation_id else None
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Global handler for HTTP errors (including unmatched routes) with the standard envelope.
    """
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type="http_error",
        message=str(detail),
        details=None if isinstance(exc.detail, str) else exc.detail,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global handler for request validation errors with a standard structure.
    """
    return _build_error_response(
        request=request,
        status_code=422,
        error_type="validation_error",
        message="Request validation failed",
        details=exc.errors(),
    )


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """
    A collaborator the page depends on failed: log which one and answer a generic 500.
    """
    logger.error("%s failed", exc.operation, exc_info=exc.cause)
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing request")
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


@app.on_event("startup")
async def on_startup() -> None:
    """
    Run migrations and optional seeding on service startup.

    Seeding is opt-in via settings.
    """
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            logger.info("Running Alembic migrations: upgrade head")
            # env.py drives its own event loop, so keep it off this one
            await asyncio.to_thread(run_alembic, ["upgrade", "head"])
            logger.info("Migrations completed.")
        except Exception as exc:
            logger.exception("Migration step failed: %s", exc)
            # Keep serving; readiness is judged by the health probe and later requests.

    if settings.AUTO_SEED:
        try:
            logger.info("Running database seeding...")
            await seed_all()
            logger.info("Seeding completed.")
        except Exception as exc:
            logger.exception("Seeding step failed: %s", exc)


api_v1 = APIRouter(prefix="/api/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


app.include_router(api_v1)
# Registered last: /{org}/ would otherwise shadow fixed paths.
app.include_router(org_home_router)

# ruff: noqa: E402
# E402 disabled: load_dotenv() must run before other imports for Sentry DSN

import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.sentry_config import init_sentry
from helpers.security_headers import SecurityHeadersMiddleware
from helpers.time_utils import format_iso8601, utc_now
from models.config import settings
from models.exceptions import (
    DomainException,
    RateLimitExceededException,
    ValidationException,
)
from models.schemas import HealthResponse
from routers import social_router

# Initialize Sentry BEFORE app creation
init_sentry()

# Configure logging with Loguru
configure_logging(
    settings.ENVIRONMENT, settings.LOG_DIR if settings.LOG_TO_FILE else None
)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Share events and rate limit counters live in process memory, so there is
    nothing to connect to on startup or flush on shutdown.
    """
    logger.info(
        f"DUO Social API {settings.APP_VERSION} starting "
        f"(environment={settings.ENVIRONMENT}, "
        f"share rate limit={settings.SHARE_RATE_LIMIT}/"
        f"{settings.SHARE_RATE_LIMIT_WINDOW_SECONDS}s)"
    )
    yield
    logger.info("DUO Social API stopped; in-memory share events discarded")


app = FastAPI(title="DUO Social API", version=settings.APP_VERSION, lifespan=lifespan)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Inject correlation ID into request context and Sentry."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request with correlation ID tracking."""
        correlation_id = (
            request.headers.get("X-Correlation-ID") or generate_correlation_id()
        )
        set_correlation_id(correlation_id)

        sentry_sdk.set_tag("correlation_id", correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests with performance monitoring."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log timing information."""
        start_time = time.perf_counter()

        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )

        if duration > settings.SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration:.2f}s (threshold: {settings.SLOW_REQUEST_THRESHOLD}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response


# The last middleware added runs outermost: CORS, logging, correlation, security headers
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID", "Retry-After"],
)


def _error_response(
    status_code: int,
    message: str,
    correlation_id: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "correlation_id": correlation_id,
        },
        headers=headers,
    )


# Global unhandled exception handler (returns generic 500 and logs details)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions with full Sentry capture."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    # Positional argument so braces in the exception text are not parsed by loguru
    logger.bind(
        path=str(request.url.path), method=request.method
    ).opt(exception=exc).error("Unhandled exception: {}", repr(exc))

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, correlation_id
    )


# Centralized exception handlers
@app.exception_handler(ValidationException)
async def validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    """Handle validation exceptions."""
    logger.warning(
        f"Validation error: {exc.message}",
        correlation_id=exc.correlation_id,
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )

    return _error_response(
        status.HTTP_400_BAD_REQUEST, exc.message, exc.correlation_id
    )


@app.exception_handler(RateLimitExceededException)
async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceededException
) -> JSONResponse:
    """Handle rate limit exceeded exception."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    logger.warning(f"Rate limit exceeded: {exc.message}", path=str(request.url.path))

    headers = {}
    if exc.retry_after:
        headers["Retry-After"] = str(exc.retry_after)

    return _error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        exc.message,
        exc.correlation_id,
        headers=headers,
    )


@app.exception_handler(DomainException)
async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Fallback for domain exceptions without a dedicated handler."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.set_tag("exception_type", exc.__class__.__name__)
    sentry_sdk.capture_exception(exc)

    logger.error(
        f"Unhandled domain exception: {exc.message}",
        correlation_id=exc.correlation_id,
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, exc.correlation_id
    )


# Include routers
app.include_router(social_router.router, prefix="/api")


@app.get("/")
def root() -> dict:
    """Root endpoint."""
    return {"message": "Welcome to DUO Social API", "version": settings.APP_VERSION}


@app.get("/api/health", response_model=HealthResponse)
def health_check(response: Response) -> HealthResponse:
    """Health check endpoint used by the hosting platform and uptime monitors."""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"

    return HealthResponse(
        status="healthy",
        timestamp=format_iso8601(utc_now()),
        environment=settings.ENVIRONMENT,
        uptime=round(time.monotonic() - _started_at, 3),
        version=settings.APP_VERSION,
    )

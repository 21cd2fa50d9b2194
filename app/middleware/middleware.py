# app/middleware/middleware.py
"""
Middleware components for the SkillSnap API.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan handler that starts and stops the
database and the cache manager.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import settings
from app.db import close_db, init_db
from app.managers.cache_manager import CacheManager
from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
)
from app.utils.helpers import get_summary, host

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info("Starting %s...", app.title)

    try:
        await init_db()

        cache_manager = CacheManager()
        await cache_manager.initialize()
        app.state.cache_manager = cache_manager

        logger.info("Services initialized successfully")
        logger.info("  - API Documentation: /docs")
        logger.info("  - Health Check: /health")
        if settings.ENABLE_METRICS:
            logger.info("  - Metrics: /metrics")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info("Shutting down %s...", app.title)
    try:
        await cache_manager.shutdown()
        await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://localhost:7001",
    ]

    if frontend_url := settings.FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind a request id, then log request summary and timing information."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        clear_context()
        bind_request_id(request_id)

        start_time = perf_counter()
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info("Request: %s, from ip: %s", route_info, host(request))

        response = await call_next(request)
        duration_ms = (perf_counter() - start_time) * 1000

        logger.info(
            "Response",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        if settings.ENVIRONMENT != "development":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

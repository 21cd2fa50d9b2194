# app/routes/health.py

"""Liveness, readiness and combined health endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from app.configs import settings
from app.managers.rate_limiter import limiter
from app.monitoring.health import HealthChecker
from app.schemas import CacheHealthResponse, HealthCheckResponse

router = APIRouter(prefix="/health", tags=["🩺 Health"])


def _checker(request: Request) -> HealthChecker:
    return HealthChecker(request.app, version=settings.APP_VERSION)


@router.get(
    "",
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ready",
                        "timestamp": "2026-01-01T12:00:00+00:00",
                        "checks": {
                            "database": {"status": "pass", "response_ms": 3},
                            "cache": {"status": "pass", "response_ms": 0, "total_keys": 2},
                            "disk": {"status": "pass", "usage_percent": 41.5},
                        },
                        "cache": {"backend": "in-memory", "status": "healthy"},
                    },
                },
            },
        },
        503: {"description": "A dependency check failed"},
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint with dependency checks and cache statistics.

    Returns 503 when the database or cache is unusable.
    """
    status = await _checker(request).check_readiness()
    cache_health = await request.app.state.cache_manager.health_check()
    response = HealthCheckResponse(
        **status.to_dict(),
        cache=CacheHealthResponse(**cache_health),
    )
    return ORJSONResponse(
        content=response.model_dump(),
        status_code=HTTP_200_OK if status.is_healthy else HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/live", summary="Liveness probe", operation_id="health_live")
@limiter.exempt
async def liveness(request: Request) -> ORJSONResponse:
    return ORJSONResponse(content=_checker(request).check_liveness().to_dict())


@router.get("/ready", summary="Readiness probe", operation_id="health_ready")
@limiter.exempt
async def readiness(request: Request) -> ORJSONResponse:
    status = await _checker(request).check_readiness()
    return ORJSONResponse(
        content=status.to_dict(),
        status_code=HTTP_200_OK if status.is_healthy else HTTP_503_SERVICE_UNAVAILABLE,
    )

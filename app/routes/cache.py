# app/routes/cache.py
"""Cache administration routes. Both require the Admin role."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.auth import AdminIdentityDep
from app.decorators import timed
from app.dependencies import CacheDep
from app.managers.rate_limiter import limiter
from app.monitoring.logging import get_logger
from app.schemas import CacheClearResponse, CacheStatsResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/cache", tags=["🗄️ Cache"])

_AUTH_ERRORS = {
    401: {"description": "Missing, invalid or expired token"},
    403: {"description": "Admin role required"},
}


@router.get(
    "/stats",
    response_model=CacheStatsResponse,
    summary="Get cache statistics",
    response_class=ORJSONResponse,
    responses=_AUTH_ERRORS,
    operation_id="cache_stats",
)
@timed("/cache/stats")
@limiter.limit("10/minute")
async def get_cache_stats(
    request: Request,
    identity: AdminIdentityDep,
    manager: CacheDep,
) -> ORJSONResponse:
    """
    Get cache statistics.

    Returns:
        Cache statistics.
    """
    stats = manager.get_statistics()
    response = CacheStatsResponse(status="success", data=stats)
    return ORJSONResponse(content=response.model_dump())


@router.delete(
    "",
    response_model=CacheClearResponse,
    summary="Clear all cache entries",
    response_class=ORJSONResponse,
    responses=_AUTH_ERRORS,
    operation_id="cache_clear",
)
@timed("/cache/clear")
@limiter.limit("2/minute")
async def clear_cache(
    request: Request,
    identity: AdminIdentityDep,
    manager: CacheDep,
) -> ORJSONResponse:
    """
    Clear all cache entries.

    Returns:
        Clear operation result.
    """
    await manager.clear()
    logger.info("Cache cleared by admin", user_id=str(identity.user_id))
    response = CacheClearResponse(status="success", message="All cache entries cleared")
    return ORJSONResponse(content=response.model_dump())

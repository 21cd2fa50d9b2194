# app/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import metrics
from app.utils.helpers import host

logger = get_logger(__name__)


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Authenticated callers are keyed by their bearer token so that clients
    behind one address do not share a budget; everyone else by IP.
    """
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return f"token:{credentials[-32:]}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Returns:
        429 response with the exceeded limit and, when known, the retry delay.
    """
    http_exc = cast(RateLimitExceeded, exc)
    response = _rate_limit_exceeded_handler(request, http_exc)
    metrics.record_rate_limit_hit(request.url.path)
    logger.warning(f"Rate limit exceeded for ip: {host(request)} for endpoint {request.url.path}")

    content: dict[str, str] = {
        "detail": "Rate limit exceeded",
        "allowed_requests": str(http_exc.detail),
    }
    if retry_after := response.headers.get("retry-after"):
        content["retry_after"] = f"{retry_after} seconds"
    return ORJSONResponse(status_code=HTTP_429_TOO_MANY_REQUESTS, content=content)

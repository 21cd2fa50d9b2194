from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheStatistics(BaseModel):
    """Cache statistics model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    hits: int
    misses: int
    sets: int
    deletes: int
    evictions: int
    errors: int
    hit_rate: str
    total_requests: int
    created_at: str
    last_updated_at: str


class CacheHealthResponse(BaseModel):
    """Cache health response model (nested in HealthCheckResponse)."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    backend: str
    status: str
    statistics: CacheStatistics
    info: dict[str, Any] | None = None
    error: str | None = None


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component checks")
    cache: CacheHealthResponse | None = Field(
        default=None,
        description="Cache health information",
    )


class CacheStatsResponse(BaseModel):
    """Cache statistics response model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    status: str
    data: CacheStatistics


class CacheClearResponse(BaseModel):
    """Cache clear response model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    status: str
    message: str

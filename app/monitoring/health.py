"""
Health checks with dependency validation.

Endpoints built on this module:
- /health/live (Liveness): basic app responsiveness, no external deps
- /health/ready (Readiness): database, cache and disk checks
- /health (Combined): readiness plus cache statistics

Timeouts
--------
- Database: 2 seconds
- Cache: 1 second

Response Format
---------------
{
    "status": "ready" | "not_ready" | "live",
    "timestamp": "2026-01-01T12:00:00+00:00",
    "version": "1.0.0",
    "checks": {
        "database": {"status": "pass", "response_ms": 15},
        "cache": {"status": "pass", "response_ms": 0, "total_keys": 2},
        "disk": {"status": "pass", "usage_percent": 45}
    }
}

Examples
--------
>>> checker = HealthChecker(app)
>>> status = await checker.check_readiness()
>>> if status.is_healthy:
...     print("Service is ready")
"""

from asyncio import wait_for
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from time import perf_counter
from typing import Any

from fastapi import FastAPI
from psutil import disk_usage
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import transaction
from app.errors import BASE_EXCEPTION
from app.managers.cache_manager import CacheManager

HEALTH_CHECK_TIMEOUTS: dict[str, float] = {
    "database": 2.0,
    "cache": 1.0,
}

DISK_WARN_PERCENT = 90
DISK_FAIL_PERCENT = 95


class CheckStatus(StrEnum):
    """Status values for individual health checks."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"


class OverallStatus(StrEnum):
    """Overall health status."""

    READY = "ready"
    NOT_READY = "not_ready"
    LIVE = "live"


@dataclass
class ComponentCheck:
    """
    Result of an individual health check component.

    Attributes
    ----------
    status : CheckStatus
        Status of the check (pass, fail, warn)
    response_ms : int | None
        Response time in milliseconds
    message : str | None
        Optional message or error details
    details : dict[str, Any]
        Additional check-specific details
    """

    status: CheckStatus
    response_ms: int | None = None
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status.value}
        if self.response_ms is not None:
            result["response_ms"] = self.response_ms
        if self.message is not None:
            result["message"] = self.message
        if self.details:
            result.update(self.details)
        return result


@dataclass
class HealthStatus:
    """Complete health status response."""

    status: OverallStatus
    timestamp: str
    version: str
    checks: dict[str, ComponentCheck] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return self.status in (OverallStatus.READY, OverallStatus.LIVE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "version": self.version,
            "checks": {name: check.to_dict() for name, check in self.checks.items()},
        }


def _elapsed_ms(start: float) -> int:
    return int((perf_counter() - start) * 1000)


class HealthChecker:
    """
    Health checker for liveness and readiness probes.

    Examples
    --------
    >>> checker = HealthChecker(app)
    >>> liveness = checker.check_liveness()
    >>> readiness = await checker.check_readiness()
    """

    def __init__(self, app: FastAPI, version: str = "1.0.0") -> None:
        self.app = app
        self.version = version

    def check_liveness(self) -> HealthStatus:
        """Report that the process is up. Touches no dependency."""
        return HealthStatus(
            status=OverallStatus.LIVE,
            timestamp=datetime.now(UTC).isoformat(),
            version=self.version,
        )

    async def check_readiness(self) -> HealthStatus:
        """
        Check every dependency the API needs to serve traffic.

        A failed database or cache check, or a nearly full disk, makes the
        service not ready.
        """
        checks = {
            "database": await self._check_database(),
            "cache": await self._check_cache(),
            "disk": self._check_disk(),
        }
        failed = any(check.status == CheckStatus.FAIL for check in checks.values())

        return HealthStatus(
            status=OverallStatus.NOT_READY if failed else OverallStatus.READY,
            timestamp=datetime.now(UTC).isoformat(),
            version=self.version,
            checks=checks,
        )

    async def _check_database(self) -> ComponentCheck:
        start = perf_counter()
        try:
            async with transaction() as session:
                await wait_for(
                    session.execute(text("SELECT 1")),
                    timeout=HEALTH_CHECK_TIMEOUTS["database"],
                )
            return ComponentCheck(status=CheckStatus.PASS, response_ms=_elapsed_ms(start))
        except TimeoutError:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Database check timed out",
            )
        except (SQLAlchemyError, *BASE_EXCEPTION) as e:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message=f"Database check failed: {e!s}",
            )

    async def _check_cache(self) -> ComponentCheck:
        start = perf_counter()
        cache_manager: CacheManager | None = getattr(self.app.state, "cache_manager", None)
        if cache_manager is None:
            return ComponentCheck(status=CheckStatus.FAIL, message="Cache manager not started")

        try:
            alive = await wait_for(
                cache_manager.ping(),
                timeout=HEALTH_CHECK_TIMEOUTS["cache"],
            )
        except TimeoutError:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Cache check timed out",
            )

        if not alive:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Cache is not accepting requests",
            )

        info = await cache_manager.client.info()
        return ComponentCheck(
            status=CheckStatus.PASS,
            response_ms=_elapsed_ms(start),
            details={"total_keys": info.get("total_keys", 0)},
        )

    def _check_disk(self) -> ComponentCheck:
        try:
            usage_percent = disk_usage("/").percent
        except OSError as e:
            return ComponentCheck(
                status=CheckStatus.WARN,
                message=f"Could not check disk: {e!s}",
            )

        if usage_percent > DISK_FAIL_PERCENT:
            status = CheckStatus.FAIL
        elif usage_percent > DISK_WARN_PERCENT:
            status = CheckStatus.WARN
        else:
            status = CheckStatus.PASS

        return ComponentCheck(status=status, details={"usage_percent": usage_percent})

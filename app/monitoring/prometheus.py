"""
Prometheus metrics collection with cardinality protection.

Custom metrics for the SkillSnap backend:
- HTTP request metrics (handled by prometheus-fastapi-instrumentator)
- Cache hits, misses and invalidations per cache key
- Portfolio write operations per entity
- Rate limit hits per endpoint pattern

Security
--------
- Label values are truncated and path IDs replaced by placeholders
- User IDs, emails and raw paths are NEVER used as labels

Examples
--------
>>> from app.monitoring.prometheus import metrics
>>> metrics.record_cache_hit("skills_all")
"""

from re import IGNORECASE, sub

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from app.configs import settings

MAX_LABEL_VALUE_LENGTH: int = 256

# Latency buckets based on expected latency profile
LATENCY_BUCKETS: tuple[float, ...] = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
)


class MetricsCollector:
    """
    Metrics collector with cardinality protection.

    Attributes
    ----------
    cache_hits_total : Counter
        Cache hits, labelled by logical cache key
    cache_misses_total : Counter
        Cache misses, labelled by logical cache key
    cache_invalidations_total : Counter
        Explicit cache invalidations, labelled by logical cache key
    portfolio_writes_total : Counter
        Committed create/update/delete operations per entity
    rate_limit_hits_total : Counter
        Requests rejected by the rate limiter
    operation_duration_seconds : Histogram
        Handler duration per route, recorded by the ``timed`` decorator
    """

    def __init__(self) -> None:
        self.cache_hits_total = Counter(
            "skillsnap_cache_hits_total",
            "Total number of cache hits",
            ["cache_key"],
        )
        self.cache_misses_total = Counter(
            "skillsnap_cache_misses_total",
            "Total number of cache misses",
            ["cache_key"],
        )
        self.cache_invalidations_total = Counter(
            "skillsnap_cache_invalidations_total",
            "Total number of explicit cache invalidations",
            ["cache_key"],
        )
        self.portfolio_writes_total = Counter(
            "skillsnap_portfolio_writes_total",
            "Total number of committed portfolio writes",
            ["entity", "operation"],  # skill|project|portfolio_user, create|update|delete
        )
        self.rate_limit_hits_total = Counter(
            "skillsnap_rate_limit_hits_total",
            "Total number of rate limit hits",
            ["endpoint"],
        )
        self.operation_duration_seconds = Histogram(
            "skillsnap_operation_duration_seconds",
            "Route handler duration in seconds",
            ["endpoint"],
            buckets=LATENCY_BUCKETS,
        )

    @staticmethod
    def _validate_label_value(value: str) -> str:
        """Truncate label values that exceed the allowed length."""
        if len(value) > MAX_LABEL_VALUE_LENGTH:
            return value[:MAX_LABEL_VALUE_LENGTH]
        return value

    def record_cache_hit(self, cache_key: str) -> None:
        self.cache_hits_total.labels(cache_key=self._validate_label_value(cache_key)).inc()

    def record_cache_miss(self, cache_key: str) -> None:
        self.cache_misses_total.labels(cache_key=self._validate_label_value(cache_key)).inc()

    def record_cache_invalidation(self, cache_key: str) -> None:
        self.cache_invalidations_total.labels(
            cache_key=self._validate_label_value(cache_key),
        ).inc()

    def record_write(self, entity: str, operation: str) -> None:
        """
        Record a committed write.

        Args:
            entity: Entity name (skill, project, portfolio_user).
            operation: create, update or delete.
        """
        self.portfolio_writes_total.labels(entity=entity, operation=operation).inc()

    def observe_operation(self, endpoint: str, duration: float) -> None:
        self.operation_duration_seconds.labels(
            endpoint=self._validate_label_value(endpoint),
        ).observe(duration)

    def record_rate_limit_hit(self, endpoint: str) -> None:
        """
        Record a rate limit hit.

        Args:
            endpoint: The endpoint that was rate limited.

        Examples:
        --------
        >>> metrics.record_rate_limit_hit("/api/skills/12")
        """
        endpoint = self._sanitize_endpoint(endpoint)
        endpoint = self._validate_label_value(endpoint)
        self.rate_limit_hits_total.labels(endpoint=endpoint).inc()

    @staticmethod
    def _sanitize_endpoint(endpoint: str) -> str:
        """
        Replace IDs in a path with placeholders.

        Examples:
        --------
        >>> MetricsCollector._sanitize_endpoint("/api/skills/user/12/by-level")
        '/api/skills/user/{id}/by-level'
        """
        endpoint = sub(
            r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
            "{uuid}",
            endpoint,
            flags=IGNORECASE,
        )
        return sub(r"/\d+", "/{id}", endpoint)


# Process-wide collector; prometheus_client registers metric names globally.
metrics = MetricsCollector()


def setup_prometheus(app: FastAPI) -> Instrumentator:
    """
    Set up Prometheus instrumentation for the FastAPI app.

    The ``/metrics`` endpoint is exposed only when ENABLE_METRICS is set.
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/health.*"],
        inprogress_name="skillsnap_http_requests_inprogress",
        inprogress_labels=True,
    )

    if settings.ENABLE_METRICS:
        instrumentator.instrument(app)
        instrumentator.expose(
            app,
            endpoint="/metrics",
            include_in_schema=False,
            tags=["Monitoring"],
        )

    return instrumentator

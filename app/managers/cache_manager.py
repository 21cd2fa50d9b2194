# app/managers/cache_manager.py
"""Cache manager sitting between the services and a cache client."""

from typing import Any

from app.clients.memory_client import MemoryClient
from app.clients.protocols import CacheClientProtocol
from app.configs import CacheConfig
from app.data import CacheStatistics
from app.errors import (
    BASE_EXCEPTION,
    CacheDeserializationError,
    CacheKeyError,
    CacheSerializationError,
)
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import metrics
from app.utils.cache_serializer import deserialize, serialize

logger = get_logger(__name__)


class CacheManager:
    """
    Cache manager for the hot portfolio lists.

    Features:
        - Key prefixing so entries share one namespace per deployment
        - Absolute and sliding expiry passed through to the client
        - Hit/miss signalling via statistics, Prometheus and logs
        - Idempotent invalidation whose failures propagate to the caller

    One instance is created per application and stored on ``app.state``.
    """

    def __init__(
        self,
        client: CacheClientProtocol | None = None,
        config: CacheConfig | None = None,
    ) -> None:
        self.cache_config = config or CacheConfig()
        self._client: CacheClientProtocol = client or MemoryClient(
            max_entries=self.cache_config.max_entries,
            max_memory_mb=self.cache_config.max_memory_mb,
            cleanup_interval=self.cache_config.cleanup_interval,
        )
        self.statistics = CacheStatistics()

    @property
    def client(self) -> CacheClientProtocol:
        return self._client

    async def initialize(self) -> None:
        """Start the client's background expiry task."""
        if isinstance(self._client, MemoryClient):
            await self._client.start_lifecycle()
        logger.info("Cache manager initialized successfully.")

    async def shutdown(self) -> None:
        await self._client.close()
        logger.info("Cache manager shutdown successfully.")

    def _build_key(self, key: str, namespace: str | None = None) -> str:
        """Build full cache key with prefix and namespace."""
        prefix = self.cache_config.key_prefix
        return f"{prefix}:{namespace}:{key}" if namespace else f"{prefix}:{key}"

    async def get(self, key: str, namespace: str | None = None) -> Any | None:
        """
        Get a decoded value from cache.

        A hit renews the entry's sliding window. Hits and misses are
        counted and logged under the logical key.

        Raises:
            CacheKeyError: If the backend fails or the payload cannot be decoded.
        """
        full_key = self._build_key(key, namespace)
        try:
            logger.debug("Getting from cache: %s", full_key)
            cached_value = await self._client.get(full_key)

            if cached_value is None:
                self.statistics.record_miss()
                metrics.record_cache_miss(key)
                logger.info("Cache MISS", cache_key=key)
                return None

            value = deserialize(cached_value)
        except BASE_EXCEPTION + (CacheDeserializationError,) as e:
            logger.exception("Cache get failed for key: %s", key)
            self.statistics.record_error()
            mssg = f"Cache get failed for key {key}"
            raise CacheKeyError(mssg) from e

        self.statistics.record_hit(len(cached_value.encode("utf-8")))
        metrics.record_cache_hit(key)
        logger.info(
            "Cache HIT",
            cache_key=key,
            count=len(value) if isinstance(value, list) else None,
        )
        return value

    async def set(
        self,
        key: str,
        value: object,
        ttl: int | None = None,
        sliding: int | None = None,
        namespace: str | None = None,
    ) -> bool:
        """
        Serialize and store a value.

        Args:
            key: Logical cache key.
            value: Any value the cache serializer accepts.
            ttl: Absolute lifetime in seconds.
            sliding: Inactivity window in seconds.
            namespace: Optional namespace inserted after the prefix.

        Raises:
            CacheKeyError: If the value cannot be serialized or the backend fails.
        """
        full_key = self._build_key(key, namespace)
        try:
            serialized = serialize(value)
            success = await self._client.set(full_key, serialized, ex=ttl, sliding=sliding)
        except BASE_EXCEPTION + (CacheSerializationError,) as e:
            logger.exception("Cache set failed for key %s", key)
            self.statistics.record_error()
            mssg = f"Cache set failed for key {key}"
            raise CacheKeyError(mssg) from e

        self.statistics.record_set(len(serialized.encode("utf-8")))
        logger.debug("Cached %s (ttl=%s, sliding=%s)", full_key, ttl, sliding)
        return success

    async def delete(self, *keys: str, namespace: str | None = None) -> int:
        """
        Invalidate keys. Absent keys are ignored, so repeated calls are safe.

        Raises:
            CacheKeyError: If the backend fails. Callers must not swallow it.
        """
        full_keys = [self._build_key(key, namespace) for key in keys]
        try:
            deleted_count = await self._client.delete(*full_keys)
        except BASE_EXCEPTION as e:
            logger.exception("Cache delete failed for keys: %s", keys)
            self.statistics.record_error()
            mssg = "Cache delete failed"
            raise CacheKeyError(mssg) from e

        for key in keys:
            metrics.record_cache_invalidation(key)
        if deleted_count:
            self.statistics.record_delete()
        logger.info("Cache invalidated", cache_keys=list(keys), removed=deleted_count)
        return deleted_count

    async def exists(self, *keys: str, namespace: str | None = None) -> int:
        """Count keys that are present and unexpired."""
        try:
            full_keys = [self._build_key(key, namespace) for key in keys]
            return await self._client.exists(*full_keys)
        except BASE_EXCEPTION as e:
            logger.exception("Cache exists check failed for keys: %s", keys)
            self.statistics.record_error()
            mssg = "Cache exists check failed"
            raise CacheKeyError(mssg) from e

    async def ttl(self, key: str, namespace: str | None = None) -> int:
        """Get remaining time to live."""
        try:
            return await self._client.ttl(self._build_key(key, namespace))
        except BASE_EXCEPTION as e:
            logger.exception("Cache ttl check failed for key %s", key)
            self.statistics.record_error()
            mssg = f"Cache ttl check failed for key {key}"
            raise CacheKeyError(mssg) from e

    async def clear(self) -> None:
        """Remove every entry and reset the statistics."""
        try:
            await self._client.flush_all()
        except BASE_EXCEPTION as e:
            logger.exception("Cache clear failed")
            self.statistics.record_error()
            mssg = "Cache clear failed"
            raise CacheKeyError(mssg) from e
        self.statistics.reset()
        logger.info("Cache cleared.")

    async def ping(self) -> bool:
        try:
            return await self._client.ping()
        except BASE_EXCEPTION:
            logger.exception("Cache ping failed")
            return False

    async def health_check(self) -> dict[str, Any]:
        """
        Perform a health check of the cache backend.

        Returns:
            Dictionary with backend, status, statistics and client info.
        """
        result: dict[str, Any] = {
            "backend": "in-memory" if isinstance(self._client, MemoryClient) else "custom",
            "statistics": self.get_statistics(),
        }

        try:
            result["status"] = "healthy" if await self._client.ping() else "unhealthy"
            result["info"] = await self._client.info()
        except BASE_EXCEPTION as e:
            result["status"] = "unhealthy"
            result["error"] = str(e)

        return result

    def get_statistics(self) -> dict[str, int | float | str]:
        """Get cache statistics, folding in client-side evictions."""
        stats = self.statistics.to_dict()
        if isinstance(self._client, MemoryClient):
            stats["evictions"] = int(stats["evictions"]) + self._client.evictions
        return stats

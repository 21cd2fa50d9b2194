"""In-memory cache client with absolute and sliding expiration."""

from asyncio import CancelledError, Lock, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections import OrderedDict
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from sys import getsizeof
from time import monotonic

from app.monitoring.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass(slots=True)
class CacheEntry:
    """
    A stored value and its expiry policy.

    The entry is visible only while ``now < absolute_expiry`` and
    ``now - last_access < sliding_window``. Either bound may be absent.
    """

    value: str
    absolute_expiry: float | None
    sliding_window: float | None
    last_access: float

    def is_expired(self, now: float) -> bool:
        if self.absolute_expiry is not None and now >= self.absolute_expiry:
            return True
        return self.sliding_window is not None and now - self.last_access >= self.sliding_window

    def remaining(self, now: float) -> float | None:
        """Seconds until the entry expires, or None when it never does."""
        bounds: list[float] = []
        if self.absolute_expiry is not None:
            bounds.append(self.absolute_expiry - now)
        if self.sliding_window is not None:
            bounds.append(self.sliding_window - (now - self.last_access))
        return min(bounds) if bounds else None


class MemoryClient:
    """
    An asynchronous in-memory cache client.

    Features:
        - Absolute expiry (``ex``) and sliding expiry (``sliding``) per entry
        - A successful read renews the sliding window
        - Lazy expiry on access plus a background cleanup task
        - Memory and entry-count limits with LRU eviction
        - Operations serialized via asyncio.Lock
        - Injectable clock so expiry can be tested without sleeping
    """

    DEFAULT_MAX_ENTRIES: int = 100_000
    DEFAULT_MAX_MEMORY_MB: int = 100
    DEFAULT_CLEANUP_INTERVAL: int = 60  # seconds
    DEFAULT_CLEANUP_BATCH_SIZE: int = 1000

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_memory_mb: int = DEFAULT_MAX_MEMORY_MB,
        cleanup_interval: int = DEFAULT_CLEANUP_INTERVAL,
        clock: Clock = monotonic,
    ) -> None:
        """
        Initialize the MemoryClient with configurable limits.

        Args:
            max_entries: Maximum number of cache entries before LRU eviction.
            max_memory_mb: Maximum memory usage in megabytes before eviction.
            cleanup_interval: Interval in seconds for background cleanup.
            clock: Source of the current time in seconds.
        """
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self.is_connected: bool = True
        self._cleanup_task: Task[None] | None = None
        self._clock = clock

        self._max_entries = max_entries
        self._max_memory_bytes = max_memory_mb * 1024 * 1024
        self._cleanup_interval = cleanup_interval
        self._cleanup_batch_size = self.DEFAULT_CLEANUP_BATCH_SIZE

        self._current_memory: int = 0
        self.evictions: int = 0

        self._lock = Lock()

    async def start_lifecycle(self) -> None:
        """Start background maintenance tasks."""
        async with self._lock:
            if not self._cleanup_task:
                self.is_connected = True
                self._cleanup_task = create_task(self._cleanup_loop())
                logger.info("MemoryClient active expiration task started.")

    async def _cleanup_loop(self) -> None:
        """Background loop to remove expired keys."""
        while self.is_connected:
            try:
                await asyncio_sleep(self._cleanup_interval)
                await self.purge_expired()
            except CancelledError:
                break
            except Exception:
                logger.exception("Error in memory cleanup loop")

    async def purge_expired(self) -> int:
        """Scan and remove expired keys in batches. Returns the number removed."""
        async with self._lock:
            if not self._cache:
                return 0

            now = self._clock()
            keys = list(self._cache.keys())
            expired_keys: list[str] = []

            for i in range(0, len(keys), self._cleanup_batch_size):
                batch = keys[i : i + self._cleanup_batch_size]
                expired_keys.extend(k for k in batch if self._cache[k].is_expired(now))

            count = self._delete_internal(*expired_keys) if expired_keys else 0
            if count:
                logger.debug("Memory cleanup: removed %d expired keys.", count)
            return count

    def _estimate_entry_size(self, key: str, value: str) -> int:
        """Estimate memory size of a cache entry."""
        return getsizeof(key) + getsizeof(value)

    def _evict_oldest(self) -> None:
        """Evict the least recently used entry (internal, no lock)."""
        if self._cache:
            key, entry = self._cache.popitem(last=False)
            self._current_memory -= self._estimate_entry_size(key, entry.value)
            self.evictions += 1

    def _delete_internal(self, *keys: str) -> int:
        """Delete keys without acquiring lock (internal use only)."""
        count = 0
        for key in keys:
            if key in self._cache:
                entry = self._cache.pop(key)
                self._current_memory -= self._estimate_entry_size(key, entry.value)
                count += 1
        return count

    def _live_entry(self, key: str, now: float) -> CacheEntry | None:
        """Return the entry for key, dropping it first if it has expired (no lock)."""
        entry = self._cache.get(key)
        if entry is None:
            return None
        if entry.is_expired(now):
            self._delete_internal(key)
            return None
        return entry

    async def get(self, key: str) -> str | None:
        """Get a value from the cache and renew its sliding window."""
        async with self._lock:
            now = self._clock()
            entry = self._live_entry(key, now)
            if entry is None:
                return None
            entry.last_access = now
            self._cache.move_to_end(key)
            return entry.value

    async def set(
        self,
        key: str,
        value: str,
        ex: float | None = None,
        sliding: float | None = None,
    ) -> bool:
        """
        Store a value, replacing any previous entry and its expiry policy.

        Args:
            key: Cache key.
            value: Serialized value.
            ex: Seconds until the entry expires regardless of access.
            sliding: Seconds of inactivity after which the entry expires.
        """
        async with self._lock:
            now = self._clock()
            entry_size = self._estimate_entry_size(key, value)

            if key in self._cache:
                self._delete_internal(key)

            while (
                len(self._cache) >= self._max_entries
                or self._current_memory + entry_size > self._max_memory_bytes
            ) and self._cache:
                self._evict_oldest()

            self._cache[key] = CacheEntry(
                value=value,
                absolute_expiry=now + ex if ex else None,
                sliding_window=sliding or None,
                last_access=now,
            )
            self._current_memory += entry_size
            return True

    async def delete(self, *keys: str) -> int:
        """Delete one or more keys from the cache. Absent keys are ignored."""
        async with self._lock:
            return self._delete_internal(*keys)

    async def exists(self, *keys: str) -> int:
        """Count the keys that are present and unexpired, without renewing them."""
        async with self._lock:
            now = self._clock()
            return sum(1 for key in keys if self._live_entry(key, now) is not None)

    async def flush_all(self) -> bool:
        """Clear the entire cache."""
        async with self._lock:
            self._cache.clear()
            self._current_memory = 0
            return True

    async def ping(self) -> bool:
        """Check if the cache is alive."""
        return self.is_connected

    async def info(self) -> dict[str, str | int]:
        """Get information about the in-memory cache."""
        async with self._lock:
            return {
                "server": "In-Memory Cache",
                "used_memory_bytes": self._current_memory,
                "used_memory_human": f"{self._current_memory / 1024 / 1024:.2f}MB",
                "total_keys": len(self._cache),
                "max_entries": self._max_entries,
                "max_memory_mb": self._max_memory_bytes // 1024 // 1024,
                "evictions": self.evictions,
            }

    async def ttl(self, key: str) -> int:
        """
        Get the remaining time to live of a key.

        Returns -2 when the key is absent and -1 when it never expires.
        """
        async with self._lock:
            entry = self._live_entry(key, now := self._clock())
            if entry is None:
                return -2
            remaining = entry.remaining(now)
            return -1 if remaining is None else int(remaining)

    async def close(self) -> None:
        """Stop the client and cleanup tasks."""
        async with self._lock:
            self.is_connected = False
            task = self._cleanup_task
            self._cleanup_task = None
        if task:
            task.cancel()
            with suppress(CancelledError):
                await task

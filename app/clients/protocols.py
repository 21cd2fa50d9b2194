"""Protocol definitions for cache client implementations."""

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheClientProtocol(Protocol):
    """
    Interface a cache backend must provide to sit behind the CacheManager.

    ``set`` accepts both an absolute lifetime (``ex``) and a sliding
    inactivity window (``sliding``). A successful ``get`` renews the
    sliding window of the entry it returns.
    """

    def get(self, key: str) -> Awaitable[str | None]:
        """Get a value from the cache."""
        ...

    def set(
        self,
        key: str,
        value: str,
        ex: float | None = None,
        sliding: float | None = None,
    ) -> Awaitable[bool]:
        """Set a value with optional absolute and sliding expiry."""
        ...

    def delete(self, *keys: str) -> Awaitable[int]:
        """Delete one or more keys from the cache."""
        ...

    def exists(self, *keys: str) -> Awaitable[int]:
        """Count keys present in the cache."""
        ...

    def ttl(self, key: str) -> Awaitable[int]:
        """Get the remaining TTL of a key."""
        ...

    def ping(self) -> Awaitable[bool]:
        """Check if the cache is reachable."""
        ...

    def info(self) -> Awaitable[dict[str, Any]]:
        """Get information about the cache."""
        ...

    def flush_all(self) -> Awaitable[bool]:
        """Clear all entries from the cache."""
        ...

    def close(self) -> Awaitable[None]:
        """Release the backend."""
        ...

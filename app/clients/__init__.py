from app.clients.memory_client import CacheEntry, MemoryClient
from app.clients.protocols import CacheClientProtocol

__all__ = ["CacheClientProtocol", "CacheEntry", "MemoryClient"]

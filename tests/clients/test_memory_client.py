"""Tests for the in-memory cache client."""

import pytest
from conftest import FakeClock

from app.clients.memory_client import CacheEntry, MemoryClient
from app.clients.protocols import CacheClientProtocol


@pytest.mark.asyncio
async def test_set_and_get(memory_client: MemoryClient) -> None:
    """Test setting and getting a value."""
    await memory_client.set("key", "value")
    assert await memory_client.get("key") == "value"


@pytest.mark.asyncio
async def test_get_non_existent(memory_client: MemoryClient) -> None:
    assert await memory_client.get("non_existent_key") is None


@pytest.mark.asyncio
async def test_delete_is_idempotent(memory_client: MemoryClient) -> None:
    """Deleting an absent key is a no-op, and repeating a delete is safe."""
    await memory_client.set("key", "value")
    assert await memory_client.delete("key") == 1
    assert await memory_client.delete("key") == 0
    assert await memory_client.delete("never_set") == 0
    assert await memory_client.get("key") is None


@pytest.mark.asyncio
async def test_set_replaces_value_and_policy(memory_client: MemoryClient, clock: FakeClock) -> None:
    await memory_client.set("key", "old", ex=10)
    await memory_client.set("key", "new")
    clock.advance(60)
    assert await memory_client.get("key") == "new"


@pytest.mark.asyncio
async def test_absolute_expiry(memory_client: MemoryClient, clock: FakeClock) -> None:
    await memory_client.set("key", "value", ex=300)
    clock.advance(299)
    assert await memory_client.get("key") == "value"
    clock.advance(1)
    assert await memory_client.get("key") is None


@pytest.mark.asyncio
async def test_sliding_expiry_without_access(
    memory_client: MemoryClient,
    clock: FakeClock,
) -> None:
    """An entry untouched for the sliding window disappears."""
    await memory_client.set("key", "value", ex=300, sliding=120)
    clock.advance(120)
    assert await memory_client.get("key") is None


@pytest.mark.asyncio
async def test_sliding_expiry_renewed_until_absolute_deadline(
    memory_client: MemoryClient,
    clock: FakeClock,
) -> None:
    """Touching an entry keeps it alive, but never past the absolute deadline."""
    await memory_client.set("key", "value", ex=300, sliding=120)

    for _ in range(4):
        clock.advance(60)
        assert await memory_client.get("key") == "value"

    # t=240; last access at 240, absolute deadline at 300
    clock.advance(59)
    assert await memory_client.get("key") == "value"
    clock.advance(1)
    assert await memory_client.get("key") is None


@pytest.mark.asyncio
async def test_exists_does_not_renew(memory_client: MemoryClient, clock: FakeClock) -> None:
    await memory_client.set("key", "value", sliding=120)
    clock.advance(100)
    assert await memory_client.exists("key") == 1
    clock.advance(20)
    assert await memory_client.exists("key") == 0


@pytest.mark.asyncio
async def test_exists_counts_keys(memory_client: MemoryClient) -> None:
    await memory_client.set("key1", "value1")
    await memory_client.set("key2", "value2")
    assert await memory_client.exists("key1", "key2", "missing") == 2


@pytest.mark.asyncio
async def test_flush_all(memory_client: MemoryClient) -> None:
    await memory_client.set("key1", "value1")
    await memory_client.set("key2", "value2")
    await memory_client.flush_all()
    assert await memory_client.exists("key1", "key2") == 0


@pytest.mark.asyncio
async def test_ttl_values(memory_client: MemoryClient, clock: FakeClock) -> None:
    await memory_client.set("forever", "value")
    await memory_client.set("absolute", "value", ex=300)
    await memory_client.set("both", "value", ex=300, sliding=120)
    clock.advance(30)

    assert await memory_client.ttl("forever") == -1
    assert await memory_client.ttl("absolute") == 270
    assert await memory_client.ttl("both") == 90
    assert await memory_client.ttl("missing") == -2


@pytest.mark.asyncio
async def test_purge_expired(memory_client: MemoryClient, clock: FakeClock) -> None:
    await memory_client.set("short", "value", ex=10)
    await memory_client.set("long", "value", ex=100)
    clock.advance(10)

    assert await memory_client.purge_expired() == 1
    info = await memory_client.info()
    assert info["total_keys"] == 1


@pytest.mark.asyncio
async def test_lru_eviction_on_max_entries(clock: FakeClock) -> None:
    client = MemoryClient(max_entries=2, clock=clock)
    await client.set("a", "1")
    await client.set("b", "2")
    # Reading "a" makes "b" the least recently used entry
    await client.get("a")
    await client.set("c", "3")

    assert await client.get("b") is None
    assert await client.get("a") == "1"
    assert await client.get("c") == "3"
    assert client.evictions == 1


@pytest.mark.asyncio
async def test_lifecycle_start_and_close() -> None:
    client = MemoryClient(cleanup_interval=3600)
    await client.start_lifecycle()
    assert await client.ping() is True
    await client.close()
    assert await client.ping() is False


def test_memory_client_satisfies_protocol(memory_client: MemoryClient) -> None:
    assert isinstance(memory_client, CacheClientProtocol)


def test_cache_entry_remaining() -> None:
    entry = CacheEntry(value="v", absolute_expiry=300.0, sliding_window=120.0, last_access=0.0)
    assert entry.remaining(100.0) == 20.0
    assert entry.is_expired(120.0) is True
    assert CacheEntry("v", None, None, 0.0).remaining(1e9) is None

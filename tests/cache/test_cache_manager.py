"""Tests for cache manager."""

from unittest.mock import AsyncMock

import pytest
from conftest import FakeClock

from app.errors import CacheKeyError
from app.managers.cache_manager import CacheManager
from app.schemas import SkillResponse


@pytest.mark.asyncio
async def test_cache_set_and_get(cache_manager: CacheManager) -> None:
    """Test cache set and get operations."""
    test_value = {"name": "test", "value": 123}

    assert await cache_manager.set("test_key", test_value, ttl=600) is True
    assert await cache_manager.get("test_key") == test_value


@pytest.mark.asyncio
async def test_cache_keys_are_prefixed(cache_manager: CacheManager) -> None:
    await cache_manager.set("skills_all", [])
    assert await cache_manager.client.get("skillsnap:skills_all") == "[]"


@pytest.mark.asyncio
async def test_models_stored_by_alias(cache_manager: CacheManager) -> None:
    skills = (SkillResponse(id=1, name="Go", level="Advanced", portfolio_user_id=1),)
    await cache_manager.set("skills_all", skills)

    cached = await cache_manager.get("skills_all")
    assert cached == [{"id": 1, "name": "Go", "level": "Advanced", "portfolioUserId": 1}]


@pytest.mark.asyncio
async def test_cache_delete_is_idempotent(cache_manager: CacheManager) -> None:
    await cache_manager.set("test_key", {"data": "test"})
    assert await cache_manager.delete("test_key") == 1
    assert await cache_manager.delete("test_key") == 0
    assert await cache_manager.get("test_key") is None


@pytest.mark.asyncio
async def test_cache_exists(cache_manager: CacheManager) -> None:
    assert await cache_manager.exists("test_key") == 0
    await cache_manager.set("test_key", {"data": "test"})
    assert await cache_manager.exists("test_key") == 1


@pytest.mark.asyncio
async def test_cache_with_namespace(cache_manager: CacheManager) -> None:
    await cache_manager.set("key", {"data": "test"}, namespace="ns")
    assert await cache_manager.get("key", namespace="ns") == {"data": "test"}
    assert await cache_manager.get("key", namespace="other") is None


@pytest.mark.asyncio
async def test_sliding_and_absolute_passed_through(
    cache_manager: CacheManager,
    clock: FakeClock,
) -> None:
    await cache_manager.set("skills_all", [], ttl=300, sliding=120)
    clock.advance(100)
    assert await cache_manager.ttl("skills_all") == 20
    assert await cache_manager.get("skills_all") == []
    assert await cache_manager.ttl("skills_all") == 120

    clock.advance(120)
    assert await cache_manager.get("skills_all") is None


@pytest.mark.asyncio
async def test_cache_statistics(cache_manager: CacheManager) -> None:
    await cache_manager.set("key1", "value1")
    await cache_manager.get("key1")
    await cache_manager.get("key2")

    stats = cache_manager.get_statistics()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["sets"] == 1
    assert stats["hit_rate"] == "50.00%"


@pytest.mark.asyncio
async def test_clear_resets_entries_and_statistics(cache_manager: CacheManager) -> None:
    await cache_manager.set("key1", "value1")
    await cache_manager.get("key1")
    await cache_manager.clear()

    assert await cache_manager.exists("key1") == 0
    assert cache_manager.get_statistics()["hits"] == 0


@pytest.mark.asyncio
async def test_get_failure_raises_cache_key_error(cache_manager: CacheManager) -> None:
    cache_manager.client.get = AsyncMock(side_effect=ConnectionError("down"))  # type: ignore[method-assign]
    with pytest.raises(CacheKeyError):
        await cache_manager.get("skills_all")
    assert cache_manager.statistics.errors == 1


@pytest.mark.asyncio
async def test_corrupt_payload_raises_cache_key_error(cache_manager: CacheManager) -> None:
    await cache_manager.client.set("skillsnap:skills_all", "{not json")
    with pytest.raises(CacheKeyError):
        await cache_manager.get("skills_all")


@pytest.mark.asyncio
async def test_delete_failure_propagates(cache_manager: CacheManager) -> None:
    cache_manager.client.delete = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
    with pytest.raises(CacheKeyError):
        await cache_manager.delete("skills_all")


@pytest.mark.asyncio
async def test_health_check(cache_manager: CacheManager) -> None:
    health = await cache_manager.health_check()
    assert health["backend"] == "in-memory"
    assert health["status"] == "healthy"
    assert "total_keys" in health["info"]


@pytest.mark.asyncio
async def test_initialize_and_shutdown() -> None:
    manager = CacheManager()
    await manager.initialize()
    assert await manager.ping() is True
    await manager.shutdown()
    assert await manager.ping() is False


@pytest.mark.asyncio
async def test_set_failure_raises_cache_key_error(cache_manager: CacheManager) -> None:
    cache_manager.client.set = AsyncMock(side_effect=MemoryError())  # type: ignore[method-assign]
    with pytest.raises(CacheKeyError):
        await cache_manager.set("skills_all", [1, 2])
    assert cache_manager.statistics.errors == 1


@pytest.mark.asyncio
async def test_unserializable_value_raises_cache_key_error(cache_manager: CacheManager) -> None:
    with pytest.raises(CacheKeyError):
        await cache_manager.set("skills_all", 2**70)
    assert await cache_manager.exists("skills_all") == 0

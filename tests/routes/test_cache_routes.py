"""HTTP tests for cache administration."""

import pytest
from httpx import AsyncClient

from app.managers.cache_manager import CacheManager
from app.utils.cache_keys import SKILLS_ALL_KEY


@pytest.mark.asyncio
async def test_stats_require_admin(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    assert (await client.get("/api/cache/stats")).status_code == 401
    assert (await client.get("/api/cache/stats", headers=auth_headers)).status_code == 403


@pytest.mark.asyncio
async def test_stats_reflect_hits_and_misses(
    client: AsyncClient,
    admin_auth_headers: dict[str, str],
) -> None:
    await client.get("/api/skills")
    await client.get("/api/skills")

    response = await client.get("/api/cache/stats", headers=admin_auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["misses"] == 1
    assert data["hits"] == 1
    assert data["hit_rate"] == "50.00%"


@pytest.mark.asyncio
async def test_clear(
    client: AsyncClient,
    admin_auth_headers: dict[str, str],
    cache_manager: CacheManager,
) -> None:
    await client.get("/api/skills")

    response = await client.delete("/api/cache", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert await cache_manager.exists(SKILLS_ALL_KEY) == 0

"""HTTP tests for projects, portfolio users and sample data."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from app.managers.cache_manager import CacheManager
from app.utils.cache_keys import PROJECTS_ALL_KEY


@pytest.mark.asyncio
async def test_seed_once(client: AsyncClient) -> None:
    first = await client.post("/api/seeddata")
    assert first.status_code == 200
    assert first.json() == {"message": "Sample data inserted."}

    second = await client.post("/api/seeddata")
    assert second.status_code == 400
    assert second.json()["detail"] == "Sample data already exists."

    users = (await client.get("/api/portfolio-users")).json()
    assert [u["name"] for u in users] == ["Jordan Developer"]

    detail = (await client.get(f"/api/portfolio-users/{users[0]['id']}")).json()
    assert detail["projects"]
    assert detail["skills"]

    skills = (await client.get("/api/skills")).json()
    names = [s["name"] for s in skills]
    assert names == sorted(names)


@pytest.mark.asyncio
async def test_project_crud(
    client: AsyncClient,
    auth_headers: dict[str, str],
    admin_auth_headers: dict[str, str],
    cache_manager: CacheManager,
    add_portfolio_user: Callable[..., Awaitable[int]],
) -> None:
    owner = await add_portfolio_user()
    assert (await client.get("/api/projects")).json() == []

    created = await client.post(
        "/api/projects",
        json={
            "title": "Weather App",
            "description": "Forecasts",
            "imageUrl": "https://example.com/weather.png",
            "gitHubUrl": "https://github.com/example/weather",
            "portfolioUserId": owner,
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    project = created.json()
    assert project["gitHubUrl"] == "https://github.com/example/weather"
    assert await cache_manager.exists(PROJECTS_ALL_KEY) == 0

    listed = (await client.get("/api/projects")).json()
    assert [p["title"] for p in listed] == ["Weather App"]
    by_user = (await client.get(f"/api/projects/user/{owner}")).json()
    assert [p["id"] for p in by_user] == [project["id"]]

    updated = await client.put(
        f"/api/projects/{project['id']}",
        json={**project, "title": "Weather Dashboard"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Weather Dashboard"

    forbidden = await client.delete(f"/api/projects/{project['id']}", headers=auth_headers)
    assert forbidden.status_code == 403

    deleted = await client.delete(f"/api/projects/{project['id']}", headers=admin_auth_headers)
    assert deleted.json() == {"message": "Project 'Weather Dashboard' deleted successfully."}
    assert (await client.get("/api/projects")).json() == []


@pytest.mark.asyncio
async def test_project_for_unknown_owner(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post(
        "/api/projects",
        json={"title": "Orphan", "portfolioUserId": 77},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Portfolio user with ID 77 does not exist."


@pytest.mark.asyncio
async def test_portfolio_user_crud(
    client: AsyncClient,
    auth_headers: dict[str, str],
    admin_auth_headers: dict[str, str],
) -> None:
    created = await client.post(
        "/api/portfolio-users",
        json={"name": "Sam Coder", "bio": "Backend", "profileImageUrl": ""},
        headers=auth_headers,
    )
    assert created.status_code == 201
    user_id = created.json()["id"]

    updated = await client.put(
        f"/api/portfolio-users/{user_id}",
        json={"id": user_id, "name": "Sam Coder", "bio": "Full-stack"},
        headers=auth_headers,
    )
    assert updated.json()["bio"] == "Full-stack"

    assert (await client.delete(f"/api/portfolio-users/{user_id}")).status_code == 401
    deleted = await client.delete(f"/api/portfolio-users/{user_id}", headers=admin_auth_headers)
    assert deleted.status_code == 200
    assert (await client.get(f"/api/portfolio-users/{user_id}")).status_code == 404


@pytest.mark.asyncio
async def test_unreadable_update_without_token_is_401(client: AsyncClient) -> None:
    response = await client.put(
        "/api/portfolio-users/1",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 401

# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so this must happen before the app is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "development"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.clients.memory_client import MemoryClient
from app.configs import ADMIN_ROLE, USER_ROLE
from app.db import build_engine, get_session, init_db
from app.main import app
from app.managers.cache_manager import CacheManager
from app.managers.rate_limiter import limiter
from app.managers.token_manager import create_access_token
from app.models import PortfolioUserDB, SkillDB, UserDB
from app.monitoring.logging import configure_logging


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session", autouse=True)
def _logging() -> None:
    configure_logging()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_client(clock: FakeClock) -> MemoryClient:
    """Memory client driven by the fake clock, without the background task."""
    return MemoryClient(clock=clock)


@pytest.fixture
def cache_manager(memory_client: MemoryClient) -> CacheManager:
    return CacheManager(client=memory_client)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """One in-memory database shared by every session of a test."""
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def add_portfolio_user(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> Callable[..., Awaitable[int]]:
    """Insert a portfolio user directly and return its id."""

    async def _add(name: str = "Jordan Developer") -> int:
        async with session_maker() as db_session:
            user = PortfolioUserDB(name=name, bio="", profile_image_url="")
            db_session.add(user)
            await db_session.commit()
            await db_session.refresh(user)
            assert user.id is not None
            return user.id

    return _add


@pytest.fixture
def add_skill(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> Callable[..., Awaitable[int]]:
    """Insert a skill directly, bypassing the cache, and return its id."""

    async def _add(name: str, level: str, portfolio_user_id: int) -> int:
        async with session_maker() as db_session:
            skill = SkillDB(name=name, level=level, portfolio_user_id=portfolio_user_id)
            db_session.add(skill)
            await db_session.commit()
            await db_session.refresh(skill)
            assert skill.id is not None
            return skill.id

    return _add


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
    cache_manager: CacheManager,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the test database and cache."""

    async def _get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_session] = _get_session
    app.state.cache_manager = cache_manager
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


def _account(email: str, roles: list[str]) -> UserDB:
    return UserDB(
        uuid=uuid4(),
        email=email,
        password_hash="$argon2id$v=19$m=8192,t=1,p=1$somehash",
        first_name="Test",
        last_name="User",
        roles=roles,
    )


@pytest.fixture
def sample_user() -> UserDB:
    return _account("test@example.com", [USER_ROLE])


@pytest.fixture
def admin_user() -> UserDB:
    return _account("admin@example.com", [USER_ROLE, ADMIN_ROLE])


@pytest.fixture
def auth_headers(sample_user: UserDB) -> dict[str, str]:
    """Auth headers for an account with the User role only."""
    return {"Authorization": f"Bearer {create_access_token(sample_user)}"}


@pytest.fixture
def admin_auth_headers(admin_user: UserDB) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}

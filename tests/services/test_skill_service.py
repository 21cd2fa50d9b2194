"""Tests for the skill service: validation order, uniqueness and cache-aside reads."""

from collections.abc import Awaitable, Callable
from unittest.mock import AsyncMock

import pytest
from conftest import FakeClock
from pytest_mock import MockerFixture
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.errors import CacheKeyError, DuplicateEntryError, RecordNotFoundError, ValidationError
from app.managers.cache_manager import CacheManager
from app.models import SkillDB
from app.repositories import PortfolioUserRepository, SkillRepository
from app.schemas import SkillCreate, SkillUpdate
from app.services import SkillService
from app.utils.cache_keys import SKILLS_ALL_KEY


@pytest.fixture
def skill_service(session: AsyncSession, cache_manager: CacheManager) -> SkillService:
    return SkillService(SkillRepository(session), PortfolioUserRepository(session), cache_manager)


@pytest.fixture
async def owners(add_portfolio_user: Callable[..., Awaitable[int]]) -> tuple[int, int]:
    return await add_portfolio_user("Owner One"), await add_portfolio_user("Owner Two")


def _skill(name: str, level: str, owner: int) -> SkillCreate:
    return SkillCreate(name=name, level=level, portfolio_user_id=owner)


class TestCreateSkill:
    @pytest.mark.asyncio
    async def test_created_skill_listed_in_name_order(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
    ) -> None:
        owner, _ = owners
        await skill_service.create_skill(_skill("Python", "Expert", owner))
        created = await skill_service.create_skill(_skill("Go", "Advanced", owner))

        assert created.id is not None
        names = [skill.name for skill in await skill_service.list_all_skills()]
        assert names == ["Go", "Python"]

    @pytest.mark.asyncio
    async def test_duplicate_name_is_case_insensitive_per_owner(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
    ) -> None:
        owner_one, owner_two = owners
        await skill_service.create_skill(_skill("Go", "Advanced", owner_one))

        with pytest.raises(DuplicateEntryError) as exc_info:
            await skill_service.create_skill(_skill("go", "Advanced", owner_one))
        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "Skill 'go' already exists for this user."

        other = await skill_service.create_skill(_skill("go", "Advanced", owner_two))
        assert other.portfolio_user_id == owner_two

    @pytest.mark.asyncio
    async def test_unknown_level_rejected_and_cache_kept(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
    ) -> None:
        owner, _ = owners
        await skill_service.list_all_skills()
        assert await cache_manager.exists(SKILLS_ALL_KEY) == 1

        with pytest.raises(ValidationError) as exc_info:
            await skill_service.create_skill(_skill("Rust", "Guru", owner))

        assert exc_info.value.status_code == 400
        assert "Beginner, Intermediate, Advanced, Expert" in exc_info.value.detail
        assert await cache_manager.exists(SKILLS_ALL_KEY) == 1

    @pytest.mark.asyncio
    async def test_level_checked_before_owner(self, skill_service: SkillService) -> None:
        with pytest.raises(ValidationError, match="Skill level must be one of"):
            await skill_service.create_skill(_skill("Rust", "Guru", 999))

    @pytest.mark.asyncio
    async def test_unknown_owner_rejected(self, skill_service: SkillService) -> None:
        with pytest.raises(ValidationError, match="Portfolio user with ID 999 does not exist."):
            await skill_service.create_skill(_skill("Rust", "Beginner", 999))


class TestCacheAside:
    @pytest.mark.asyncio
    async def test_miss_then_hit_then_invalidated_by_create(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
        mocker: MockerFixture,
    ) -> None:
        owner, _ = owners
        await add_skill("Python", "Expert", owner)
        list_all = mocker.spy(skill_service.skill_repo, "list_all")

        first = await skill_service.list_all_skills()
        second = await skill_service.list_all_skills()

        assert first == second
        assert list_all.call_count == 1
        stats = cache_manager.get_statistics()
        assert (stats["misses"], stats["hits"]) == (1, 1)

        await skill_service.create_skill(_skill("Go", "Advanced", owner))
        assert await cache_manager.exists(SKILLS_ALL_KEY) == 0

        third = await skill_service.list_all_skills()
        assert list_all.call_count == 2
        assert [skill.name for skill in third] == ["Go", "Python"]

    @pytest.mark.asyncio
    async def test_stale_entry_bounded_by_sliding_window(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
        clock: FakeClock,
    ) -> None:
        owner, _ = owners
        assert await skill_service.list_all_skills() == ()

        # Written behind the service's back, so no invalidation happens
        await add_skill("Python", "Expert", owner)
        assert await skill_service.list_all_skills() == ()

        clock.advance(120)
        assert [s.name for s in await skill_service.list_all_skills()] == ["Python"]

    @pytest.mark.asyncio
    async def test_cached_snapshot_cannot_be_mutated(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, _ = owners
        await add_skill("Python", "Expert", owner)
        await skill_service.list_all_skills()

        first = await skill_service.list_all_skills()
        second = await skill_service.list_all_skills()
        assert first is not second
        with pytest.raises(Exception):  # noqa: B017, PT011
            first[0].name = "Changed"  # type: ignore[misc]

    @pytest.mark.asyncio
    async def test_unreadable_cache_falls_back_to_database(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, _ = owners
        await add_skill("Python", "Expert", owner)
        cache_manager.get = AsyncMock(side_effect=CacheKeyError("down"))  # type: ignore[method-assign]

        skills = await skill_service.list_all_skills()
        assert [s.name for s in skills] == ["Python"]

    @pytest.mark.asyncio
    async def test_list_served_when_cache_store_fails(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, _ = owners
        await add_skill("Python", "Expert", owner)
        cache_manager.set = AsyncMock(side_effect=CacheKeyError("down"))  # type: ignore[method-assign]

        skills = await skill_service.list_all_skills()

        assert [s.name for s in skills] == ["Python"]
        assert await cache_manager.exists(SKILLS_ALL_KEY) == 0

    @pytest.mark.asyncio
    async def test_failed_invalidation_propagates_after_commit(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, _ = owners
        cache_manager.delete = AsyncMock(side_effect=CacheKeyError("down"))  # type: ignore[method-assign]

        with pytest.raises(CacheKeyError):
            await skill_service.create_skill(_skill("Go", "Advanced", owner))

        # The write was committed before invalidation was attempted
        assert await skill_service.skill_repo.name_taken("go", owner)


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_checks_id_mismatch_first(self, skill_service: SkillService) -> None:
        data = SkillUpdate(id=2, name="Go", level="Guru", portfolio_user_id=1)
        with pytest.raises(ValidationError, match="Skill ID mismatch."):
            await skill_service.update_skill(1, data)

    @pytest.mark.asyncio
    async def test_update_missing_skill(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
    ) -> None:
        data = SkillUpdate(id=42, name="Go", level="Expert", portfolio_user_id=owners[0])
        with pytest.raises(RecordNotFoundError, match="Skill with ID 42 not found."):
            await skill_service.update_skill(42, data)

    @pytest.mark.asyncio
    async def test_update_may_keep_own_name(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
    ) -> None:
        owner, _ = owners
        created = await skill_service.create_skill(_skill("Go", "Advanced", owner))
        data = SkillUpdate(id=created.id, name="GO", level="Expert", portfolio_user_id=owner)

        updated = await skill_service.update_skill(created.id, data)
        assert (updated.name, updated.level) == ("GO", "Expert")

    @pytest.mark.asyncio
    async def test_update_to_taken_name_conflicts(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
    ) -> None:
        owner, _ = owners
        await skill_service.create_skill(_skill("Go", "Advanced", owner))
        rust = await skill_service.create_skill(_skill("Rust", "Beginner", owner))
        data = SkillUpdate(id=rust.id, name="go", level="Beginner", portfolio_user_id=owner)

        with pytest.raises(DuplicateEntryError):
            await skill_service.update_skill(rust.id, data)

    @pytest.mark.asyncio
    async def test_delete_invalidates(
        self,
        skill_service: SkillService,
        cache_manager: CacheManager,
        owners: tuple[int, int],
    ) -> None:
        created = await skill_service.create_skill(_skill("Go", "Advanced", owners[0]))
        await skill_service.list_all_skills()

        result = await skill_service.delete_skill(created.id)

        assert result.message == "Skill 'Go' deleted successfully."
        assert await cache_manager.exists(SKILLS_ALL_KEY) == 0
        assert await skill_service.list_all_skills() == ()


class TestPerUserQueries:
    @pytest.mark.asyncio
    async def test_group_by_level(
        self,
        skill_service: SkillService,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, other = owners
        await add_skill("Python", "Expert", owner)
        await add_skill("Docker", "Intermediate", owner)
        await add_skill("C#", "Expert", owner)
        await add_skill("Haskell", "Beginner", other)

        groups = await skill_service.group_skills_by_level(owner)

        assert [(g.level, g.count) for g in groups] == [("Intermediate", 1), ("Expert", 2)]
        assert [s.name for s in groups[1].skills] == ["C#", "Python"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, skill_service: SkillService) -> None:
        with pytest.raises(RecordNotFoundError, match="Portfolio user with ID 7 not found."):
            await skill_service.list_skills_by_user(7)


class TestUniqueNameIndex:
    @pytest.mark.asyncio
    async def test_schema_rejects_case_variant_for_same_owner(
        self,
        session_maker: async_sessionmaker[SQLModelAsyncSession],
        owners: tuple[int, int],
    ) -> None:
        owner, _ = owners
        async with session_maker() as db_session:
            db_session.add(SkillDB(name="Go", level="Advanced", portfolio_user_id=owner))
            await db_session.commit()

            db_session.add(SkillDB(name="go", level="Beginner", portfolio_user_id=owner))
            with pytest.raises(IntegrityError, match="ux_skills_owner_lower_name|UNIQUE"):
                await db_session.commit()

    @pytest.mark.asyncio
    async def test_schema_allows_same_name_for_other_owner(
        self,
        session_maker: async_sessionmaker[SQLModelAsyncSession],
        owners: tuple[int, int],
    ) -> None:
        owner_one, owner_two = owners
        async with session_maker() as db_session:
            db_session.add(SkillDB(name="Go", level="Advanced", portfolio_user_id=owner_one))
            db_session.add(SkillDB(name="go", level="Advanced", portfolio_user_id=owner_two))
            await db_session.commit()

    @pytest.mark.asyncio
    async def test_repository_maps_violation_to_duplicate(
        self,
        session: AsyncSession,
        owners: tuple[int, int],
        add_skill: Callable[..., Awaitable[int]],
    ) -> None:
        owner, _ = owners
        await add_skill("Go", "Advanced", owner)

        with pytest.raises(DuplicateEntryError):
            await SkillRepository(session).create(_skill("GO", "Expert", owner))

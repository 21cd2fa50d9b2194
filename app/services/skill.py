"""
Skill service.

Reads of the full list go through the cache (cache-aside under
``skills_all``); every accepted write commits first and then drops that key.
"""

from itertools import groupby

from pydantic import TypeAdapter

from app.configs import SKILL_LEVELS, CacheConfig
from app.errors import CacheKeyError, DuplicateEntryError, RecordNotFoundError, ValidationError
from app.managers.cache_manager import CacheManager
from app.models import SkillDB
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import metrics
from app.repositories import PortfolioUserRepository, SkillRepository
from app.schemas.common import MessageResponse
from app.schemas.skill import SkillCreate, SkillLevelGroup, SkillResponse, SkillUpdate
from app.utils.cache_keys import SKILLS_ALL_KEY

logger = get_logger(__name__)

SkillList = TypeAdapter(tuple[SkillResponse, ...])


def check_level(level: str) -> None:
    """
    Reject levels outside the fixed vocabulary.

    Raises:
        ValidationError: If ``level`` is not a known proficiency level.
    """
    if level not in SKILL_LEVELS:
        raise ValidationError(
            f"Skill level must be one of: {', '.join(SKILL_LEVELS)}",
            errors=[{"field": "level", "message": "Unknown skill level", "input": level}],
        )


class SkillService:
    """Business rules for skills."""

    def __init__(
        self,
        skill_repo: SkillRepository,
        portfolio_user_repo: PortfolioUserRepository,
        cache: CacheManager,
    ) -> None:
        self.skill_repo = skill_repo
        self.portfolio_user_repo = portfolio_user_repo
        self.cache = cache
        self.cache_config: CacheConfig = cache.cache_config

    async def list_all_skills(self) -> tuple[SkillResponse, ...]:
        """
        Return every skill ordered by name, served from cache when possible.

        A miss queries the database and stores the result with an absolute
        and a sliding lifetime. Concurrent misses may each reload the list;
        the last one stored wins.
        """
        try:
            cached = await self.cache.get(SKILLS_ALL_KEY)
        except CacheKeyError:
            logger.warning("Skill cache unreadable, loading from database")
            cached = None

        if cached is not None:
            return SkillList.validate_python(cached)

        skills = tuple(
            SkillResponse.model_validate(skill) for skill in await self.skill_repo.list_all()
        )
        try:
            await self.cache.set(
                SKILLS_ALL_KEY,
                skills,
                ttl=self.cache_config.skills_absolute_ttl,
                sliding=self.cache_config.skills_sliding_ttl,
            )
        except CacheKeyError:
            logger.warning("Skill list not cached, serving database result")
        logger.info("Skill list loaded from database", count=len(skills))
        return skills

    async def get_skill(self, skill_id: int) -> SkillResponse:
        skill = await self._get_or_404(skill_id)
        return SkillResponse.model_validate(skill)

    async def create_skill(self, data: SkillCreate) -> SkillResponse:
        """
        Create a skill.

        Checks run in order and stop at the first failure: level, owner,
        case-insensitive name uniqueness per owner.

        Raises:
            ValidationError: Unknown level or owner.
            DuplicateEntryError: The owner already has a skill with this name.
        """
        check_level(data.level)
        await self.portfolio_user_repo.require_owner(data.portfolio_user_id)
        await self._check_unique_name(data.name, data.portfolio_user_id)

        skill = await self.skill_repo.create(data)
        await self._commit_and_invalidate("create")
        logger.info("Skill created", skill_id=skill.id, portfolio_user_id=skill.portfolio_user_id)
        return SkillResponse.model_validate(skill)

    async def update_skill(self, skill_id: int, data: SkillUpdate) -> SkillResponse:
        """
        Replace a skill's fields.

        Raises:
            ValidationError: Path/body id mismatch, unknown level or owner.
            RecordNotFoundError: No skill with ``skill_id``.
            DuplicateEntryError: Another skill of the owner has this name.
        """
        if data.id != skill_id:
            raise ValidationError("Skill ID mismatch.")
        check_level(data.level)
        skill = await self._get_or_404(skill_id)
        await self.portfolio_user_repo.require_owner(data.portfolio_user_id)
        await self._check_unique_name(data.name, data.portfolio_user_id, exclude_id=skill_id)

        skill = await self.skill_repo.update(skill, data)
        await self._commit_and_invalidate("update")
        logger.info("Skill updated", skill_id=skill_id)
        return SkillResponse.model_validate(skill)

    async def delete_skill(self, skill_id: int) -> MessageResponse:
        skill = await self._get_or_404(skill_id)
        name = skill.name
        await self.skill_repo.delete(skill)
        await self._commit_and_invalidate("delete")
        logger.info("Skill deleted", skill_id=skill_id)
        return MessageResponse(message=f"Skill '{name}' deleted successfully.")

    async def list_skills_by_user(self, portfolio_user_id: int) -> tuple[SkillResponse, ...]:
        await self._require_portfolio_user(portfolio_user_id)
        skills = await self.skill_repo.list_by_owner(portfolio_user_id)
        return tuple(SkillResponse.model_validate(skill) for skill in skills)

    async def group_skills_by_level(self, portfolio_user_id: int) -> list[SkillLevelGroup]:
        """
        Group one portfolio user's skills by level.

        Groups follow proficiency order (Beginner first); levels without
        skills are omitted. Skills inside a group are ordered by name.
        """
        skills = await self.list_skills_by_user(portfolio_user_id)
        rank = {level: index for index, level in enumerate(SKILL_LEVELS)}
        ordered = sorted(skills, key=lambda s: (rank.get(s.level, len(rank)), s.name))
        groups: list[SkillLevelGroup] = []
        for level, members in groupby(ordered, key=lambda s: s.level):
            items = tuple(members)
            groups.append(SkillLevelGroup(level=level, count=len(items), skills=items))
        return groups

    async def _get_or_404(self, skill_id: int) -> SkillDB:
        return await self.skill_repo.get_or_raise(skill_id)

    async def _require_portfolio_user(self, portfolio_user_id: int) -> None:
        if not await self.portfolio_user_repo.exists(portfolio_user_id):
            raise RecordNotFoundError(f"Portfolio user with ID {portfolio_user_id} not found.")

    async def _check_unique_name(
        self,
        name: str,
        portfolio_user_id: int,
        exclude_id: int | None = None,
    ) -> None:
        if await self.skill_repo.name_taken(name, portfolio_user_id, exclude_id=exclude_id):
            raise DuplicateEntryError(f"Skill '{name}' already exists for this user.")

    async def _commit_and_invalidate(self, operation: str) -> None:
        # The cached list must never be dropped before the change is durable
        await self.skill_repo.session.commit()
        metrics.record_write("skill", operation)
        await self.cache.delete(SKILLS_ALL_KEY)

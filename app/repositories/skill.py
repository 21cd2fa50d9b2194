"""Skill repository for database operations."""

from sqlalchemy import func, select

from app.models.skill import SkillDB
from app.repositories.base import BaseRepository
from app.schemas.skill import SkillCreate, SkillUpdate


class SkillRepository(BaseRepository[SkillDB, SkillCreate, SkillUpdate]):
    """Repository for Skill entities."""

    model = SkillDB
    label = "Skill"

    async def list_all(self) -> list[SkillDB]:
        """
        Get every skill ordered by name.

        Ordering is ordinal (case-sensitive code point order) whatever the
        database collation, hence the final in-memory sort.
        """
        result = await self.session.execute(select(SkillDB).order_by(SkillDB.name, SkillDB.id))
        return sorted(result.scalars().all(), key=lambda skill: skill.name)

    async def list_by_owner(self, portfolio_user_id: int) -> list[SkillDB]:
        result = await self.session.execute(
            select(SkillDB)
            .where(SkillDB.portfolio_user_id == portfolio_user_id)
            .order_by(SkillDB.name, SkillDB.id),
        )
        return sorted(result.scalars().all(), key=lambda skill: skill.name)

    async def name_taken(
        self,
        name: str,
        portfolio_user_id: int,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Check whether the owner already has a skill with this name, ignoring case.

        Args:
            name: Candidate skill name
            portfolio_user_id: Owning portfolio user
            exclude_id: Skill to ignore (the one being updated)
        """
        statement = select(1).where(
            func.lower(SkillDB.name) == name.lower(),
            SkillDB.portfolio_user_id == portfolio_user_id,
        )
        if exclude_id is not None:
            statement = statement.where(SkillDB.id != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

"""Project repository for database operations."""

from sqlalchemy import select

from app.models.project import ProjectDB
from app.repositories.base import BaseRepository
from app.schemas.project import ProjectCreate, ProjectUpdate


class ProjectRepository(BaseRepository[ProjectDB, ProjectCreate, ProjectUpdate]):
    """Repository for Project entities."""

    model = ProjectDB
    label = "Project"

    async def list_all(self) -> list[ProjectDB]:
        """Get every project ordered by title (ordinal)."""
        result = await self.session.execute(
            select(ProjectDB).order_by(ProjectDB.title, ProjectDB.id),
        )
        return sorted(result.scalars().all(), key=lambda project: project.title)

    async def list_by_owner(self, portfolio_user_id: int) -> list[ProjectDB]:
        """Get one portfolio user's projects, newest first."""
        result = await self.session.execute(
            select(ProjectDB)
            .where(ProjectDB.portfolio_user_id == portfolio_user_id)
            .order_by(ProjectDB.created_at.desc(), ProjectDB.id.desc()),
        )
        return list(result.scalars().all())

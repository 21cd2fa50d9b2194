"""
Project service.

Same cache-aside policy as skills, under ``projects_all``.
"""

from pydantic import TypeAdapter

from app.errors import CacheKeyError, RecordNotFoundError, ValidationError
from app.managers.cache_manager import CacheManager
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import metrics
from app.repositories import PortfolioUserRepository, ProjectRepository
from app.schemas.common import MessageResponse
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.utils.cache_keys import PROJECTS_ALL_KEY

logger = get_logger(__name__)

ProjectList = TypeAdapter(tuple[ProjectResponse, ...])


class ProjectService:
    """Business rules for projects."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        portfolio_user_repo: PortfolioUserRepository,
        cache: CacheManager,
    ) -> None:
        self.project_repo = project_repo
        self.portfolio_user_repo = portfolio_user_repo
        self.cache = cache

    async def list_all_projects(self) -> tuple[ProjectResponse, ...]:
        """Return every project ordered by title, served from cache when possible."""
        try:
            cached = await self.cache.get(PROJECTS_ALL_KEY)
        except CacheKeyError:
            logger.warning("Project cache unreadable, loading from database")
            cached = None

        if cached is not None:
            return ProjectList.validate_python(cached)

        projects = tuple(
            ProjectResponse.model_validate(project)
            for project in await self.project_repo.list_all()
        )
        try:
            await self.cache.set(
                PROJECTS_ALL_KEY,
                projects,
                ttl=self.cache.cache_config.projects_absolute_ttl,
                sliding=self.cache.cache_config.projects_sliding_ttl,
            )
        except CacheKeyError:
            logger.warning("Project list not cached, serving database result")
        return projects

    async def get_project(self, project_id: int) -> ProjectResponse:
        return ProjectResponse.model_validate(await self.project_repo.get_or_raise(project_id))

    async def create_project(self, data: ProjectCreate) -> ProjectResponse:
        """
        Create a project.

        Raises:
            ValidationError: If the owner does not exist.
        """
        await self.portfolio_user_repo.require_owner(data.portfolio_user_id)
        project = await self.project_repo.create(data)
        await self._commit_and_invalidate("create")
        logger.info("Project created", project_id=project.id)
        return ProjectResponse.model_validate(project)

    async def update_project(self, project_id: int, data: ProjectUpdate) -> ProjectResponse:
        """
        Update a project.

        Raises:
            ValidationError: Path/body id mismatch or unknown owner.
            RecordNotFoundError: No project with ``project_id``.
        """
        if data.id != project_id:
            raise ValidationError("Project ID mismatch.")
        project = await self.project_repo.get_or_raise(project_id)
        await self.portfolio_user_repo.require_owner(data.portfolio_user_id)

        project = await self.project_repo.update(project, data)
        await self._commit_and_invalidate("update")
        logger.info("Project updated", project_id=project_id)
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: int) -> MessageResponse:
        project = await self.project_repo.get_or_raise(project_id)
        title = project.title
        await self.project_repo.delete(project)
        await self._commit_and_invalidate("delete")
        logger.info("Project deleted", project_id=project_id)
        return MessageResponse(message=f"Project '{title}' deleted successfully.")

    async def list_projects_by_user(self, portfolio_user_id: int) -> tuple[ProjectResponse, ...]:
        if not await self.portfolio_user_repo.exists(portfolio_user_id):
            raise RecordNotFoundError(f"Portfolio user with ID {portfolio_user_id} not found.")
        projects = await self.project_repo.list_by_owner(portfolio_user_id)
        return tuple(ProjectResponse.model_validate(project) for project in projects)

    async def _commit_and_invalidate(self, operation: str) -> None:
        await self.project_repo.session.commit()
        metrics.record_write("project", operation)
        await self.cache.delete(PROJECTS_ALL_KEY)

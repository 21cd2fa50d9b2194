"""Portfolio user service."""

from app.errors import ValidationError
from app.managers.cache_manager import CacheManager
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import metrics
from app.repositories import PortfolioUserRepository, ProjectRepository, SkillRepository
from app.schemas.common import MessageResponse
from app.schemas.portfolio_user import (
    PortfolioUserCreate,
    PortfolioUserDetailResponse,
    PortfolioUserResponse,
    PortfolioUserUpdate,
)
from app.schemas.project import ProjectResponse
from app.schemas.skill import SkillResponse
from app.utils.cache_keys import PORTFOLIO_LIST_KEYS

logger = get_logger(__name__)


class PortfolioUserService:
    """
    Business rules for portfolio users.

    Only deletion touches the cache: it cascades to the user's projects and
    skills, so both hot lists are dropped.
    """

    def __init__(
        self,
        portfolio_user_repo: PortfolioUserRepository,
        project_repo: ProjectRepository,
        skill_repo: SkillRepository,
        cache: CacheManager,
    ) -> None:
        self.portfolio_user_repo = portfolio_user_repo
        self.project_repo = project_repo
        self.skill_repo = skill_repo
        self.cache = cache

    async def list_portfolio_users(self) -> list[PortfolioUserResponse]:
        users = await self.portfolio_user_repo.list_all()
        return [PortfolioUserResponse.model_validate(user) for user in users]

    async def get_portfolio_user(self, portfolio_user_id: int) -> PortfolioUserDetailResponse:
        """Get a portfolio user together with their projects and skills."""
        user = await self.portfolio_user_repo.get_or_raise(portfolio_user_id)
        projects = await self.project_repo.list_by_owner(portfolio_user_id)
        skills = await self.skill_repo.list_by_owner(portfolio_user_id)
        return PortfolioUserDetailResponse(
            **PortfolioUserResponse.model_validate(user).model_dump(),
            projects=tuple(ProjectResponse.model_validate(p) for p in projects),
            skills=tuple(SkillResponse.model_validate(s) for s in skills),
        )

    async def create_portfolio_user(self, data: PortfolioUserCreate) -> PortfolioUserResponse:
        user = await self.portfolio_user_repo.create(data)
        await self.portfolio_user_repo.session.commit()
        metrics.record_write("portfolio_user", "create")
        logger.info("Portfolio user created", portfolio_user_id=user.id)
        return PortfolioUserResponse.model_validate(user)

    async def update_portfolio_user(
        self,
        portfolio_user_id: int,
        data: PortfolioUserUpdate,
    ) -> PortfolioUserResponse:
        """
        Update a portfolio user.

        Raises:
            ValidationError: Path/body id mismatch.
            RecordNotFoundError: No portfolio user with this ID.
        """
        if data.id != portfolio_user_id:
            raise ValidationError("Portfolio user ID mismatch.")
        user = await self.portfolio_user_repo.get_or_raise(portfolio_user_id)
        user = await self.portfolio_user_repo.update(user, data)
        await self.portfolio_user_repo.session.commit()
        metrics.record_write("portfolio_user", "update")
        return PortfolioUserResponse.model_validate(user)

    async def delete_portfolio_user(self, portfolio_user_id: int) -> MessageResponse:
        user = await self.portfolio_user_repo.get_or_raise(portfolio_user_id)
        name = user.name
        await self.portfolio_user_repo.delete(user)
        await self.portfolio_user_repo.session.commit()
        metrics.record_write("portfolio_user", "delete")
        await self.cache.delete(*PORTFOLIO_LIST_KEYS)
        logger.info("Portfolio user deleted", portfolio_user_id=portfolio_user_id)
        return MessageResponse(message=f"Portfolio user '{name}' deleted successfully.")

"""Portfolio user repository for database operations."""

from sqlalchemy import select

from app.errors.validation import ValidationError
from app.models.portfolio_user import PortfolioUserDB
from app.repositories.base import BaseRepository
from app.schemas.portfolio_user import PortfolioUserCreate, PortfolioUserUpdate


class PortfolioUserRepository(
    BaseRepository[PortfolioUserDB, PortfolioUserCreate, PortfolioUserUpdate],
):
    """Repository for PortfolioUser entities."""

    model = PortfolioUserDB
    label = "Portfolio user"

    async def list_all(self) -> list[PortfolioUserDB]:
        result = await self.session.execute(
            select(PortfolioUserDB).order_by(PortfolioUserDB.name, PortfolioUserDB.id),
        )
        return list(result.scalars().all())

    async def any_exist(self) -> bool:
        result = await self.session.execute(select(1).select_from(PortfolioUserDB).limit(1))
        return result.scalar_one_or_none() is not None

    async def require_owner(self, portfolio_user_id: int) -> None:
        """
        Check that a referenced owner exists before writing a child row.

        Raises:
            ValidationError: If no portfolio user has this ID.
        """
        if not await self.exists(portfolio_user_id):
            raise ValidationError(
                f"Portfolio user with ID {portfolio_user_id} does not exist.",
                errors=[
                    {
                        "field": "portfolioUserId",
                        "message": "Unknown portfolio user",
                        "input": portfolio_user_id,
                    },
                ],
            )

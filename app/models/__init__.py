"""Database models for the application."""

from app.models.portfolio_user import PortfolioUserDB
from app.models.project import ProjectDB
from app.models.skill import SkillDB
from app.models.user import UserDB

__all__ = ["PortfolioUserDB", "ProjectDB", "SkillDB", "UserDB"]

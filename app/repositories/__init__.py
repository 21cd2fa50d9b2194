"""Repository layer for database operations."""

from app.repositories.base import BaseRepository
from app.repositories.portfolio_user import PortfolioUserRepository
from app.repositories.project import ProjectRepository
from app.repositories.skill import SkillRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PortfolioUserRepository",
    "ProjectRepository",
    "SkillRepository",
    "UserRepository",
]

from app.services.auth import AuthService
from app.services.portfolio_user import PortfolioUserService
from app.services.project import ProjectService
from app.services.seed import SeedService
from app.services.session_state import OperationSample, SessionState
from app.services.skill import SkillService

__all__ = [
    "AuthService",
    "OperationSample",
    "PortfolioUserService",
    "ProjectService",
    "SeedService",
    "SessionState",
    "SkillService",
]

from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    TokenData,
    TokenResponse,
)
from app.schemas.cache import (
    CacheClearResponse,
    CacheHealthResponse,
    CacheStatistics,
    CacheStatsResponse,
    HealthCheckResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.portfolio_user import (
    PortfolioUserCreate,
    PortfolioUserDetailResponse,
    PortfolioUserResponse,
    PortfolioUserUpdate,
)
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.schemas.skill import SkillCreate, SkillLevelGroup, SkillResponse, SkillUpdate

__all__ = [
    "AuthResponse",
    "AuthUser",
    "CacheClearResponse",
    "CacheHealthResponse",
    "CacheStatistics",
    "CacheStatsResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "MessageResponse",
    "PortfolioUserCreate",
    "PortfolioUserDetailResponse",
    "PortfolioUserResponse",
    "PortfolioUserUpdate",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "RegisterRequest",
    "SkillCreate",
    "SkillLevelGroup",
    "SkillResponse",
    "SkillUpdate",
    "TokenData",
    "TokenResponse",
]

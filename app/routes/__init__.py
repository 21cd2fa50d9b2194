from app.routes.auth import router as auth_router
from app.routes.cache import router as cache_router
from app.routes.health import router as health_router
from app.routes.portfolio_user import router as portfolio_user_router
from app.routes.project import router as project_router
from app.routes.seed import router as seed_router
from app.routes.skill import router as skill_router

__all__ = [
    "auth_router",
    "cache_router",
    "health_router",
    "portfolio_user_router",
    "project_router",
    "seed_router",
    "skill_router",
]

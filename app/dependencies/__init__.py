# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    CacheDep,
    PortfolioUserServiceDep,
    ProjectServiceDep,
    SeedServiceDep,
    SessionDep,
    SkillServiceDep,
    get_cache_manager,
)

__all__ = [
    "AuthServiceDep",
    "CacheDep",
    "PortfolioUserServiceDep",
    "ProjectServiceDep",
    "SeedServiceDep",
    "SessionDep",
    "SkillServiceDep",
    "get_cache_manager",
]

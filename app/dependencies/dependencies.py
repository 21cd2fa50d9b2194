# app/dependencies/dependencies.py

"""Application dependencies: sessions, repositories, services and the cache."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.managers.cache_manager import CacheManager
from app.repositories import (
    PortfolioUserRepository,
    ProjectRepository,
    SkillRepository,
    UserRepository,
)
from app.services import (
    AuthService,
    PortfolioUserService,
    ProjectService,
    SeedService,
    SkillService,
)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_cache_manager(request: Request) -> CacheManager:
    """Dependency to get the cache manager created by the lifespan handler."""
    return request.app.state.cache_manager


CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


def get_portfolio_user_repository(session: SessionDep) -> PortfolioUserRepository:
    return PortfolioUserRepository(session)


def get_project_repository(session: SessionDep) -> ProjectRepository:
    return ProjectRepository(session)


def get_skill_repository(session: SessionDep) -> SkillRepository:
    return SkillRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PortfolioUserRepoDep = Annotated[PortfolioUserRepository, Depends(get_portfolio_user_repository)]
ProjectRepoDep = Annotated[ProjectRepository, Depends(get_project_repository)]
SkillRepoDep = Annotated[SkillRepository, Depends(get_skill_repository)]


def get_auth_service(repo: UserRepoDep) -> AuthService:
    return AuthService(repo)


def get_skill_service(
    skill_repo: SkillRepoDep,
    portfolio_user_repo: PortfolioUserRepoDep,
    cache: CacheDep,
) -> SkillService:
    """
    Resolve the `SkillService` dependency.

    Both repositories share the request's session, so the service's commit
    covers every change made through either of them.
    """
    return SkillService(skill_repo, portfolio_user_repo, cache)


def get_project_service(
    project_repo: ProjectRepoDep,
    portfolio_user_repo: PortfolioUserRepoDep,
    cache: CacheDep,
) -> ProjectService:
    return ProjectService(project_repo, portfolio_user_repo, cache)


def get_portfolio_user_service(
    portfolio_user_repo: PortfolioUserRepoDep,
    project_repo: ProjectRepoDep,
    skill_repo: SkillRepoDep,
    cache: CacheDep,
) -> PortfolioUserService:
    return PortfolioUserService(portfolio_user_repo, project_repo, skill_repo, cache)


def get_seed_service(portfolio_user_repo: PortfolioUserRepoDep, cache: CacheDep) -> SeedService:
    return SeedService(portfolio_user_repo, cache)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SkillServiceDep = Annotated[SkillService, Depends(get_skill_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
PortfolioUserServiceDep = Annotated[PortfolioUserService, Depends(get_portfolio_user_service)]
SeedServiceDep = Annotated[SeedService, Depends(get_seed_service)]

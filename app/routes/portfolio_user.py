# app/routes/portfolio_user.py

"""Portfolio user routes."""

from typing import Annotated

from fastapi import APIRouter, Path, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminIdentityDep, CurrentIdentityDep
from app.decorators import timed
from app.dependencies import PortfolioUserServiceDep
from app.managers.rate_limiter import limiter
from app.schemas import (
    MessageResponse,
    PortfolioUserCreate,
    PortfolioUserDetailResponse,
    PortfolioUserResponse,
    PortfolioUserUpdate,
)

router = APIRouter(prefix="/portfolio-users", tags=["👤 Portfolio Users"])

PortfolioUserId = Annotated[int, Path(ge=1, description="Portfolio user ID")]


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[PortfolioUserResponse],
    summary="List portfolio users",
    operation_id="portfolio_users_list",
)
@timed("/portfolio-users")
@limiter.limit("60/minute")
async def list_portfolio_users(
    request: Request,
    service: PortfolioUserServiceDep,
) -> list[PortfolioUserResponse]:
    return await service.list_portfolio_users()


@router.get(
    "/{portfolio_user_id}",
    response_class=ORJSONResponse,
    response_model=PortfolioUserDetailResponse,
    summary="Get a portfolio user with projects and skills",
    responses={404: {"description": "Portfolio user not found"}},
    operation_id="portfolio_users_get",
)
@timed("/portfolio-users/{portfolio_user_id}")
@limiter.limit("60/minute")
async def get_portfolio_user(
    request: Request,
    portfolio_user_id: PortfolioUserId,
    service: PortfolioUserServiceDep,
) -> PortfolioUserDetailResponse:
    return await service.get_portfolio_user(portfolio_user_id)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PortfolioUserResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a portfolio user",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Missing, invalid or expired token"},
    },
    operation_id="portfolio_users_create",
)
@timed("/portfolio-users/create")
@limiter.limit("20/minute")
async def create_portfolio_user(
    request: Request,
    identity: CurrentIdentityDep,
    service: PortfolioUserServiceDep,
    portfolio_user: PortfolioUserCreate,
) -> PortfolioUserResponse:
    return await service.create_portfolio_user(portfolio_user)


@router.put(
    "/{portfolio_user_id}",
    response_class=ORJSONResponse,
    response_model=PortfolioUserResponse,
    summary="Update a portfolio user",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Missing, invalid or expired token"},
        404: {"description": "Portfolio user not found"},
    },
    operation_id="portfolio_users_update",
)
@timed("/portfolio-users/update")
@limiter.limit("20/minute")
async def update_portfolio_user(
    request: Request,
    identity: CurrentIdentityDep,
    portfolio_user_id: PortfolioUserId,
    service: PortfolioUserServiceDep,
    portfolio_user: PortfolioUserUpdate,
) -> PortfolioUserResponse:
    return await service.update_portfolio_user(portfolio_user_id, portfolio_user)


@router.delete(
    "/{portfolio_user_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a portfolio user",
    description="Requires the Admin role. The user's projects and skills are deleted with it.",
    responses={
        401: {"description": "Missing, invalid or expired token"},
        403: {"description": "Admin role required"},
        404: {"description": "Portfolio user not found"},
    },
    operation_id="portfolio_users_delete",
)
@timed("/portfolio-users/delete")
@limiter.limit("10/minute")
async def delete_portfolio_user(
    request: Request,
    identity: AdminIdentityDep,
    portfolio_user_id: PortfolioUserId,
    service: PortfolioUserServiceDep,
) -> MessageResponse:
    return await service.delete_portfolio_user(portfolio_user_id)

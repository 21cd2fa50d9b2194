# app/routes/skill.py

"""
Skill Routes.

Summary
-------
Endpoints include:
  - List all skills (cached)
  - Get skill by id
  - Create / update skill (authenticated)
  - Delete skill (Admin)
  - List a portfolio user's skills, flat or grouped by level

Authentication dependencies are declared before the request body, so an
invalid or missing token is reported before body validation runs.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Path, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminIdentityDep, CurrentIdentityDep
from app.decorators import timed
from app.dependencies import SkillServiceDep
from app.managers.rate_limiter import limiter
from app.schemas import (
    MessageResponse,
    SkillCreate,
    SkillLevelGroup,
    SkillResponse,
    SkillUpdate,
)

router = APIRouter(prefix="/skills", tags=["🛠️ Skills"])

SkillId = Annotated[int, Path(ge=1, description="Skill ID")]
PortfolioUserId = Annotated[int, Path(ge=1, description="Portfolio user ID")]

_ERRORS = {
    400: {
        "description": "Validation failed",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Skill level must be one of: Beginner, Intermediate, Advanced, Expert",
                },
            },
        },
    },
    401: {
        "description": "Missing, invalid or expired token",
        "content": {"application/json": {"example": {"detail": "Could not validate credentials"}}},
    },
    429: {
        "description": "Rate limit exceeded",
        "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[SkillResponse],
    summary="List all skills",
    description="All skills ordered by name. Served from a short-lived cache.",
    operation_id="skills_list",
)
@timed("/skills")
@limiter.limit("120/minute")
async def list_skills(request: Request, service: SkillServiceDep) -> tuple[SkillResponse, ...]:
    return await service.list_all_skills()


@router.get(
    "/user/{user_id}",
    response_class=ORJSONResponse,
    response_model=list[SkillResponse],
    summary="List a portfolio user's skills",
    responses={404: {"description": "Portfolio user not found"}},
    operation_id="skills_by_user",
)
@timed("/skills/user/{user_id}")
@limiter.limit("60/minute")
async def list_skills_by_user(
    request: Request,
    user_id: PortfolioUserId,
    service: SkillServiceDep,
) -> tuple[SkillResponse, ...]:
    return await service.list_skills_by_user(user_id)


@router.get(
    "/user/{user_id}/by-level",
    response_class=ORJSONResponse,
    response_model=list[SkillLevelGroup],
    summary="Group a portfolio user's skills by level",
    description="Groups ordered Beginner to Expert; levels without skills are omitted.",
    responses={404: {"description": "Portfolio user not found"}},
    operation_id="skills_by_level",
)
@timed("/skills/user/{user_id}/by-level")
@limiter.limit("60/minute")
async def group_skills_by_level(
    request: Request,
    user_id: PortfolioUserId,
    service: SkillServiceDep,
) -> list[SkillLevelGroup]:
    return await service.group_skills_by_level(user_id)


@router.get(
    "/{skill_id}",
    response_class=ORJSONResponse,
    response_model=SkillResponse,
    summary="Get a skill",
    responses={404: {"description": "Skill not found"}},
    operation_id="skills_get",
)
@timed("/skills/{skill_id}")
@limiter.limit("120/minute")
async def get_skill(request: Request, skill_id: SkillId, service: SkillServiceDep) -> SkillResponse:
    return await service.get_skill(skill_id)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=SkillResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a skill",
    description=(
        "Checks, in order: body shape, level, owner existence, and that the owner "
        "has no skill with the same name (case-insensitive)."
    ),
    responses={**_ERRORS, 409: {"description": "Skill name already used by this owner"}},
    operation_id="skills_create",
)
@timed("/skills/create")
@limiter.limit("30/minute")
async def create_skill(
    request: Request,
    identity: CurrentIdentityDep,
    service: SkillServiceDep,
    skill: Annotated[
        SkillCreate,
        Body(
            examples=[{"name": "Go", "level": "Advanced", "portfolioUserId": 1}],
        ),
    ],
) -> SkillResponse:
    return await service.create_skill(skill)


@router.put(
    "/{skill_id}",
    response_class=ORJSONResponse,
    response_model=SkillResponse,
    summary="Update a skill",
    responses={
        **_ERRORS,
        404: {"description": "Skill not found"},
        409: {"description": "Skill name already used by this owner"},
    },
    operation_id="skills_update",
)
@timed("/skills/update")
@limiter.limit("30/minute")
async def update_skill(
    request: Request,
    identity: CurrentIdentityDep,
    skill_id: SkillId,
    service: SkillServiceDep,
    skill: Annotated[
        SkillUpdate,
        Body(
            examples=[{"id": 1, "name": "Go", "level": "Expert", "portfolioUserId": 1}],
        ),
    ],
) -> SkillResponse:
    return await service.update_skill(skill_id, skill)


@router.delete(
    "/{skill_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a skill",
    description="Requires the Admin role.",
    responses={
        401: _ERRORS[401],
        403: {"description": "Admin role required"},
        404: {"description": "Skill not found"},
    },
    operation_id="skills_delete",
)
@timed("/skills/delete")
@limiter.limit("30/minute")
async def delete_skill(
    request: Request,
    identity: AdminIdentityDep,
    skill_id: SkillId,
    service: SkillServiceDep,
) -> MessageResponse:
    return await service.delete_skill(skill_id)

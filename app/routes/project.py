# app/routes/project.py

"""Project routes: cached listing, per-user listing and authenticated writes."""

from typing import Annotated

from fastapi import APIRouter, Path, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminIdentityDep, CurrentIdentityDep
from app.decorators import timed
from app.dependencies import ProjectServiceDep
from app.managers.rate_limiter import limiter
from app.schemas import MessageResponse, ProjectCreate, ProjectResponse, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["📁 Projects"])

ProjectId = Annotated[int, Path(ge=1, description="Project ID")]
PortfolioUserId = Annotated[int, Path(ge=1, description="Portfolio user ID")]

_WRITE_ERRORS = {
    400: {"description": "Validation failed or owner does not exist"},
    401: {"description": "Missing, invalid or expired token"},
    429: {"description": "Rate limit exceeded"},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[ProjectResponse],
    summary="List all projects",
    description="All projects ordered by title. Served from a short-lived cache.",
    operation_id="projects_list",
)
@timed("/projects")
@limiter.limit("120/minute")
async def list_projects(
    request: Request,
    service: ProjectServiceDep,
) -> tuple[ProjectResponse, ...]:
    return await service.list_all_projects()


@router.get(
    "/user/{user_id}",
    response_class=ORJSONResponse,
    response_model=list[ProjectResponse],
    summary="List a portfolio user's projects",
    description="Newest first.",
    responses={404: {"description": "Portfolio user not found"}},
    operation_id="projects_by_user",
)
@timed("/projects/user/{user_id}")
@limiter.limit("60/minute")
async def list_projects_by_user(
    request: Request,
    user_id: PortfolioUserId,
    service: ProjectServiceDep,
) -> tuple[ProjectResponse, ...]:
    return await service.list_projects_by_user(user_id)


@router.get(
    "/{project_id}",
    response_class=ORJSONResponse,
    response_model=ProjectResponse,
    summary="Get a project",
    responses={404: {"description": "Project not found"}},
    operation_id="projects_get",
)
@timed("/projects/{project_id}")
@limiter.limit("120/minute")
async def get_project(
    request: Request,
    project_id: ProjectId,
    service: ProjectServiceDep,
) -> ProjectResponse:
    return await service.get_project(project_id)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=ProjectResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a project",
    responses=_WRITE_ERRORS,
    operation_id="projects_create",
)
@timed("/projects/create")
@limiter.limit("30/minute")
async def create_project(
    request: Request,
    identity: CurrentIdentityDep,
    service: ProjectServiceDep,
    project: ProjectCreate,
) -> ProjectResponse:
    return await service.create_project(project)


@router.put(
    "/{project_id}",
    response_class=ORJSONResponse,
    response_model=ProjectResponse,
    summary="Update a project",
    responses={**_WRITE_ERRORS, 404: {"description": "Project not found"}},
    operation_id="projects_update",
)
@timed("/projects/update")
@limiter.limit("30/minute")
async def update_project(
    request: Request,
    identity: CurrentIdentityDep,
    project_id: ProjectId,
    service: ProjectServiceDep,
    project: ProjectUpdate,
) -> ProjectResponse:
    return await service.update_project(project_id, project)


@router.delete(
    "/{project_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a project",
    description="Requires the Admin role.",
    responses={
        401: {"description": "Missing, invalid or expired token"},
        403: {"description": "Admin role required"},
        404: {"description": "Project not found"},
    },
    operation_id="projects_delete",
)
@timed("/projects/delete")
@limiter.limit("30/minute")
async def delete_project(
    request: Request,
    identity: AdminIdentityDep,
    project_id: ProjectId,
    service: ProjectServiceDep,
) -> MessageResponse:
    return await service.delete_project(project_id)

"""Portfolio user schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_BIO_LENGTH, MAX_NAME_LENGTH, MAX_URL_LENGTH
from app.schemas.project import ProjectResponse
from app.schemas.skill import SkillResponse


class PortfolioUserCreate(BaseModel):
    """Portfolio user creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, examples=["Jordan Developer"])
    bio: str = Field(default="", max_length=MAX_BIO_LENGTH)
    profile_image_url: str = Field(default="", max_length=MAX_URL_LENGTH, alias="profileImageUrl")


class PortfolioUserUpdate(PortfolioUserCreate):
    """Portfolio user update model; ``id`` must match the path parameter."""

    id: int = Field(ge=1)


class PortfolioUserResponse(BaseModel):
    """Portfolio user response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)

    id: int
    name: str
    bio: str
    profile_image_url: str = Field(alias="profileImageUrl")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class PortfolioUserDetailResponse(PortfolioUserResponse):
    """Portfolio user with their projects and skills."""

    projects: tuple[ProjectResponse, ...] = ()
    skills: tuple[SkillResponse, ...] = ()

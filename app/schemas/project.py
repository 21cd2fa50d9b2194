"""Project schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TECHNOLOGIES_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)


class ProjectCreate(BaseModel):
    """Project creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH, examples=["SkillSnap"])
    description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)
    image_url: str = Field(default="", max_length=MAX_URL_LENGTH, alias="imageUrl")
    github_url: str | None = Field(default=None, max_length=MAX_URL_LENGTH, alias="gitHubUrl")
    live_demo_url: str | None = Field(
        default=None,
        max_length=MAX_URL_LENGTH,
        alias="liveDemoUrl",
    )
    technologies: str | None = Field(
        default=None,
        max_length=MAX_TECHNOLOGIES_LENGTH,
        examples=["Python, FastAPI, SQLite"],
    )
    portfolio_user_id: int = Field(ge=1, alias="portfolioUserId")


class ProjectUpdate(ProjectCreate):
    """Project update model; ``id`` must match the path parameter."""

    id: int = Field(ge=1)


class ProjectResponse(BaseModel):
    """Project response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)

    id: int
    title: str
    description: str
    image_url: str = Field(alias="imageUrl")
    github_url: str | None = Field(default=None, alias="gitHubUrl")
    live_demo_url: str | None = Field(default=None, alias="liveDemoUrl")
    technologies: str | None = None
    portfolio_user_id: int = Field(alias="portfolioUserId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

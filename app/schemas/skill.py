"""
Skill schemas.

Request bodies use camelCase aliases (``portfolioUserId``) and also accept
field names. Responses are frozen so that cached list snapshots cannot be
modified after they are handed out.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_NAME_LENGTH, MIN_SKILL_NAME_LENGTH


class SkillCreate(BaseModel):
    """Skill creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(
        min_length=MIN_SKILL_NAME_LENGTH,
        max_length=MAX_NAME_LENGTH,
        description="Skill name",
        examples=["Python"],
    )
    level: str = Field(
        min_length=1,
        max_length=20,
        description="One of Beginner, Intermediate, Advanced, Expert",
        examples=["Advanced"],
    )
    portfolio_user_id: int = Field(
        ge=1,
        alias="portfolioUserId",
        description="Owning portfolio user ID",
    )


class SkillUpdate(SkillCreate):
    """Skill update model; ``id`` must match the path parameter."""

    id: int = Field(ge=1, description="Skill ID")


class SkillResponse(BaseModel):
    """Skill response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)

    id: int
    name: str
    level: str
    portfolio_user_id: int = Field(alias="portfolioUserId")


class SkillLevelGroup(BaseModel):
    """Skills of one portfolio user sharing a proficiency level."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    level: str
    count: int
    skills: tuple[SkillResponse, ...]

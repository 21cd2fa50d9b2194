"""Skill database model using SQLModel."""

from typing import cast

from sqlalchemy import Index, Integer, func
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String, col


class SkillDB(SQLModel, table=True):
    """
    Skill database model, owned by a portfolio user.

    ``(lower(name), portfolio_user_id)`` is unique. The write handlers check it
    before inserting; ``ux_skills_owner_lower_name`` enforces it in the schema.
    """

    __tablename__ = cast("declared_attr[str]", "skills")

    __table_args__ = (Index("ix_skills_name_level", "name", "level"),)

    id: int | None = Field(default=None, primary_key=True, description="Skill ID")

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Skill name",
    )
    level: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Proficiency level (Beginner, Intermediate, Advanced, Expert)",
    )

    portfolio_user_id: int = Field(
        sa_column=Column(
            "portfolio_user_id",
            Integer,
            ForeignKey("portfolio_users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Owner (foreign key to portfolio_users.id)",
    )


# Skill names are unique per owner regardless of case
Index(
    "ux_skills_owner_lower_name",
    func.lower(col(SkillDB.name)),
    col(SkillDB.portfolio_user_id),
    unique=True,
)

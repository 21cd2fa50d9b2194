"""Project database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import DateTime, Index, Integer
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class ProjectDB(SQLModel, table=True):
    """Project database model, owned by a portfolio user."""

    __tablename__ = cast("declared_attr[str]", "projects")

    __table_args__ = (Index("ix_projects_created_at", "created_at"),)

    id: int | None = Field(default=None, primary_key=True, description="Project ID")

    title: str = Field(
        sa_column=Column(String(200), nullable=False, index=True),
        description="Project title",
    )
    description: str = Field(
        default="",
        sa_column=Column(String(1000), nullable=False, server_default=""),
        description="Project description",
    )
    image_url: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, server_default=""),
        description="Screenshot or cover image URL",
    )
    github_url: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Source repository URL",
    )
    live_demo_url: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Live demo URL",
    )
    technologies: str | None = Field(
        default=None,
        sa_column=Column(String(200)),
        description="Comma separated technology list",
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

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

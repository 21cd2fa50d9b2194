"""Portfolio user database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class PortfolioUserDB(SQLModel, table=True):
    """
    Portfolio user database model.

    A portfolio user owns projects and skills; deleting one removes both
    through ON DELETE CASCADE foreign keys.
    """

    __tablename__ = cast("declared_attr[str]", "portfolio_users")

    id: int | None = Field(default=None, primary_key=True, description="Portfolio user ID")

    name: str = Field(
        sa_column=Column(String(100), nullable=False, index=True),
        description="Display name",
    )
    bio: str = Field(
        default="",
        sa_column=Column(String(1000), nullable=False, server_default=""),
        description="Short biography",
    )
    profile_image_url: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, server_default=""),
        description="Profile image URL",
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

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Jordan Developer",
                "bio": "Full-stack developer",
                "profile_image_url": "https://example.com/jordan.png",
            },
        },
    )

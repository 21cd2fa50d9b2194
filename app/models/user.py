"""Account database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import USER_ROLE


class UserDB(SQLModel, table=True):
    """
    Account (credential store) database model.

    Accounts sign in with their email address and carry the role names that
    are embedded into the tokens issued for them. They are independent of
    the portfolio users that own projects and skills.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key
    uuid: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Account ID",
    )

    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, used as login name)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Argon2 password hash",
    )
    first_name: str = Field(
        default="",
        sa_column=Column(String(100), nullable=False, server_default=""),
        description="First name",
    )
    last_name: str = Field(
        default="",
        sa_column=Column(String(100), nullable=False, server_default=""),
        description="Last name",
    )
    roles: list[str] = Field(
        default_factory=lambda: [USER_ROLE],
        sa_column=Column(JSON, nullable=False),
        description="Role names granted to the account",
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
        json_schema_extra={
            "example": {
                "uuid": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jordan@example.com",
                "first_name": "Jordan",
                "last_name": "Developer",
                "roles": ["User"],
            },
        },
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

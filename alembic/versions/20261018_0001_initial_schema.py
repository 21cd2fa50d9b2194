"""
Initial schema: accounts, portfolio users, projects and skills.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

- users: accounts with Argon2 password hashes and role lists
- portfolio_users: portfolio owners
- projects / skills: owned by a portfolio user, removed with it
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    op.create_table(
        "users",
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), server_default="", nullable=False),
        sa.Column("last_name", sa.String(length=100), server_default="", nullable=False),
        sa.Column("roles", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "portfolio_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("bio", sa.String(length=1000), server_default="", nullable=False),
        sa.Column("profile_image_url", sa.String(length=500), server_default="", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_portfolio_users_name", "portfolio_users", ["name"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), server_default="", nullable=False),
        sa.Column("image_url", sa.String(length=500), server_default="", nullable=False),
        sa.Column("github_url", sa.String(length=500), nullable=True),
        sa.Column("live_demo_url", sa.String(length=500), nullable=True),
        sa.Column("technologies", sa.String(length=200), nullable=True),
        sa.Column("portfolio_user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["portfolio_user_id"],
            ["portfolio_users.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_title", "projects", ["title"], unique=False)
    op.create_index(
        "ix_projects_portfolio_user_id",
        "projects",
        ["portfolio_user_id"],
        unique=False,
    )
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("level", sa.String(length=20), nullable=False),
        sa.Column("portfolio_user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["portfolio_user_id"],
            ["portfolio_users.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_skills_portfolio_user_id", "skills", ["portfolio_user_id"], unique=False)
    op.create_index("ix_skills_name_level", "skills", ["name", "level"], unique=False)
    # Skill names are unique per owner regardless of case
    op.create_index(
        "ux_skills_owner_lower_name",
        "skills",
        [sa.text("lower(name)"), "portfolio_user_id"],
        unique=True,
    )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    op.drop_index("ux_skills_owner_lower_name", table_name="skills")
    op.drop_index("ix_skills_name_level", table_name="skills")
    op.drop_index("ix_skills_portfolio_user_id", table_name="skills")
    op.drop_table("skills")

    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_index("ix_projects_portfolio_user_id", table_name="projects")
    op.drop_index("ix_projects_title", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_portfolio_users_name", table_name="portfolio_users")
    op.drop_table("portfolio_users")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

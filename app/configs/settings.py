"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the SkillSnap backend application.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_NAME_LENGTH = 100
MAX_BIO_LENGTH = 1000
MAX_URL_LENGTH = 500
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_TECHNOLOGIES_LENGTH = 200
MIN_SKILL_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6

SKILL_LEVELS: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced", "Expert")

ADMIN_ROLE = "Admin"
USER_ROLE = "User"

# Response constants
DEFAULT_ERROR_MESSAGE = "An unexpected server error occurred."


@dataclass(frozen=True)
class Argon2Config:
    """Argon2id cost parameters for one security level."""

    memory_cost: int
    time_cost: int
    parallelism: int


# Argon2id presets keyed by PASSWORD_SECURITY_LEVEL
CONFIG_MAP: dict[str, Argon2Config] = {
    "development": Argon2Config(memory_cost=8 * 1024, time_cost=1, parallelism=1),
    "standard": Argon2Config(memory_cost=64 * 1024, time_cost=3, parallelism=2),
    "high": Argon2Config(memory_cost=256 * 1024, time_cost=4, parallelism=4),
}


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "SkillSnap API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/skillsnap.log"
    FRONTEND_URL: str | None = None
    ENABLE_METRICS: bool = True

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./skillsnap.db"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 1800

    # JWT
    SECRET_KEY: str = "change-me-in-production-this-key-must-be-long-enough"
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "SkillSnap.Api"
    JWT_AUDIENCE: str = "SkillSnap.Client"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    # Accounts registered with these emails are also granted the Admin role
    ADMIN_EMAILS: list[str] = []

    # Password hashing
    PASSWORD_SECURITY_LEVEL: Literal["development", "standard", "high"] = "standard"

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()


def pool_kwargs() -> dict[str, Any]:
    """
    Build engine pool arguments for the configured database.

    SQLite connections are file handles, so pool sizing only applies to
    server databases.
    """
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
    }


class CacheConfig(BaseSettings):
    """Cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_", case_sensitive=False)

    key_prefix: str = "skillsnap"
    # Hot list entries: absolute deadline and inactivity window, in seconds
    skills_absolute_ttl: int = 300
    skills_sliding_ttl: int = 120
    projects_absolute_ttl: int = 300
    projects_sliding_ttl: int = 120
    max_entries: int = 10_000
    max_memory_mb: int = 64
    cleanup_interval: int = 60
    enable_statistics: bool = True


class LimiterConfig(BaseSettings):
    """Rate limiter configuration passed straight to slowapi's Limiter."""

    model_config = SettingsConfigDict(env_prefix="LIMITER_", case_sensitive=False)

    default_limits: list[str] = ["200/minute"]
    storage_uri: str = "memory://"
    strategy: str = "fixed-window"
    key_prefix: str = "skillsnap"
    headers_enabled: bool = False
    enabled: bool = True

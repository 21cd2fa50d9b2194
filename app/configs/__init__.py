from app.configs.settings import (
    ADMIN_ROLE,
    CONFIG_MAP,
    DEFAULT_ERROR_MESSAGE,
    SKILL_LEVELS,
    USER_ROLE,
    CacheConfig,
    LimiterConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "ADMIN_ROLE",
    "CONFIG_MAP",
    "DEFAULT_ERROR_MESSAGE",
    "SKILL_LEVELS",
    "USER_ROLE",
    "CacheConfig",
    "LimiterConfig",
    "pool_kwargs",
    "settings",
]

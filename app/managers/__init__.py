from app.managers.cache_manager import CacheManager
from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler

__all__ = ["CacheManager", "limiter", "rate_limit_exceeded_handler"]

from collections.abc import Awaitable, Callable
from functools import wraps
from time import perf_counter
from typing import ParamSpec, TypeVar

from app.monitoring.prometheus import MetricsCollector
from app.monitoring.prometheus import metrics as default_metrics

P = ParamSpec("P")
R = TypeVar("R")


def timed(
    endpoint: str | None = None,
    metrics: MetricsCollector | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Time async functions and record the duration, failures included.

    Args:
        endpoint: Label for the operation (defaults to function name).
        metrics: Optional collector (defaults to the process-wide one).

    Example:
        @timed("/skills")
        async def list_skills() -> list[SkillResponse]:
            ...
    """
    collector = metrics or default_metrics

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        ep = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                collector.observe_operation(ep, perf_counter() - start)

        return wrapper

    return decorator

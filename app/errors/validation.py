"""Validation errors and request validation handling."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring.logging import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

SECRET_FIELDS: frozenset[str] = frozenset({"password"})


class ValidationError(BaseAppError):
    """Raised when input fails a business rule checked before any write."""

    def __init__(
        self,
        detail: str = "Validation Error",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


validation_error_handler = create_exception_handler(logger)


def _format_error(error: dict[str, Any]) -> dict[str, Any]:
    # Skip the 'body'/'path'/'query' location prefix
    field = ".".join(str(loc) for loc in error.get("loc", [])[1:])
    formatted: dict[str, Any] = {
        "field": field,
        "message": error.get("msg", "Invalid value"),
        "type": error.get("type", "validation_error"),
    }
    if "input" in error and field not in SECRET_FIELDS:
        formatted["input"] = error["input"]
    if "ctx" in error:
        formatted["context"] = {
            key: str(value) if isinstance(value, Exception) else value
            for key, value in error["ctx"].items()
        }
    return formatted


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic request validation errors with a cleaner response format.

    Malformed input is reported as 400 Bad Request.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = [_format_error(error) for error in exec_error.errors()]

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: "
        f"{[e['field'] for e in formatted_errors]}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )

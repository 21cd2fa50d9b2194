"""Tests for application errors and their handlers."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError

from app.errors import (
    BaseAppError,
    CacheKeyError,
    ValidationError,
    create_exception_handler,
    validation_exception_handler,
)
from app.monitoring.logging import get_logger


def _request(path: str = "/api/skills") -> MagicMock:
    request = MagicMock()
    request.client.host = "127.0.0.1"
    request.url.path = path
    return request


class TestBaseAppError:
    def test_defaults(self) -> None:
        error = BaseAppError()
        assert error.status_code == 500
        assert str(error) == "Internal Server Error"

    def test_validation_error_is_400(self) -> None:
        error = ValidationError("Bad level")
        assert error.status_code == 400
        assert error.errors == []


@pytest.mark.asyncio
async def test_client_error_keeps_detail_and_extras() -> None:
    handler = create_exception_handler(get_logger("test"))
    exc = ValidationError("Bad level", errors=[{"field": "level"}])

    response = await handler(_request(), exc)

    assert response.status_code == 400
    assert orjson.loads(response.body) == {
        "detail": "Bad level",
        "errors": [{"field": "level"}],
    }


@pytest.mark.asyncio
async def test_server_error_hides_detail() -> None:
    handler = create_exception_handler(get_logger("test"))

    response = await handler(_request(), CacheKeyError("Cache delete failed"))

    assert response.status_code == 500
    assert orjson.loads(response.body) == {"detail": "An unexpected server error occurred."}


@pytest.mark.asyncio
async def test_request_validation_handler_hides_passwords() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("body", "password"), "msg": "too short", "type": "value_error", "input": "abc"},
            {"loc": ("body", "level"), "msg": "bad", "type": "value_error", "input": "Guru"},
        ],
    )

    response = await validation_exception_handler(_request(), exc)

    body = orjson.loads(response.body)
    assert response.status_code == 400
    assert body["detail"] == "Validation failed"
    password_error, level_error = body["errors"]
    assert password_error["field"] == "password"
    assert "input" not in password_error
    assert level_error["input"] == "Guru"

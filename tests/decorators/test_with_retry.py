"""Tests for the tenacity-backed retry decorator."""

import pytest

from app.decorators import with_retry
from app.errors import PasswordHashingError


@pytest.mark.asyncio
async def test_retries_until_success() -> None:
    calls = 0

    @with_retry(max_retries=3, base_delay=0.001, max_delay=0.002)
    async def flaky() -> str:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise ConnectionError("temporary")
        return "ok"

    assert await flaky() == "ok"
    assert calls == 3


@pytest.mark.asyncio
async def test_gives_up_and_reraises() -> None:
    calls = 0

    @with_retry(max_retries=2, base_delay=0.001, max_delay=0.002, exec_retry=PasswordHashingError)
    async def always_fails() -> None:
        nonlocal calls
        calls += 1
        raise PasswordHashingError("backend down")

    with pytest.raises(PasswordHashingError):
        await always_fails()
    assert calls == 2


@pytest.mark.asyncio
async def test_other_errors_not_retried() -> None:
    calls = 0

    @with_retry(max_retries=3, base_delay=0.001)
    async def broken() -> None:
        nonlocal calls
        calls += 1
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        await broken()
    assert calls == 1

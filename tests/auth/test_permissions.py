"""Tests for bearer token authorization."""

from datetime import timedelta

import pytest

from app.auth import authorize
from app.errors import InsufficientRoleError, InvalidTokenError
from app.managers.token_manager import create_access_token
from app.models import UserDB


class TestAuthorize:
    def test_missing_token(self) -> None:
        with pytest.raises(InvalidTokenError, match="Not authenticated"):
            authorize(None)

    def test_any_valid_token(self, sample_user: UserDB) -> None:
        identity = authorize(create_access_token(sample_user))
        assert identity.user_id == sample_user.uuid

    def test_required_role_present(self, admin_user: UserDB) -> None:
        identity = authorize(create_access_token(admin_user), required_role="Admin")
        assert identity.has_role("Admin")

    def test_required_role_missing(self, sample_user: UserDB) -> None:
        with pytest.raises(InsufficientRoleError) as exc_info:
            authorize(create_access_token(sample_user), required_role="Admin")
        assert exc_info.value.status_code == 403

    def test_expired_token_fails_before_role_check(self, admin_user: UserDB) -> None:
        token = create_access_token(admin_user, expires_delta=timedelta(seconds=-1))
        with pytest.raises(InvalidTokenError) as exc_info:
            authorize(token, required_role="Admin")
        assert exc_info.value.status_code == 401

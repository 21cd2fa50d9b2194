"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when an email/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.", HTTP_401_UNAUTHORIZED)


class InvalidTokenError(UserAuthenticationError):
    """Raised when a bearer token is missing, malformed, expired or forged."""

    def __init__(self, detail: str = "Could not validate credentials") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class UserNotFoundError(UserAuthenticationError):
    """Raised when a valid token refers to an account that no longer exists."""

    def __init__(self) -> None:
        super().__init__("User not found", HTTP_401_UNAUTHORIZED)


class InsufficientRoleError(UserAuthenticationError):
    """Raised when an authenticated identity lacks the required role."""

    def __init__(self, required_role: str) -> None:
        super().__init__(
            f"Insufficient permissions. Required role: {required_role}",
            HTTP_403_FORBIDDEN,
        )


auth_exception_handler = create_exception_handler(logger)

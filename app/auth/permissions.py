"""Role-based access control for bearer tokens."""

from collections.abc import Awaitable, Callable, Iterator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.dependencies.models import Dependant
from fastapi.responses import ORJSONResponse
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.configs import ADMIN_ROLE
from app.errors import (
    InsufficientRoleError,
    InvalidTokenError,
    UserAuthenticationError,
    auth_exception_handler,
    validation_exception_handler,
)
from app.managers.token_manager import decode_access_token
from app.monitoring.logging import get_logger
from app.schemas.auth import TokenData

logger = get_logger(__name__)

# auto_error=False so a missing header maps to our 401 rather than FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

# Identity dependencies mapped to the role each one demands
_GUARDS: dict[Callable[..., Awaitable[TokenData]], str | None] = {}


def authorize(token: str | None, required_role: str | None = None) -> TokenData:
    """
    Validate a bearer token and optionally enforce a role.

    Args:
        token: Raw JWT, or None when the request carried no credential.
        required_role: Role the identity must hold, if any.

    Returns:
        TokenData: The validated identity.

    Raises:
        InvalidTokenError: If the token is absent or fails validation.
        InsufficientRoleError: If the identity lacks ``required_role``.
    """
    if not token:
        raise InvalidTokenError("Not authenticated")

    identity = decode_access_token(token)

    if required_role is not None and not identity.has_role(required_role):
        logger.warning(
            "Role check failed",
            user_id=str(identity.user_id),
            required_role=required_role,
        )
        raise InsufficientRoleError(required_role)

    return identity


def _credential(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Resolve the identity of any authenticated caller."""
    return authorize(_credential(credentials))


_GUARDS[get_current_identity] = None


def require_role(role: str) -> Callable[..., Awaitable[TokenData]]:
    """
    Create a dependency that requires a specific role.

    Example:
        @router.delete("/{id}")
        async def remove(identity: Annotated[TokenData, Depends(require_role("Admin"))]):
            ...
    """

    async def role_checker(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    ) -> TokenData:
        return authorize(_credential(credentials), required_role=role)

    _GUARDS[role_checker] = role
    return role_checker


require_admin = require_role(ADMIN_ROLE)

# Type aliases for common dependencies
CurrentIdentityDep = Annotated[TokenData, Depends(get_current_identity)]
AdminIdentityDep = Annotated[TokenData, Depends(require_admin)]


def _required_roles(dependant: Dependant) -> Iterator[str | None]:
    for dependency in dependant.dependencies:
        if dependency.call in _GUARDS:
            yield _GUARDS[dependency.call]
        else:
            yield from _required_roles(dependency)


async def authorize_route(request: Request) -> None:
    """
    Run the matched route's identity checks against the raw request.

    Raises:
        InvalidTokenError: If the route needs a token and the request has none
            or a bad one.
        InsufficientRoleError: If the route needs a role the token lacks.
    """
    route = request.scope.get("route")
    if not isinstance(route, APIRoute):
        return
    roles = list(_required_roles(route.dependant))
    if not roles:
        return
    token = _credential(await bearer_scheme(request))
    for role in roles:
        authorize(token, required_role=role)


async def request_validation_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Handle request validation errors on routes that may be protected.

    FastAPI parses the JSON body before it resolves dependencies, so an
    unreadable body would otherwise hide a missing or invalid credential.
    """
    try:
        await authorize_route(request)
    except UserAuthenticationError as e:
        return await auth_exception_handler(request, e)
    return await validation_exception_handler(request, exc)

"""Authentication and authorization module."""

from app.auth.permissions import (
    AdminIdentityDep,
    CurrentIdentityDep,
    authorize,
    authorize_route,
    get_current_identity,
    request_validation_handler,
    require_admin,
    require_role,
)

__all__ = [
    "AdminIdentityDep",
    "CurrentIdentityDep",
    "authorize",
    "authorize_route",
    "get_current_identity",
    "request_validation_handler",
    "require_admin",
    "require_role",
]

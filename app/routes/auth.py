"""Authentication routes for registration, login and token refresh."""

from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import CurrentIdentityDep
from app.decorators import timed
from app.dependencies import AuthServiceDep
from app.managers.rate_limiter import limiter
from app.schemas import AuthResponse, AuthUser, LoginRequest, RegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

_TOKEN_EXAMPLE = {
    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "tokenType": "bearer",
    "user": {
        "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        "email": "jordan@example.com",
        "firstName": "Jordan",
        "lastName": "Developer",
        "roles": ["User"],
    },
}

_RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new account",
    description="Creates an account with the User role and returns a signed-in token.",
    responses={
        201: {"content": {"application/json": {"example": _TOKEN_EXAMPLE}}},
        400: {"description": "Password policy or email format violated"},
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {"detail": "Email 'jordan@example.com' is already taken."},
                },
            },
        },
        429: _RATE_LIMITED,
    },
    operation_id="auth_register",
)
@timed("/auth/register")
@limiter.limit("5/minute")
async def register(
    request: Request,
    service: AuthServiceDep,
    data: Annotated[
        RegisterRequest,
        Body(
            examples=[
                {
                    "email": "jordan@example.com",
                    "password": "Passw0rd",
                    "firstName": "Jordan",
                    "lastName": "Developer",
                },
            ],
        ),
    ],
) -> AuthResponse:
    return await service.register(data)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login for access token",
    description="Authenticate with email and password to obtain an access token.",
    responses={
        200: {"content": {"application/json": {"example": _TOKEN_EXAMPLE}}},
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"detail": "Invalid email or password."}},
            },
        },
        429: _RATE_LIMITED,
    },
    operation_id="auth_login",
)
@timed("/auth/login")
@limiter.limit("10/minute")
async def login(request: Request, service: AuthServiceDep, data: LoginRequest) -> AuthResponse:
    return await service.login(data)


@router.post(
    "/refresh",
    response_class=ORJSONResponse,
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Mint a fresh token for the caller. The old token stays valid until it expires.",
    responses={401: {"description": "Missing, invalid or expired token, or account removed"}},
    operation_id="auth_refresh",
)
@timed("/auth/refresh")
@limiter.limit("10/minute")
async def refresh(
    request: Request,
    identity: CurrentIdentityDep,
    service: AuthServiceDep,
) -> TokenResponse:
    return await service.refresh(identity)


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=AuthUser,
    summary="Current account",
    responses={401: {"description": "Missing, invalid or expired token"}},
    operation_id="auth_me",
)
@timed("/auth/me")
@limiter.limit("30/minute")
async def me(request: Request, identity: CurrentIdentityDep, service: AuthServiceDep) -> AuthUser:
    return await service.me(identity)

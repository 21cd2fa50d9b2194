"""Token manager for issuing and validating JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from app.configs import settings
from app.errors import InvalidTokenError
from app.models import UserDB
from app.monitoring.logging import get_logger
from app.schemas.auth import TokenData

logger = get_logger(__name__)

REQUIRED_CLAIMS: tuple[str, ...] = ("exp", "iat", "iss", "aud", "sub", "jti")


def create_access_token(
    user: UserDB,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for an account.

    Args:
        user: The account the token is issued for.
        expires_delta: Optional lifetime; defaults to ACCESS_TOKEN_EXPIRE_HOURS.

    Returns:
        str: Encoded JWT access token.
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))

    to_encode = {
        "sub": str(user.uuid),
        "email": user.email,
        "name": user.full_name,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "roles": list(user.roles),
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """
    Decode and validate an access token.

    Signature, issuer, audience and expiry are all checked.

    Args:
        token: JWT token string.

    Returns:
        TokenData: The identity carried by the token.

    Raises:
        InvalidTokenError: If the token is malformed, expired, forged,
            issued for another audience or missing a claim.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={f"require_{claim}": True for claim in REQUIRED_CLAIMS},
        )
    except ExpiredSignatureError as e:
        logger.info("Rejected expired token")
        mssg = "Token has expired"
        raise InvalidTokenError(mssg) from e
    except JWTError as e:
        logger.info("Rejected invalid token", reason=str(e))
        raise InvalidTokenError from e

    email = payload.get("email")
    roles = payload.get("roles", [])
    if not isinstance(email, str) or not isinstance(roles, list):
        raise InvalidTokenError

    try:
        user_id = UUID(payload["sub"])
    except (TypeError, ValueError) as e:
        raise InvalidTokenError from e

    return TokenData(
        user_id=user_id,
        email=email,
        name=payload.get("name") or "",
        first_name=payload.get("firstName") or "",
        last_name=payload.get("lastName") or "",
        roles=frozenset(str(role) for role in roles),
        jti=payload["jti"],
    )


def get_token_expiry(token: str) -> datetime | None:
    """
    Extract expiration time from a token without full validation.

    Args:
        token: JWT token string.

    Returns:
        datetime | None: Token expiration time or None if unreadable.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False, "verify_iss": False, "verify_exp": False},
        )
    except JWTError:
        return None
    exp = payload.get("exp")
    return datetime.fromtimestamp(exp, tz=UTC) if exp else None

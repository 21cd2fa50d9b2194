"""Authentication service for account registration and token issuance."""

from app.configs import ADMIN_ROLE, USER_ROLE, settings
from app.errors.auth import InvalidCredentialsError, UserNotFoundError
from app.managers.password_manager import hash_password, verify_and_update_password
from app.managers.token_manager import create_access_token, get_token_expiry
from app.models import UserDB
from app.monitoring.logging import get_logger
from app.repositories import UserRepository
from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    TokenData,
    TokenResponse,
)

logger = get_logger(__name__)


def to_auth_user(user: UserDB) -> AuthUser:
    return AuthUser(
        id=user.uuid,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        roles=list(user.roles),
    )


class AuthService:
    """Service for account registration, login and token refresh."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    def _roles_for(self, email: str) -> list[str]:
        admins = {address.lower() for address in settings.ADMIN_EMAILS}
        return [USER_ROLE, ADMIN_ROLE] if email.lower() in admins else [USER_ROLE]

    def _issue(self, user: UserDB) -> AuthResponse:
        return AuthResponse(token=create_access_token(user), user=to_auth_user(user))

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Register an account and sign it in.

        Raises:
            DuplicateEntryError: If the email is already registered.
        """
        password_hash = await hash_password(data.password.get_secret_value())
        user = await self.user_repo.create_account(
            data,
            password_hash=password_hash,
            roles=self._roles_for(data.email),
        )
        await self.user_repo.session.commit()
        logger.info("Account registered", user_id=str(user.uuid), roles=user.roles)
        return self._issue(user)

    async def login(self, data: LoginRequest) -> AuthResponse:
        """
        Verify credentials and issue a token.

        Unknown emails still pay for a dummy hash verification, so response
        timing does not reveal which addresses are registered.

        Raises:
            InvalidCredentialsError: If the email or password is wrong.
        """
        user = await self.user_repo.get_by_email(data.email)
        is_valid, new_hash = await verify_and_update_password(
            data.password.get_secret_value(),
            user.password_hash if user else None,
        )
        if not user or not is_valid:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError

        if new_hash:
            await self.user_repo.update_password_hash(user, new_hash)
            await self.user_repo.session.commit()

        logger.info("User logged in", user_id=str(user.uuid))
        return self._issue(user)

    async def _current_user(self, identity: TokenData) -> UserDB:
        user = await self.user_repo.get_by_id(identity.user_id)
        if not user:
            raise UserNotFoundError
        return user

    async def refresh(self, identity: TokenData) -> TokenResponse:
        """
        Mint a fresh token for the caller, picking up any role changes.

        Raises:
            UserNotFoundError: If the account was removed after the token was issued.
        """
        user = await self._current_user(identity)
        token = create_access_token(user)
        return TokenResponse(token=token, expires_at=get_token_expiry(token))

    async def me(self, identity: TokenData) -> AuthUser:
        return to_auth_user(await self._current_user(identity))

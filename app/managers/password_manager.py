"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing is CPU bound, so the async helpers run it in a thread pool and
retry transient backend failures with exponential backoff.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import CONFIG_MAP, settings
from app.decorators.with_retry import with_retry
from app.errors import PasswordHashingError
from app.monitoring.logging import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Password hashing and verification with Argon2id.

    Cost parameters come from CONFIG_MAP using PASSWORD_SECURITY_LEVEL, so a
    change of level makes existing hashes report that they need an update.
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        config = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            argon2__memory_cost=config.memory_cost,
            argon2__time_cost=config.time_cost,
            argon2__parallelism=config.parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: If password is empty.
            PasswordHashingError: If the backend fails.
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a plaintext password. A corrupt stored hash never matches."""
        if not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or invalid format")
            return False
        except InternalBackendError as e:
            logger.exception("Password backend failed during verification")
            mssg = "Failed to verify password"
            raise PasswordHashingError(mssg) from e

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a new hash when the stored one is outdated.

        A missing hash still runs a dummy verification so that unknown
        accounts take as long to reject as wrong passwords.

        Returns:
            tuple[bool, str | None]: Match flag and the replacement hash, if any.
        """
        if hashed_password is None:
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        if self.pwd_context.needs_update(hashed_password):
            logger.info(f"Password needs rehashing on level {self.level}")
            return True, self.hash(password)

        return True, None


_default_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    """
    Get the default password hasher instance.

    Example:
        >>> hashed = get_password_hasher().hash("Secret1")
    """
    return _default_hasher


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """Hash a password in the worker pool."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password in the worker pool."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """
    Verify a password and get a new hash if needed.

    Example:
        >>> is_valid, new_hash = await verify_and_update_password("Secret1", stored)
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )

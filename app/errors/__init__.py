from app.errors.auth import (
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from app.errors.base import (
    BASE_EXCEPTION,
    BaseAppError,
    create_exception_handler,
    create_unexpected_exception_handler,
)
from app.errors.cache import (
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
    cache_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from app.errors.validation import (
    ValidationError,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "InsufficientRoleError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "ValidationError",
    "auth_exception_handler",
    "cache_exception_handler",
    "create_exception_handler",
    "create_unexpected_exception_handler",
    "database_exception_handler",
    "password_hashing_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]

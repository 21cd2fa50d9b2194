"""Authentication schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator

from app.configs.settings import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH


class RegisterRequest(BaseModel):
    """Account registration model (request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    email: EmailStr = Field(max_length=255, examples=["jordan@example.com"])
    password: SecretStr = Field(description="At least 6 chars with a digit, a lower and an upper case letter")
    first_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, alias="firstName")
    last_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, alias="lastName")

    @field_validator("password")
    @classmethod
    def validate_password_policy(cls, v: SecretStr) -> SecretStr:
        """Enforce the password policy."""
        password = v.get_secret_value()
        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"Passwords must be at least {MIN_PASSWORD_LENGTH} characters."
            raise ValueError(msg)
        if not any(c.isdigit() for c in password):
            msg = "Passwords must have at least one digit ('0'-'9')."
            raise ValueError(msg)
        if not any(c.islower() for c in password):
            msg = "Passwords must have at least one lowercase ('a'-'z')."
            raise ValueError(msg)
        if not any(c.isupper() for c in password):
            msg = "Passwords must have at least one uppercase ('A'-'Z')."
            raise ValueError(msg)
        return v


class LoginRequest(BaseModel):
    """Login model (request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    email: EmailStr
    password: SecretStr


class AuthUser(BaseModel):
    """Account summary returned alongside a token."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    roles: list[str] = Field(default_factory=list)


class AuthResponse(BaseModel):
    """Token plus the account it was issued for."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field(default="bearer", alias="tokenType")
    user: AuthUser


class TokenData(BaseModel):
    """Identity extracted from a validated access token."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    email: str
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    roles: frozenset[str] = frozenset()
    jti: str

    def has_role(self, role: str) -> bool:
        return role in self.roles


class TokenResponse(BaseModel):
    """Fresh token minted for an already authenticated account."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_at: datetime | None = Field(default=None, alias="expiresAt")

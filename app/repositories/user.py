"""Account repository for database operations."""

from sqlalchemy import func, select

from app.errors.database import DuplicateEntryError
from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.schemas.auth import RegisterRequest
from app.utils.helpers import utc_now


class UserRepository(BaseRepository[UserDB, RegisterRequest, RegisterRequest]):
    """
    Repository for accounts.

    Emails are matched case-insensitively and stored lower-cased.
    """

    model = UserDB
    id_field = "uuid"
    label = "User"

    async def create_account(
        self,
        data: RegisterRequest,
        password_hash: str,
        roles: list[str],
    ) -> UserDB:
        """
        Create a new account.

        Raises:
            DuplicateEntryError: If the email is already registered.
        """
        email = data.email.lower()
        if await self.get_by_email(email):
            raise DuplicateEntryError(detail=f"Email '{email}' is already taken.")

        db_user = UserDB(
            email=email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            roles=roles,
        )
        return await self._add_and_refresh(db_user)

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get account by email.

        Args:
            email: Email to search for, in any case

        Returns:
            UserDB | None: Account if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(func.lower(UserDB.email) == email.lower()),
        )
        return result.scalar_one_or_none()

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        user.password_hash = password_hash
        user.updated_at = utc_now()
        return await self._add_and_refresh(user)

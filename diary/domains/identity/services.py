import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.config import Settings
from diary.core.errors import ValidationFailedError
from diary.core.security import create_access_token
from diary.db.repositories.user_repository import UserRepository
from diary.domains.identity.entities import User
from diary.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Registration, login and password changes"""

    def __init__(self, session: AsyncSession, settings: Settings):
        self.session = session
        self.settings = settings
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        email = user_data.email.lower()
        if await self.user_repository.email_exists(email):
            raise ValidationFailedError(
                [{"field": "email", "message": "Email already registered"}],
                message="Email already registered",
            )

        user = User.create_user(email=email, password=user_data.password, name=user_data.name)
        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.uuid}")
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        user = await self.user_repository.get_by_email(login_data.email.lower())

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[tuple]:
        """Return (token, user) or None on bad credentials"""
        user = await self.authenticate_user(login_data)

        if not user:
            return None

        token = create_access_token({"sub": str(user.uuid)}, self.settings)
        return token, user

    async def change_user_password(self, user: User, current_password: str, new_password: str) -> None:
        if not user.authenticate(current_password):
            raise ValidationFailedError(
                [{"field": "currentPassword", "message": "Current password is incorrect"}],
                message="Current password is incorrect",
            )

        user.change_password(new_password)
        await self.user_repository.update(user)
        logger.info(f"Password changed for user {user.uuid}")

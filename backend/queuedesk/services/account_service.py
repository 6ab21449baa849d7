"""Manager account registration and login."""

from typing import Dict, Union

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.models.user import User
from queuedesk.repositories.user_repository import UserRepository
from queuedesk.services.errors import ForbiddenError, InvalidInputError, UnauthorizedError
from queuedesk.utils.logging import get_logger
from queuedesk.utils.security import create_access_token, get_password_hash, verify_password
from queuedesk.utils.timeutils import utcnow

logger = get_logger("services.account")


class AccountService:
    def __init__(self, db: AsyncSession):
        self.users = UserRepository(db)

    async def register(self, email: str, password: str, full_name: str) -> User:
        if await self.users.get_by_email(email) is not None:
            raise InvalidInputError("Email already registered")

        user = await self.users.add(
            User(
                email=email,
                hashed_password=get_password_hash(password),
                full_name=full_name,
                is_active=True,
            )
        )
        logger.info("user_registered", user_id=user.id)
        return user

    async def login(self, email: str, password: str) -> Dict[str, Union[str, int]]:
        """Check the credentials and issue a bearer token."""
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("login_failed", email=email)
            raise UnauthorizedError("Incorrect email or password")
        if not user.is_active:
            raise ForbiddenError("User account is deactivated")

        user.last_login = utcnow()
        await self.users.save(user)

        return {
            "access_token": create_access_token(user_id=user.id, email=user.email),
            "token_type": "bearer",
            "expires_in": settings.jwt_expire_minutes * 60,
        }

"""
Authentication service: registration, login and password resets.
"""
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.config import settings
from kazi.exceptions import BadRequestError, UnauthorizedError
from kazi.logging_config import get_logger
from kazi.models.user import User, ROLE_ADMIN, ROLE_USER
from kazi.services.credentials import hash_password, verify_password
from kazi.utils.date_utils import Clock, utc_now

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively and stored lower-cased."""
    return (email or "").strip().lower()


class AuthService:
    """Credential checks against the users table."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now):
        self.session = session
        self.clock = clock

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def user_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one() > 0

    async def register(self, user: User, password: str) -> User:
        """
        Persist a new user with a hashed credential.

        Args:
            user: Unsaved User carrying email and profile fields
            password: Plaintext password, hashed before storage

        Returns:
            The persisted user

        Raises:
            BadRequestError: If the password is empty or the email is taken
        """
        if not password:
            raise BadRequestError("Password cannot be null or empty.")

        user.email = normalize_email(user.email)
        if not user.email:
            raise BadRequestError("Email is required.")
        if await self.user_exists(user.email):
            raise BadRequestError("Email already registered")

        user.password_hash = hash_password(password)
        if not user.role:
            user.role = ROLE_ADMIN if user.email in settings.ADMIN_EMAILS else ROLE_USER
        if user.created_at is None:
            user.created_at = self.clock()

        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            await self.session.rollback()
            raise BadRequestError("Email already registered")

        await self.session.refresh(user)
        logger.info(f"Registered user {user.id} with role {user.role}")
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise UnauthorizedError("Invalid email or password.")
        return user

    async def reset_password(self, email: str, new_password: str, commit: bool = True) -> bool:
        """Overwrite the stored credential; False when no such user exists."""
        if not new_password:
            raise BadRequestError("Password cannot be null or empty.")

        user = await self.get_user_by_email(email)
        if user is None:
            return False

        user.password_hash = hash_password(new_password)
        if commit:
            await self.session.commit()
        else:
            await self.session.flush()
        logger.info(f"Password reset for user {user.id}")
        return True

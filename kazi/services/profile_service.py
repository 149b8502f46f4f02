"""
The caller's own profile: read, update and password change.
"""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from kazi.exceptions import BadRequestError, ConflictError, NotFoundError
from kazi.logging_config import get_logger
from kazi.models.notification import Notification
from kazi.models.user import User
from kazi.services.auth_service import normalize_email
from kazi.services.credentials import hash_password, is_strong_password, verify_password
from kazi.utils.date_utils import Clock, utc_now

logger = get_logger(__name__)

PROFILE_UPDATED_MESSAGE = "You have updated your profile successfully."


class ProfileService:

    def __init__(self, session: AsyncSession, clock: Clock = utc_now):
        self.session = session
        self.clock = clock

    async def get_profile(self, user_id: int) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    async def update_profile(self, user_id: int, fields: dict) -> User:
        """
        Replace the profile fields and record a notification in one transaction.

        Either both the user row and the notification are written or neither is.
        """
        user = await self.get_profile(user_id)

        email = normalize_email(fields.pop("email"))
        if email != user.email:
            taken = (
                await self.session.execute(select(User.id).where(User.email == email))
            ).scalar_one_or_none()
            if taken is not None:
                raise BadRequestError("Email already registered")
        user.email = email

        for field, value in fields.items():
            setattr(user, field, value)

        self.session.add(
            Notification(user_id=user.id, message=PROFILE_UPDATED_MESSAGE, created_at=self.clock())
        )

        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise BadRequestError("Email already registered")
        except StaleDataError:
            await self.session.rollback()
            raise ConflictError("Profile was modified by another request, reload and retry")

        await self.session.refresh(user)
        logger.info(f"Updated profile for user {user_id}")
        return user

    async def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        user = await self.get_profile(user_id)

        if not verify_password(old_password, user.password_hash):
            raise BadRequestError("Old password is incorrect.")
        if not is_strong_password(new_password):
            raise BadRequestError("New password does not meet complexity requirements.")

        user.password_hash = hash_password(new_password)
        try:
            await self.session.commit()
        except StaleDataError:
            await self.session.rollback()
            raise ConflictError("Profile was modified by another request, reload and retry")
        logger.info(f"Password changed for user {user_id}")

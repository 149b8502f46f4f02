"""
Create an administrator account, or promote an existing user to Admin.

Usage:
    python scripts/create_admin.py admin@example.com 'Str0ng!Pass'

Reads DATABASE_URL and JWT_SECRET_KEY from the environment / .env like the API.
"""
import asyncio
import sys

from kazi.db import AsyncSessionLocal, engine
from kazi.logging_config import setup_logging, get_logger
from kazi.models.user import User, ROLE_ADMIN
from kazi.services.auth_service import AuthService
from kazi.services.credentials import is_strong_password

logger = get_logger(__name__)


async def create_admin(email: str, password: str) -> User:
    async with AsyncSessionLocal() as session:
        auth_service = AuthService(session)
        user = await auth_service.get_user_by_email(email)

        if user is None:
            user = await auth_service.register(User(email=email, role=ROLE_ADMIN), password)
            logger.info(f"Created admin {user.email} (id {user.id})")
            return user

        user.role = ROLE_ADMIN
        await auth_service.reset_password(email, password, commit=False)
        await session.commit()
        logger.info(f"Promoted {user.email} (id {user.id}) to admin and reset the password")
        return user


async def main(argv) -> int:
    if len(argv) != 3:
        print(__doc__)
        return 2

    email, password = argv[1], argv[2]
    if not is_strong_password(password):
        print("Password must be 8+ characters with upper, lower, digit and special character.")
        return 1

    try:
        await create_admin(email, password)
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    setup_logging("INFO")
    sys.exit(asyncio.run(main(sys.argv)))

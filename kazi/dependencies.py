"""
Request-scoped dependencies: caller identity, role gate, clock and services.
"""
from dataclasses import dataclass
from typing import Optional, Type

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db import get_db_session
from kazi.exceptions import ForbiddenError, UnauthorizedError
from kazi.logging_config import get_logger
from kazi.models.user import ROLE_ADMIN, ROLE_USER
from kazi.services.auth_service import AuthService
from kazi.services.scoped_repository import ScopedRepository
from kazi.utils.date_utils import Clock, utc_now
from kazi.utils.jwt import decode_access_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a validated access token."""
    user_id: int
    role: str = ROLE_USER
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected access token: {e}")
        raise UnauthorizedError("Could not validate credentials")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("User ID not found in token.")

    return TokenClaims(
        user_id=user_id,
        role=payload.get("role") or ROLE_USER,
        email=payload.get("email"),
    )


async def require_admin(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    if not claims.is_admin:
        raise ForbiddenError("Administrator role required")
    return claims


def get_clock() -> Clock:
    return utc_now


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> AuthService:
    return AuthService(session, clock=clock)


def owner_repository(model: Type, label: str):
    """Dependency building a repository scoped to the caller's own rows."""

    def _dependency(
        claims: TokenClaims = Depends(get_current_claims),
        session: AsyncSession = Depends(get_db_session),
        clock: Clock = Depends(get_clock),
    ) -> ScopedRepository:
        return ScopedRepository(session, model, owner_id=claims.user_id, clock=clock, label=label)

    return _dependency


def admin_repository(model: Type, label: str):
    """Dependency building an unscoped repository, admins only."""

    def _dependency(
        claims: TokenClaims = Depends(require_admin),
        session: AsyncSession = Depends(get_db_session),
        clock: Clock = Depends(get_clock),
    ) -> ScopedRepository:
        return ScopedRepository(session, model, owner_id=None, clock=clock, label=label)

    return _dependency

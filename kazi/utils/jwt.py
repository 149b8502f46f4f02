from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from kazi.config import settings


def create_access_token(
    user_id: int,
    role: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: Id of the authenticated user, stored as the "sub" claim
        role: Role claim ("User" or "Admin")
        email: Optional email claim for the frontend
        expires_delta: Optional timedelta for token expiration. If None, uses default from settings.

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"sub": str(user_id), "role": role, "exp": expire, "iat": now}
    if email:
        to_encode["email"] = email

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )

    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry and return the claims.

    Raises jwt.ExpiredSignatureError for an expired token and
    jwt.InvalidTokenError for anything else, including a missing sub or exp.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    return payload

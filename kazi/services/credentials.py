"""
Credential handling: bcrypt hashing, verification and the password policy.
"""
import re
from typing import Optional

import bcrypt

from kazi.config import settings

MIN_PASSWORD_LENGTH = 8

_PASSWORD_RULES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"\d"),
    re.compile(r"[\W_]"),
)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plaintext password with a fresh bcrypt salt.

    Args:
        password: Plaintext password, must not be empty
        rounds: bcrypt cost factor, defaults to BCRYPT_ROUNDS from settings

    Returns:
        The bcrypt hash as a string, salt and cost embedded
    """
    if not password:
        raise ValueError("Password cannot be empty")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash
        return False


def is_strong_password(password: str) -> bool:
    """At least 8 characters with upper, lower, digit and special character."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(rule.search(password) for rule in _PASSWORD_RULES)

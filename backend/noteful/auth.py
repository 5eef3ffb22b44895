"""
Noteful Backend: Password Hashing
=================================

What:  One-way password hashing and verification for user accounts.
How:   bcrypt with a fixed cost factor (settings.bcrypt_rounds, default 10).
Who:   UserService hashes on registration and verifies on login.

bcrypt only looks at the first 72 bytes of a password; registration rejects
longer passwords so nothing is silently truncated.
"""

import bcrypt

from noteful.config import settings


def hash_password(password: str) -> str:
    """Hash `password` with a fresh salt. Applied once, at user creation."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Compare a plaintext password with a stored hash.

    Returns False for a wrong password. Raises ValueError when `hashed` is
    not a bcrypt hash at all (bcrypt's own "Invalid salt" error).
    """
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))

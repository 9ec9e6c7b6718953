"""
Security utilities for authentication.

Provides password hashing and session token handling.
"""

import hashlib
import hmac
import secrets
from typing import Optional

from passlib.context import CryptContext

from .config import settings

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)

# 32 random bytes, hex encoded
SESSION_TOKEN_BYTES = 32


def _prehash(password: str) -> str:
    """SHA-256 first so bcrypt never sees more than 72 bytes or a NUL."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def get_password_hash(password: str) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain text password to hash.

    Returns:
        str: Salted bcrypt digest (salt and cost are embedded).
    """
    return pwd_context.hash(_prehash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: The plain text password to verify.
        hashed_password: The hashed password to compare against.

    Returns:
        bool: True if password matches, False otherwise (including when
        the stored digest is malformed).
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_prehash(plain_password), hashed_password)
    except (ValueError, TypeError):
        return False


def generate_session_token() -> str:
    """
    Create a new raw session token.

    Returns:
        str: 64 hex characters (256 bits of entropy).
    """
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def derive_lookup_hash(token: str, secret: Optional[str] = None) -> str:
    """
    Derive the storage key for a raw session token.

    Args:
        token: Raw session token as held by the client.
        secret: HMAC key; defaults to the configured auth secret.

    Returns:
        str: HMAC-SHA256 hex digest (64 characters).
    """
    key = (secret if secret is not None else settings.auth_secret).encode("utf-8")
    return hmac.new(key, token.encode("utf-8"), hashlib.sha256).hexdigest()

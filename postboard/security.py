"""
Credentials and tokens.

Passwords are hashed with argon2 over ``password + salt``; the per-user salt
is stored beside the hash.  Access tokens are HS256 JWTs whose ``sub`` claim
is the user id.  ``resolve_identity`` is the identity resolver handed to the
content service: it turns a bearer token into a User or None and never
raises because of what the token contains.
"""
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.config import settings
from postboard.models import User
from postboard.repositories import user_repository

logger = logging.getLogger(__name__)

_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def generate_salt() -> str:
    """32 hex characters (16 random bytes)."""
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    return _hasher.hash(password + salt)


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password + salt)
    except (VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Verified claims of *token*, or None when it is invalid in any way."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": ["sub", "exp", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected invalid token: %s", exc)
        return None


async def resolve_identity(db: AsyncSession, token: str | None) -> User | None:
    """
    Return the user a bearer *token* belongs to.

    None for an absent, malformed, expired or foreign token, and for a
    token whose user no longer exists.
    """
    if not token:
        return None
    claims = decode_access_token(token)
    if claims is None:
        return None
    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError:
        logger.debug("Rejected token with non-UUID subject")
        return None
    return await user_repository.find_user(db, user_id)

"""
Credential and identity-resolver tests.

``resolve_identity`` must return None, never raise, for any token it cannot
trust.
"""
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from postboard import security
from postboard.config import settings
from postboard.errors import ConstraintViolation
from postboard.models import User
from postboard.repositories import user_repository
from postboard.schemas import UserRegister
from postboard.services import user_service


async def _register(db: AsyncSession, username: str = "alice") -> User:
    return await user_service.register_user(
        db,
        UserRegister(
            username=username,
            email=f"{username}@example.com",
            display_name=username.title(),
            password="correct-horse",
        ),
    )


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def test_password_hash_round_trip():
    salt = security.generate_salt()
    assert len(salt) == 32
    hashed = security.hash_password("s3cret-pass", salt)
    assert hashed != "s3cret-pass"
    assert security.verify_password("s3cret-pass", salt, hashed) is True
    assert security.verify_password("wrong-pass", salt, hashed) is False
    assert security.verify_password("s3cret-pass", security.generate_salt(), hashed) is False


def test_verify_password_with_garbage_hash():
    assert security.verify_password("anything", "00", "not-an-argon2-hash") is False


# ---------------------------------------------------------------------------
# Registration / authentication
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_stores_hash_not_password(db_session: AsyncSession):
    user = await _register(db_session)
    assert user.password_hash != "correct-horse"
    assert user.salt
    assert user.display_name == "Alice"


@pytest.mark.asyncio
async def test_register_duplicate_username(db_session: AsyncSession):
    await _register(db_session, "taken")
    with pytest.raises(ConstraintViolation):
        await _register(db_session, "taken")


@pytest.mark.asyncio
async def test_store_rejects_duplicate_username(db_session: AsyncSession):
    """The unique constraint is the final arbiter even without the pre-check."""
    await _register(db_session, "taken")
    with pytest.raises(ConstraintViolation):
        await user_repository.create_user(
            db_session,
            username="taken",
            email="other@example.com",
            display_name="Other",
            password_hash="x",
            salt="00",
        )
    assert await user_repository.count_users(db_session) == 1


@pytest.mark.asyncio
async def test_authenticate_user(db_session: AsyncSession):
    user = await _register(db_session)
    assert (await user_service.authenticate_user(db_session, "alice", "correct-horse")).id == user.id
    assert await user_service.authenticate_user(db_session, "alice", "wrong") is None
    assert await user_service.authenticate_user(db_session, "nobody", "correct-horse") is None


# ---------------------------------------------------------------------------
# Identity resolver
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_resolve_identity_valid_token(db_session: AsyncSession):
    user = await _register(db_session)
    token = security.create_access_token(user)

    resolved = await security.resolve_identity(db_session, token)
    assert resolved is not None
    assert resolved.id == user.id


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c", "Bearer x"])
async def test_resolve_identity_malformed_tokens(db_session: AsyncSession, token):
    assert await security.resolve_identity(db_session, token) is None


@pytest.mark.asyncio
async def test_resolve_identity_expired_token(db_session: AsyncSession):
    user = await _register(db_session)
    token = security.create_access_token(user, expires_delta=timedelta(seconds=-10))
    assert await security.resolve_identity(db_session, token) is None


@pytest.mark.asyncio
async def test_resolve_identity_wrong_signature(db_session: AsyncSession):
    user = await _register(db_session)
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"sub": str(user.id), "iss": settings.JWT_ISSUER, "exp": now + timedelta(hours=1)},
        "not-the-secret",
        algorithm="HS256",
    )
    assert await security.resolve_identity(db_session, forged) is None


@pytest.mark.asyncio
async def test_resolve_identity_wrong_issuer(db_session: AsyncSession):
    user = await _register(db_session)
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": str(user.id), "iss": "someone-else", "exp": now + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    assert await security.resolve_identity(db_session, token) is None


@pytest.mark.asyncio
async def test_resolve_identity_non_uuid_subject(db_session: AsyncSession):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "not-a-uuid", "iss": settings.JWT_ISSUER, "exp": now + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    assert await security.resolve_identity(db_session, token) is None


@pytest.mark.asyncio
async def test_resolve_identity_unknown_user(db_session: AsyncSession):
    ghost = User(id=uuid.uuid4(), username="ghost")
    token = security.create_access_token(ghost)
    assert await security.resolve_identity(db_session, token) is None

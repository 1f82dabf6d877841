"""
User store.

Username uniqueness is a database constraint; ``create_user`` reports a
collision as ``ConstraintViolation`` regardless of whether another request
won the race between our pre-check and the insert.
"""
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.errors import ConstraintViolation
from postboard.models import User
from postboard.repositories import utcnow


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    display_name: str,
    password_hash: str,
    salt: str,
) -> User:
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=email,
        display_name=display_name,
        password_hash=password_hash,
        salt=salt,
        created_at=utcnow(),
    )
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as exc:
        raise ConstraintViolation(f"Username '{username}' already exists") from exc
    return user


async def find_user(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    return await db.get(User, user_id)


async def find_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def username_exists(db: AsyncSession, username: str) -> bool:
    q = select(select(User.id).where(User.username == username).exists())
    return bool((await db.execute(q)).scalar())


async def count_users(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(User))).scalar_one()

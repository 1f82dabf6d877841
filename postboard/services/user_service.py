"""
User service — registration, credential checks and public profiles.

Username uniqueness is checked up front for a friendly error and enforced
again by the unique constraint, which wins any race between two
registrations of the same name.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from postboard import security
from postboard.errors import ConstraintViolation, NotFound
from postboard.models import User
from postboard.repositories import post_repository, user_repository
from postboard.schemas import UserRegister

logger = logging.getLogger(__name__)


async def register_user(db: AsyncSession, data: UserRegister) -> User:
    if await user_repository.username_exists(db, data.username):
        raise ConstraintViolation(f"Username '{data.username}' already exists")

    salt = security.generate_salt()
    user = await user_repository.create_user(
        db,
        username=data.username,
        email=data.email,
        display_name=data.display_name,
        password_hash=security.hash_password(data.password, salt),
        salt=salt,
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    """The user when *password* matches, otherwise None."""
    user = await user_repository.find_user_by_username(db, username)
    if user is None:
        return None
    if not security.verify_password(password, user.salt, user.password_hash):
        logger.info("Failed login for %s", username)
        return None
    return user


async def get_user_profile(db: AsyncSession, user_id: uuid.UUID) -> dict:
    """Public profile of *user_id* with the number of posts they own."""
    user = await user_repository.find_user(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return {
        "id": str(user.id),
        "username": user.username,
        "display_name": user.display_name,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "post_count": await post_repository.count_posts_by_author(db, user.id),
    }

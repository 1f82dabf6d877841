"""
Like service — a two-state machine per (post, user): not-liked / liked.

``like_post`` and ``unlike_post`` are idempotent.  Correctness under
concurrent duplicate requests does not depend on the existence check in
``like_post``; that check only avoids a needless insert.  The store's
unique constraint decides: an insert that loses the race surfaces as
``ConstraintViolation``, which is recovered here by returning the row the
winner wrote.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.errors import ConstraintViolation, NotFound
from postboard.models import Like, User
from postboard.repositories import like_repository, post_repository
from postboard.services.guards import require_identity

logger = logging.getLogger(__name__)


async def _require_post(db: AsyncSession, post_id: uuid.UUID) -> None:
    if not await post_repository.post_exists(db, post_id):
        raise NotFound("Post not found")


async def like_post(db: AsyncSession, identity: User | None, post_id: uuid.UUID) -> Like:
    """Return the caller's like on *post_id*, creating it if needed."""
    user = require_identity(identity)
    await _require_post(db, post_id)

    existing = await like_repository.find_like(db, post_id, user.id)
    if existing is not None:
        return existing

    try:
        like = await like_repository.create_like(db, post_id, user.id)
    except ConstraintViolation:
        existing = await like_repository.find_like(db, post_id, user.id)
        if existing is None:
            # Violation came from something other than the pair; don't mask it.
            raise
        logger.info("Concurrent like on post %s by user %s resolved to %s", post_id, user.id, existing.id)
        return existing

    logger.info("Post %s liked by user %s", post_id, user.id)
    return like


async def unlike_post(db: AsyncSession, identity: User | None, post_id: uuid.UUID) -> bool:
    """Remove the caller's like; False (not an error) when there was none."""
    user = require_identity(identity)
    await _require_post(db, post_id)

    removed = await like_repository.delete_like(db, post_id, user.id)
    if removed:
        logger.info("Post %s unliked by user %s", post_id, user.id)
    return removed


async def like_count(db: AsyncSession, post_id: uuid.UUID) -> int:
    return await like_repository.count_likes_for_post(db, post_id)


async def is_liked_by(db: AsyncSession, post_id: uuid.UUID, identity: User | None) -> bool:
    """Anonymous viewers never see a post as liked."""
    if identity is None:
        return False
    return await like_repository.like_exists(db, post_id, identity.id)

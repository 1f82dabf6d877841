"""
Like store.

A like is a set-membership fact for a (post, user) pair, backed by the
``uq_likes_post_id_user_id`` constraint.  ``create_like`` inserts inside a
SAVEPOINT: when a concurrent request already inserted the pair, the
violation rolls back only the savepoint and is reported as
``ConstraintViolation``, leaving the caller's unit of work intact.  Any other
integrity failure means the post or the user is gone and is reported as
``NotFound``.
"""
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from postboard.errors import ConstraintViolation, NotFound
from postboard.models import Like
from postboard.repositories import utcnow


async def create_like(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> Like:
    like = Like(id=uuid.uuid4(), post_id=post_id, user_id=user_id, created_at=utcnow())
    try:
        async with db.begin_nested():
            db.add(like)
    except IntegrityError as exc:
        # Driver messages differ per backend; the pair lookup does not.
        if await like_exists(db, post_id, user_id):
            raise ConstraintViolation("Post is already liked by this user") from exc
        raise NotFound("Post or user not found") from exc
    return like


async def find_like(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> Like | None:
    q = select(Like).where(Like.post_id == post_id, Like.user_id == user_id)
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def like_exists(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    inner = select(Like.id).where(Like.post_id == post_id, Like.user_id == user_id)
    return bool((await db.execute(select(inner.exists()))).scalar())


async def list_likes_for_post(
    db: AsyncSession, post_id: uuid.UUID, *, with_user: bool = False
) -> list[Like]:
    """Likes on *post_id*, oldest first."""
    q = select(Like).where(Like.post_id == post_id).order_by(Like.created_at.asc(), Like.id)
    if with_user:
        q = q.options(joinedload(Like.user)).execution_options(populate_existing=True)
    result = await db.execute(q)
    return list(result.unique().scalars().all())


async def list_likes_by_user(db: AsyncSession, user_id: uuid.UUID) -> list[Like]:
    q = select(Like).where(Like.user_id == user_id).order_by(Like.created_at.asc(), Like.id)
    result = await db.execute(q)
    return list(result.scalars().all())


async def delete_like(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Remove the pair's like; False when there was none."""
    q = delete(Like).where(Like.post_id == post_id, Like.user_id == user_id)
    result = await db.execute(q, execution_options={"synchronize_session": False})
    return result.rowcount > 0


async def count_likes(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Like))).scalar_one()


async def count_likes_for_post(db: AsyncSession, post_id: uuid.UUID) -> int:
    q = select(func.count()).select_from(Like).where(Like.post_id == post_id)
    return (await db.execute(q)).scalar_one()


async def count_likes_by_post(
    db: AsyncSession, post_ids: list[uuid.UUID]
) -> dict[uuid.UUID, int]:
    """Like totals for many posts in one grouped statement; absent keys mean 0."""
    if not post_ids:
        return {}
    q = (
        select(Like.post_id, func.count())
        .where(Like.post_id.in_(post_ids))
        .group_by(Like.post_id)
    )
    rows = (await db.execute(q)).all()
    return {post_id: total for post_id, total in rows}


async def liked_post_ids(
    db: AsyncSession, user_id: uuid.UUID, post_ids: list[uuid.UUID]
) -> set[uuid.UUID]:
    """The subset of *post_ids* that *user_id* has liked."""
    if not post_ids:
        return set()
    q = select(Like.post_id).where(Like.user_id == user_id, Like.post_id.in_(post_ids))
    return set((await db.execute(q)).scalars().all())

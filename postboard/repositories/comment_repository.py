"""Comment store."""
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from postboard.models import Comment
from postboard.repositories import utcnow


async def create_comment(
    db: AsyncSession, post_id: uuid.UUID, author_id: uuid.UUID, body: str
) -> Comment:
    comment = Comment(
        id=uuid.uuid4(),
        body=body,
        post_id=post_id,
        author_id=author_id,
        created_at=utcnow(),
    )
    db.add(comment)
    await db.flush()
    return comment


async def find_comment(db: AsyncSession, comment_id: uuid.UUID) -> Comment | None:
    return await db.get(Comment, comment_id)


async def list_comments_for_post(
    db: AsyncSession, post_id: uuid.UUID, *, with_author: bool = False
) -> list[Comment]:
    """Comments on *post_id*, oldest first."""
    q = (
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id)
    )
    if with_author:
        q = q.options(joinedload(Comment.author)).execution_options(populate_existing=True)
    result = await db.execute(q)
    return list(result.unique().scalars().all())


async def list_comments_by_author(db: AsyncSession, author_id: uuid.UUID) -> list[Comment]:
    q = (
        select(Comment)
        .where(Comment.author_id == author_id)
        .order_by(Comment.created_at.asc(), Comment.id)
    )
    result = await db.execute(q)
    return list(result.scalars().all())


async def delete_comment(db: AsyncSession, comment_id: uuid.UUID) -> bool:
    comment = await db.get(Comment, comment_id)
    if comment is None:
        return False
    await db.delete(comment)
    await db.flush()
    return True


async def count_comments(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Comment))).scalar_one()


async def count_comments_for_post(db: AsyncSession, post_id: uuid.UUID) -> int:
    q = select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
    return (await db.execute(q)).scalar_one()


async def count_comments_by_post(
    db: AsyncSession, post_ids: list[uuid.UUID]
) -> dict[uuid.UUID, int]:
    """Comment totals for many posts in one grouped statement."""
    if not post_ids:
        return {}
    q = (
        select(Comment.post_id, func.count())
        .where(Comment.post_id.in_(post_ids))
        .group_by(Comment.post_id)
    )
    rows = (await db.execute(q)).all()
    return {post_id: total for post_id, total in rows}

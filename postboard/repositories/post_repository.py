"""
Post store.

``update_post`` applies only the fields it is given and refreshes
``updated_at``; ``delete_post`` removes the post together with its comments
and likes in the caller's transaction so no row is left pointing at a
missing post.  The explicit deletes cover engines that do not enforce
``ON DELETE CASCADE`` (SQLite without the foreign_keys pragma).

Reads with ``with_author=True`` use ``populate_existing``: relationships
are ``noload``, so a post already in the session from a plain read holds
``author = None`` until it is refreshed.
"""
import uuid
from typing import Any, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from postboard.models import Comment, Like, Post
from postboard.repositories import utcnow

# Columns a caller may change after creation.  Author and timestamps are
# deliberately absent.
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"title", "body"})


async def create_post(db: AsyncSession, author_id: uuid.UUID, title: str, body: str) -> Post:
    now = utcnow()
    post = Post(
        id=uuid.uuid4(),
        title=title,
        body=body,
        author_id=author_id,
        created_at=now,
        updated_at=now,
    )
    db.add(post)
    await db.flush()
    return post


async def find_post(
    db: AsyncSession, post_id: uuid.UUID, *, with_author: bool = False
) -> Post | None:
    q = select(Post).where(Post.id == post_id)
    if with_author:
        q = q.options(joinedload(Post.author)).execution_options(populate_existing=True)
    result = await db.execute(q)
    return result.unique().scalar_one_or_none()


async def post_exists(db: AsyncSession, post_id: uuid.UUID) -> bool:
    q = select(select(Post.id).where(Post.id == post_id).exists())
    return bool((await db.execute(q)).scalar())


async def list_posts(db: AsyncSession, *, with_author: bool = False) -> list[Post]:
    """All posts, newest first."""
    q = select(Post).order_by(Post.created_at.desc(), Post.id)
    if with_author:
        q = q.options(joinedload(Post.author)).execution_options(populate_existing=True)
    result = await db.execute(q)
    return list(result.unique().scalars().all())


async def list_posts_by_author(
    db: AsyncSession, author_id: uuid.UUID, *, with_author: bool = False
) -> list[Post]:
    q = (
        select(Post)
        .where(Post.author_id == author_id)
        .order_by(Post.created_at.desc(), Post.id)
    )
    if with_author:
        q = q.options(joinedload(Post.author)).execution_options(populate_existing=True)
    result = await db.execute(q)
    return list(result.unique().scalars().all())


async def update_post(
    db: AsyncSession, post_id: uuid.UUID, changes: Mapping[str, Any]
) -> Post | None:
    """
    Apply *changes* to the post and return it, or None when it does not exist.

    Unknown keys are ignored.  An empty change set leaves the row, including
    ``updated_at``, untouched.
    """
    post = await db.get(Post, post_id, with_for_update=True)
    if post is None:
        return None

    applied = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
    if not applied:
        return post

    for field, value in applied.items():
        setattr(post, field, value)
    post.updated_at = utcnow()
    await db.flush()
    return post


async def delete_post(db: AsyncSession, post_id: uuid.UUID) -> bool:
    post = await db.get(Post, post_id, with_for_update=True)
    if post is None:
        return False

    await db.execute(delete(Comment).where(Comment.post_id == post_id))
    await db.execute(delete(Like).where(Like.post_id == post_id))
    await db.delete(post)
    await db.flush()
    return True


async def count_posts(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Post))).scalar_one()


async def count_posts_by_author(db: AsyncSession, author_id: uuid.UUID) -> int:
    q = select(func.count()).select_from(Post).where(Post.author_id == author_id)
    return (await db.execute(q)).scalar_one()

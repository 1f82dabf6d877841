"""
Post service — ownership-checked mutations and reads for the Post aggregate.

Design notes
------------
- Mutations resolve the caller first (``require_identity``), then the
  target (``NotFound``), then ownership (``assert_owner``), so an anonymous
  caller never learns whether a post exists.
- Update and delete lock the row through the store
  (``SELECT ... FOR UPDATE`` where the engine supports it); the ownership
  check and the write happen inside the request's single unit of work.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.errors import NotFound
from postboard.models import Post, User
from postboard.repositories import post_repository
from postboard.schemas import PostCreate, PostUpdate
from postboard.services.guards import assert_owner, require_identity

logger = logging.getLogger(__name__)


async def _get_post_or_404(db: AsyncSession, post_id: uuid.UUID) -> Post:
    post = await post_repository.find_post(db, post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


async def create_post(db: AsyncSession, identity: User | None, data: PostCreate) -> Post:
    """Create a post owned by *identity*."""
    user = require_identity(identity)
    post = await post_repository.create_post(db, user.id, data.title, data.body)
    logger.info("Post %s created by user %s", post.id, user.id)
    return post


async def update_post(
    db: AsyncSession, identity: User | None, post_id: uuid.UUID, data: PostUpdate
) -> Post:
    """
    Partially update a post owned by *identity* and return the fresh state.

    Only fields present (and non-null) in *data* are applied; a patch with
    no fields returns the post unchanged.
    """
    user = require_identity(identity)
    post = await _get_post_or_404(db, post_id)
    assert_owner(user, post.author_id, "post")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    updated = await post_repository.update_post(db, post_id, changes)
    if updated is None:
        # Removed by a concurrent request between the check and the write.
        raise NotFound("Post not found")
    if changes:
        logger.info("Post %s updated (%s)", post_id, ", ".join(sorted(changes)))
    return updated


async def delete_post(db: AsyncSession, identity: User | None, post_id: uuid.UUID) -> bool:
    """Delete a post owned by *identity*, together with its comments and likes."""
    user = require_identity(identity)
    post = await _get_post_or_404(db, post_id)
    assert_owner(user, post.author_id, "post")

    if not await post_repository.delete_post(db, post_id):
        raise NotFound("Post not found")
    logger.info("Post %s deleted by user %s", post_id, user.id)
    return True


async def get_post(db: AsyncSession, post_id: uuid.UUID) -> Post | None:
    """Anonymous read; None when the post does not exist."""
    return await post_repository.find_post(db, post_id)


async def list_posts(db: AsyncSession) -> list[Post]:
    """All posts, newest first."""
    return await post_repository.list_posts(db)


async def list_posts_by_author(db: AsyncSession, identity: User | None) -> list[Post]:
    """Posts owned by the caller, newest first."""
    user = require_identity(identity)
    return await post_repository.list_posts_by_author(db, user.id)

"""
Comment service — comments are created by any authenticated user on an
existing post and may be deleted only by their author.  Comments are not
editable.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.errors import NotFound
from postboard.models import Comment, User
from postboard.repositories import comment_repository, post_repository
from postboard.schemas import CommentCreate
from postboard.services.guards import assert_owner, require_identity

logger = logging.getLogger(__name__)


async def create_comment(
    db: AsyncSession,
    identity: User | None,
    post_id: uuid.UUID,
    data: CommentCreate,
) -> Comment:
    """
    Add a comment authored by *identity* to *post_id*.

    Raises ``Unauthenticated`` for anonymous callers and ``NotFound`` when
    the post does not exist, so no comment can reference a missing post.
    """
    user = require_identity(identity)
    if not await post_repository.post_exists(db, post_id):
        raise NotFound("Post not found")

    comment = await comment_repository.create_comment(db, post_id, user.id, data.body)
    logger.info("Comment %s added to post %s by user %s", comment.id, post_id, user.id)
    return comment


async def delete_comment(db: AsyncSession, identity: User | None, comment_id: uuid.UUID) -> bool:
    user = require_identity(identity)
    comment = await comment_repository.find_comment(db, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    assert_owner(user, comment.author_id, "comment")

    if not await comment_repository.delete_comment(db, comment_id):
        raise NotFound("Comment not found")
    logger.info("Comment %s deleted by user %s", comment_id, user.id)
    return True


async def list_comments_for_post(db: AsyncSession, post_id: uuid.UUID) -> list[Comment]:
    """Comments on *post_id*, oldest first; empty for an unknown post."""
    return await comment_repository.list_comments_for_post(db, post_id, with_author=True)

"""
Post views — one read path presenting a post's fields together with its
author, like aggregates and comments.

Nothing is cached; each call recomputes from the store.  List views stay at
a fixed number of statements regardless of the number of posts: authors
are joined, and like counts, comment counts and the viewer's likes are
each fetched with one grouped / IN query.
"""
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.models import Comment, Like, Post, User
from postboard.repositories import comment_repository, like_repository, post_repository
from postboard.services import like_service
from postboard.services.guards import require_identity

# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def user_summary(user: User | None) -> dict | None:
    if user is None:
        return None
    return {
        "id": str(user.id),
        "username": user.username,
        "display_name": user.display_name,
    }


def comment_to_dict(comment: Comment) -> dict:
    return {
        "id": str(comment.id),
        "body": comment.body,
        "post_id": str(comment.post_id),
        "author_id": str(comment.author_id),
        "author": user_summary(comment.author),
        "created_at": _iso(comment.created_at),
    }


def like_to_dict(like: Like) -> dict:
    return {
        "id": str(like.id),
        "post_id": str(like.post_id),
        "user_id": str(like.user_id),
        "user": user_summary(like.user),
        "created_at": _iso(like.created_at),
    }


def post_to_dict(post: Post) -> dict:
    """Plain post fields, without aggregates."""
    return {
        "id": str(post.id),
        "title": post.title,
        "body": post.body,
        "author_id": str(post.author_id),
        "author": user_summary(post.author),
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
    }


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


async def post_view(db: AsyncSession, post_id: uuid.UUID, viewer: User | None) -> dict | None:
    """
    Detail view of *post_id* as seen by *viewer*: fields, author,
    ``like_count``, ``liked_by_me``, all comments oldest first and the likes
    with their users.

    Returns None when the post does not exist.
    """
    post = await post_repository.find_post(db, post_id, with_author=True)
    if post is None:
        return None

    comments = await comment_repository.list_comments_for_post(db, post_id, with_author=True)
    likes = await like_repository.list_likes_for_post(db, post_id, with_user=True)

    data = post_to_dict(post)
    data["like_count"] = await like_service.like_count(db, post_id)
    data["liked_by_me"] = await like_service.is_liked_by(db, post_id, viewer)
    data["comment_count"] = len(comments)
    data["comments"] = [comment_to_dict(c) for c in comments]
    data["likes"] = [like_to_dict(lk) for lk in likes]
    return data


async def post_views(db: AsyncSession, posts: list[Post], viewer: User | None) -> list[dict]:
    """List view of *posts* (order preserved) with aggregates, no comments."""
    post_ids = [p.id for p in posts]
    like_totals = await like_repository.count_likes_by_post(db, post_ids)
    comment_totals = await comment_repository.count_comments_by_post(db, post_ids)
    liked = (
        await like_repository.liked_post_ids(db, viewer.id, post_ids)
        if viewer is not None
        else set()
    )

    items = []
    for post in posts:
        data = post_to_dict(post)
        data["like_count"] = like_totals.get(post.id, 0)
        data["liked_by_me"] = post.id in liked
        data["comment_count"] = comment_totals.get(post.id, 0)
        items.append(data)
    return items


async def list_post_views(db: AsyncSession, viewer: User | None) -> list[dict]:
    posts = await post_repository.list_posts(db, with_author=True)
    return await post_views(db, posts, viewer)


async def list_my_post_views(db: AsyncSession, identity: User | None) -> list[dict]:
    user = require_identity(identity)
    posts = await post_repository.list_posts_by_author(db, user.id, with_author=True)
    return await post_views(db, posts, user)

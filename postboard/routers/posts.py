import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.dependencies import get_identity
from postboard.errors import NotFound
from postboard.models import User
from postboard.schemas import (
    CommentCreate,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    UnlikeResponse,
)
from postboard.services import aggregation, comment_service, like_service, post_service

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

@router.get("")
async def list_posts(
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await aggregation.list_post_views(db, identity)

@router.get("/mine")
async def list_my_posts(
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await aggregation.list_my_post_views(db, identity)

@router.get("/{post_id}")
async def get_post(
    post_id: uuid.UUID,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    view = await aggregation.post_view(db, post_id, identity)
    if view is None:
        raise NotFound("Post not found")
    return view

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(
    data: PostCreate,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.create_post(db, identity, data)

@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: uuid.UUID,
    data: PostUpdate,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.update_post(db, identity, post_id, data)

@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: uuid.UUID,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await post_service.delete_post(db, identity, post_id)
    return Response(status_code=204)

@router.get("/{post_id}/comments")
async def list_comments(post_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    comments = await comment_service.list_comments_for_post(db, post_id)
    return [aggregation.comment_to_dict(c) for c in comments]

@router.post("/{post_id}/comments", status_code=201)
async def add_comment(
    post_id: uuid.UUID,
    data: CommentCreate,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_service.create_comment(db, identity, post_id, data)
    result = aggregation.comment_to_dict(comment)
    result["author"] = aggregation.user_summary(identity)
    return result

@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(
    post_id: uuid.UUID,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await like_service.like_post(db, identity, post_id)

@router.delete("/{post_id}/like", response_model=UnlikeResponse)
async def unlike_post(
    post_id: uuid.UUID,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return UnlikeResponse(removed=await like_service.unlike_post(db, identity, post_id))

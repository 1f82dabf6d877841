from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.repositories import comment_repository, like_repository, post_repository, user_repository
from postboard.schemas import MetricsResponse

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])

@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):

    total_posts = await post_repository.count_posts(db)

    total_likes = await like_repository.count_likes(db)

    avg_likes = total_likes / total_posts if total_posts > 0 else 0

    return MetricsResponse(
        total_users=await user_repository.count_users(db),
        total_posts=total_posts,
        total_comments=await comment_repository.count_comments(db),
        total_likes=total_likes,
        avg_likes_per_post=round(avg_likes, 2),
    )

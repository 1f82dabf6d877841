import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.dependencies import get_identity
from postboard.models import User
from postboard.services import comment_service

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: uuid.UUID,
    identity: User | None = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_comment(db, identity, comment_id)
    return Response(status_code=204)

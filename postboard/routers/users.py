import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.schemas import UserProfile
from postboard.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("/{user_id}", response_model=UserProfile)
async def get_user(user_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user_profile(db, user_id)

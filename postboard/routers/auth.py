from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.dependencies import get_identity
from postboard.errors import Unauthenticated
from postboard.models import User
from postboard.schemas import LoginRequest, TokenResponse, UserRegister, UserResponse
from postboard.security import create_access_token
from postboard.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", status_code=201, response_model=TokenResponse)
async def register(data: UserRegister, db: AsyncSession = Depends(get_db)):
    # Duplicate usernames surface as ConstraintViolation -> 409.
    user = await user_service.register_user(db, data)
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )

@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate_user(db, data.username, data.password)
    if user is None:
        raise Unauthenticated("Invalid credentials")
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )

@router.get("/me", response_model=UserResponse)
async def me(identity: User | None = Depends(get_identity)):
    if identity is None:
        raise Unauthenticated()
    return identity

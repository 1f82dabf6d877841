import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- User / auth ---

class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255)
    display_name: str = Field(min_length=1, max_length=255)


class UserRegister(UserBase):
    password: str = Field(min_length=8, max_length=128)


class UserResponse(UserBase):
    id: uuid.UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserProfile(BaseModel):
    id: uuid.UUID
    username: str
    display_name: str
    created_at: datetime
    post_count: int


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# --- Post ---

class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    body: str = Field(min_length=1)


class PostUpdate(BaseModel):
    """Patch for a post: omitted (or null) fields keep their current value."""

    title: str | None = Field(None, min_length=1, max_length=500)
    body: str | None = Field(None, min_length=1)


class PostResponse(BaseModel):
    id: uuid.UUID
    title: str
    body: str
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(BaseModel):
    body: str = Field(min_length=1)


# --- Like ---

class LikeResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UnlikeResponse(BaseModel):
    removed: bool


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_posts: int
    total_comments: int
    total_likes: int
    avg_likes_per_post: float

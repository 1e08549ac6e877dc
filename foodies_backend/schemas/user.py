"""User profile and follow schemas."""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..constants import messages


class UserProfile(BaseModel):
    """Another user's profile as seen by the requester."""
    id: int
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime
    recipesCount: int = 0
    followersCount: int = 0


class OwnProfile(UserProfile):
    favoritesCount: int = 0
    followingCount: int = 0


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=messages.USER_NAME_MIN_LENGTH, max_length=messages.USER_NAME_MAX_LENGTH)
    email: EmailStr | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        if v and len(v) > messages.USER_EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {messages.USER_EMAIL_MAX_LENGTH} characters")
        return v.lower() if v else v


class AvatarPayload(BaseModel):
    avatar: str


class FollowUser(BaseModel):
    id: int
    name: str
    email: str
    avatar: str | None = None
    followed_at: datetime

"""Auth API schemas."""
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..constants import messages


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=messages.USER_NAME_MIN_LENGTH, max_length=messages.USER_NAME_MAX_LENGTH)
    email: EmailStr
    # bcrypt only reads the first 72 bytes
    password: str = Field(..., min_length=messages.USER_PASSWORD_MIN_LENGTH, max_length=1000)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if len(v) > messages.USER_EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {messages.USER_EMAIL_MAX_LENGTH} characters")
        return v.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    avatar: str | None = None


class AuthPayload(BaseModel):
    user: UserPublic
    token: str

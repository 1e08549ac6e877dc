"""Register, login, logout."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.database import get_db
from ...constants import messages
from ...models.user import User
from ...schemas.auth import RegisterRequest, LoginRequest, UserPublic, AuthPayload
from ...schemas.common import DataMessageResponse, ErrorResponse, MessageResponse
from ...middleware.errors import ApiError
from ...middleware.jwt import (
    CurrentUser,
    hash_password,
    verify_password,
    create_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_payload(user: User) -> AuthPayload:
    return AuthPayload(
        user=UserPublic(id=user.id, name=user.name, email=user.email, avatar=user.avatar),
        token=create_access_token(user.id),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=DataMessageResponse[AuthPayload],
    summary="Register a new user",
    responses={400: {"model": ErrorResponse, "description": "Validation error or duplicate email"}},
)
async def register(
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(select(User.id).where(User.email == body.email))
    if result.first():
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.USER_ALREADY_EXISTS)

    user = User(
        name=body.name,
        email=body.email,
        password=hash_password(body.password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.USER_ALREADY_EXISTS)

    logger.info("Registered user %s", user.id)
    return DataMessageResponse(message=messages.USER_REGISTERED, data=_auth_payload(user))


@router.post(
    "/login",
    response_model=DataMessageResponse[AuthPayload],
    summary="Log in with email and password",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    # same answer for unknown email and wrong password
    if not user or not verify_password(body.password, user.password):
        raise ApiError(status.HTTP_401_UNAUTHORIZED, messages.INVALID_CREDENTIALS)
    return DataMessageResponse(message=messages.LOGIN_SUCCESS, data=_auth_payload(user))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out (client discards the token)",
    responses={401: {"model": ErrorResponse}},
)
async def logout(user: CurrentUser):
    logger.info("User %s logged out", user.id)
    return MessageResponse(message=messages.LOGOUT_SUCCESS)

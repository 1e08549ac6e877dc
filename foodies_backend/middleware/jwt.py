"""Password hashing, JWT issuing and the bearer-token auth dependency."""
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from ..config.settings import settings
from ..config.database import get_db
from ..constants import messages
from ..models.user import User
from .errors import ApiError

security = HTTPBearer(auto_error=False)


def _truncate_to_72_bytes(password: str) -> bytes:
    """UTF-8 encode and cap at bcrypt's 72-byte input limit."""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
        # keep UTF-8 boundaries: drop trailing continuation bytes
        while len(password_bytes) > 0 and (password_bytes[-1] & 0xC0) == 0x80:
            password_bytes = password_bytes[:-1]
    return password_bytes


def hash_password(password: str) -> str:
    password_bytes = _truncate_to_72_bytes(password)
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_truncate_to_72_bytes(plain), hashed.encode('utf-8'))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(subject: str | int, *, expires_delta: timedelta | None = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(subject),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _unauthorized(message: str) -> ApiError:
    return ApiError(
        status.HTTP_401_UNAUTHORIZED,
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> int:
    """Verify signature and expiry, return the user id from `sub`."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise _unauthorized(messages.TOKEN_EXPIRED)
    except JWTError:
        raise _unauthorized(messages.TOKEN_INVALID)
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized(messages.TOKEN_INVALID)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Auth required. 401 when the token is missing, invalid or expired."""
    if not credentials or not credentials.credentials:
        raise _unauthorized(messages.TOKEN_REQUIRED)
    user_id = decode_token(credentials.credentials)
    user = await db.get(User, user_id)
    if not user:
        raise _unauthorized(messages.TOKEN_INVALID)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]

"""Authentication module: resolves a bearer access token to the current user."""
import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import decode_access_token
from db.session import get_async_session
from models.user import User
from services.user_service import get_user_by_id

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme. auto_error=False so a missing header yields our own 401
# instead of FastAPI's default 403.
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str, settings: Settings) -> dict:
    """
    Decode and validate an access token.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("Access token validation failed: %s", e)
        raise _unauthorized("Invalid token")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    Raises 401 when the header is missing, the token does not verify, or the
    user it was issued to no longer exists.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials, settings)

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token: malformed sub claim")

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user

"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.auth import AccessTokenResponse, AuthCredentials
from schemas.user import UserResponse
from services import auth_service
from services.exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=201)
async def signup(
    data: AuthCredentials,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    """Register a new account with an email and password."""
    try:
        user = await auth_service.signup(db, data, settings)
    except EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Credentials taken",
        )
    return UserResponse.model_validate(user)


@router.post("/signin", response_model=AccessTokenResponse, status_code=200)
async def signin(
    data: AuthCredentials,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AccessTokenResponse:
    """
    Exchange an email and password for an access token.

    Send the token back as `Authorization: Bearer <access_token>`.
    """
    try:
        token = await auth_service.signin(db, data, settings)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Credentials incorrect",
        )
    return AccessTokenResponse(access_token=token)

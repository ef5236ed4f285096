"""Pydantic schemas for signup/signin endpoints."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthCredentials(BaseModel):
    """Request body for both signup and signin."""

    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class AccessTokenResponse(BaseModel):
    """Signin response. The token is sent back as `Authorization: Bearer <token>`."""

    access_token: str

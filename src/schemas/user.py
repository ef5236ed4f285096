"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from schemas.base import CamelModel


class UserResponse(CamelModel):
    """Public user profile (never includes the password hash)."""

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime
    updated_at: datetime


class UserUpdate(CamelModel):
    """
    Partial profile update.

    Only keys present in the request body are applied. email may be changed
    but not cleared.
    """

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def check_email_not_null(self) -> "UserUpdate":
        """Reject an explicit null email."""
        if "email" in self.model_fields_set and self.email is None:
            raise ValueError("email cannot be null")
        return self

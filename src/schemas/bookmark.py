"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import Field, HttpUrl, field_validator, model_validator

from core.config import get_settings
from schemas.base import CamelModel


def validate_title_length(title: str | None) -> str | None:
    """Validate that title doesn't exceed maximum length."""
    settings = get_settings()
    if title is not None and len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


def validate_description_length(description: str | None) -> str | None:
    """Validate that description doesn't exceed maximum length."""
    settings = get_settings()
    if description is not None and len(description) > settings.max_description_length:
        max_len = settings.max_description_length
        raise ValueError(
            f"Description exceeds maximum length of {max_len:,} characters "
            f"(got {len(description):,} characters).",
        )
    return description


class BookmarkCreate(CamelModel):
    """Schema for creating a new bookmark."""

    title: str = Field(min_length=1)
    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    # but preserves paths as-is (example.com/page stays example.com/page)
    link: HttpUrl
    description: str | None = None

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str) -> str:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkUpdate(CamelModel):
    """
    Schema for updating an existing bookmark.

    Omitted fields are left unchanged. description may be cleared with null;
    title and link are required columns and cannot.
    """

    title: str | None = Field(default=None, min_length=1)
    link: HttpUrl | None = None
    description: str | None = None

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)

    @model_validator(mode="after")
    def check_required_not_null(self) -> "BookmarkUpdate":
        """Reject explicit nulls for title and link."""
        for field in ("title", "link"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class BookmarkResponse(CamelModel):
    """Schema for bookmark responses (single item and list entries)."""

    id: int
    user_id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime

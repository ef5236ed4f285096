"""Service layer for user lookups and profile edits."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.exceptions import EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased."""
    return email.strip().lower()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by primary key."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email. Input is normalized to match the stored form."""
    result = await db.execute(
        select(User).where(User.email == normalize_email(email)),
    )
    return result.scalar_one_or_none()


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile update to a user.

    Only fields present in the request are changed.

    Raises:
        EmailAlreadyRegisteredError: If the new email belongs to another user.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    update_data = data.model_dump(exclude_unset=True)

    if "email" in update_data:
        new_email = normalize_email(update_data["email"])
        update_data["email"] = new_email
        if new_email != user.email:
            existing = await get_user_by_email(db, new_email)
            if existing is not None and existing.id != user.id:
                raise EmailAlreadyRegisteredError(new_email)

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        # Another request claimed the email between the check and the flush
        raise EmailAlreadyRegisteredError(update_data.get("email", user.email)) from e
    await db.refresh(user)
    if update_data:
        logger.info("Updated profile for user %s (fields: %s)", user.id, sorted(update_data))
    return user

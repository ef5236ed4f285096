"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)

# Upper bound of the 32-bit INTEGER primary key
MAX_BOOKMARK_ID = 2_147_483_647


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark for a user.

    Args:
        db: Database session.
        user_id: User ID that will own the bookmark.
        data: Bookmark creation data.

    Returns:
        The created bookmark.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        link=str(data.link),
        description=data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("User %s created bookmark %s", user_id, bookmark.id)
    return bookmark


async def get_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Get all bookmarks owned by a user, oldest first."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id.asc()),
    )
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """
    Get a bookmark by ID, scoped to user.

    Returns:
        The bookmark if it exists and is owned by the user, None otherwise.
    """
    if not 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        return None
    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark | None:
    """
    Update a bookmark. Returns None if not found or wrong user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        return None

    update_data = data.model_dump(exclude_unset=True)

    # Convert HttpUrl to string if link is being updated
    if "link" in update_data:
        update_data["link"] = str(update_data["link"])

    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> bool:
    """
    Delete a bookmark.

    Returns:
        True if deleted, False if not found or owned by another user.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        return False

    await db.delete(bookmark)
    await db.flush()
    logger.info("User %s deleted bookmark %s", user_id, bookmark_id)
    return True

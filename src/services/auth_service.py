"""Service layer for account registration and signin."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import create_access_token, hash_password, verify_password
from models.user import User
from schemas.auth import AuthCredentials
from services.exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError
from services.user_service import get_user_by_email, normalize_email

logger = logging.getLogger(__name__)


async def signup(
    db: AsyncSession,
    credentials: AuthCredentials,
    settings: Settings,
) -> User:
    """
    Register a new account.

    Args:
        db: Database session.
        credentials: Validated email and password.
        settings: Application settings (bcrypt work factor).

    Returns:
        The created user.

    Raises:
        EmailAlreadyRegisteredError: If the email is already registered.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    email = normalize_email(credentials.email)
    if await get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError(email)

    user = User(
        email=email,
        password_hash=hash_password(credentials.password, rounds=settings.bcrypt_rounds),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        # Race condition: a concurrent signup inserted the same email first
        raise EmailAlreadyRegisteredError(email) from e
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def signin(
    db: AsyncSession,
    credentials: AuthCredentials,
    settings: Settings,
) -> str:
    """
    Check credentials and issue an access token.

    Returns:
        A signed access token bound to the user's id.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong.
    """
    user = await get_user_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Failed signin attempt for %s", normalize_email(credentials.email))
        raise InvalidCredentialsError

    return create_access_token(user.id, user.email, settings)

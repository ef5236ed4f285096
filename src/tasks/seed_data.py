"""
Seed a local database with a demo account and sample bookmarks.

Usage:
    PYTHONPATH=src python -m tasks.seed_data populate
    PYTHONPATH=src python -m tasks.seed_data populate --force
    PYTHONPATH=src python -m tasks.seed_data clear

Signs in as demo@example.com / demo-password.
"""
import argparse
import asyncio
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import Settings, get_settings
from core.security import hash_password
from models import Bookmark, User

logger = logging.getLogger(__name__)

DEMO_EMAIL = 'demo@example.com'
DEMO_PASSWORD = 'demo-password'

BOOKMARKS = [
    {
        'title': 'Python Official Documentation',
        'link': 'https://docs.python.org/3/',
        'description': 'Comprehensive reference for the Python programming language.',
    },
    {
        'title': 'FastAPI',
        'link': 'https://fastapi.tiangolo.com/',
        'description': 'Framework docs: dependencies, security, testing.',
    },
    {
        'title': 'SQLAlchemy 2.0 Documentation',
        'link': 'https://docs.sqlalchemy.org/en/20/',
        'description': 'ORM and Core reference, including the asyncio extension.',
    },
    {
        'title': 'MDN Web Docs - HTTP',
        'link': 'https://developer.mozilla.org/en-US/docs/Web/HTTP',
        'description': None,
    },
    {
        'title': 'RFC 6750 - Bearer Token Usage',
        'link': 'https://datatracker.ietf.org/doc/html/rfc6750',
        'description': 'How bearer tokens travel in the Authorization header.',
    },
]


async def get_or_create_demo_user(session: AsyncSession, settings: Settings) -> User:
    """Get or create the demo user."""
    result = await session.execute(select(User).where(User.email == DEMO_EMAIL))
    user = result.scalar_one_or_none()
    if user is None:
        user = User(
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD, rounds=settings.bcrypt_rounds),
            first_name='Demo',
            last_name='User',
        )
        session.add(user)
        await session.flush()
        logger.info('Created demo user %s', user.id)
    else:
        logger.info('Found demo user %s', user.id)
    return user


async def clear_data(session: AsyncSession) -> int:
    """Delete the demo user and its bookmarks. Returns the number of bookmarks removed."""
    result = await session.execute(select(User).where(User.email == DEMO_EMAIL))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info('No demo user found, nothing to clear')
        return 0

    bookmark_count = (await session.execute(
        select(func.count()).select_from(Bookmark).where(Bookmark.user_id == user.id),
    )).scalar() or 0

    await session.execute(delete(Bookmark).where(Bookmark.user_id == user.id))
    await session.execute(delete(User).where(User.id == user.id))
    await session.flush()

    logger.info('Deleted demo user %s and %s bookmarks', user.id, bookmark_count)
    return bookmark_count


async def populate_data(
    session: AsyncSession,
    settings: Settings,
    force: bool = False,
) -> int:
    """
    Create the demo user and its bookmarks.

    Returns the number of bookmarks created. Existing seed data is left alone
    (returns 0) unless force is set, in which case it is cleared first.
    """
    user = await get_or_create_demo_user(session, settings)

    bookmark_count = (await session.execute(
        select(func.count()).select_from(Bookmark).where(Bookmark.user_id == user.id),
    )).scalar()

    if bookmark_count:
        if not force:
            logger.info(
                'Data already exists (%s bookmarks). Use --force to clear and re-seed.',
                bookmark_count,
            )
            return 0
        await clear_data(session)
        user = await get_or_create_demo_user(session, settings)

    session.add_all(Bookmark(user_id=user.id, **data) for data in BOOKMARKS)
    await session.flush()
    logger.info('Created %s bookmarks for demo user %s', len(BOOKMARKS), user.id)
    return len(BOOKMARKS)


async def run(command: str, force: bool = False) -> None:
    """Run a seed command in its own engine and transaction."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            if command == 'populate':
                await populate_data(session, settings, force=force)
            else:
                await clear_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    parser = argparse.ArgumentParser(description='Seed the database with demo data.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Create the demo user and bookmarks')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing demo data before populating',
    )

    subparsers.add_parser('clear', help='Remove the demo user and its bookmarks')

    args = parser.parse_args()
    asyncio.run(run(args.command, force=getattr(args, 'force', False)))


if __name__ == '__main__':
    main()

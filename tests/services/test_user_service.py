"""Tests for user lookups and profile updates."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.exceptions import EmailAlreadyRegisteredError
from services.user_service import (
    get_user_by_email,
    get_user_by_id,
    normalize_email,
    update_user,
)


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    user = User(email='test@example.com', password_hash='x', first_name='Test')
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user."""
    user = User(email='other@example.com', password_hash='x')
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


def test__normalize_email() -> None:
    assert normalize_email('  User@Example.COM ') == 'user@example.com'


async def test__get_user_by_id(db_session: AsyncSession, test_user: User) -> None:
    user = await get_user_by_id(db_session, test_user.id)
    assert user is not None
    assert user.email == 'test@example.com'


async def test__get_user_by_id__unknown(db_session: AsyncSession) -> None:
    assert await get_user_by_id(db_session, 99999) is None


async def test__get_user_by_email__case_insensitive(
    db_session: AsyncSession, test_user: User,
) -> None:
    user = await get_user_by_email(db_session, 'TEST@Example.com')
    assert user is not None
    assert user.id == test_user.id


async def test__get_user_by_email__unknown(db_session: AsyncSession) -> None:
    assert await get_user_by_email(db_session, 'missing@example.com') is None


async def test__update_user__partial(db_session: AsyncSession, test_user: User) -> None:
    user = await update_user(db_session, test_user, UserUpdate(last_name='Person'))

    assert user.first_name == 'Test'
    assert user.last_name == 'Person'
    assert user.email == 'test@example.com'


async def test__update_user__email_normalized(
    db_session: AsyncSession, test_user: User,
) -> None:
    user = await update_user(db_session, test_user, UserUpdate(email='New@Example.com'))
    assert user.email == 'new@example.com'


async def test__update_user__same_email_allowed(
    db_session: AsyncSession, test_user: User,
) -> None:
    user = await update_user(db_session, test_user, UserUpdate(email='TEST@example.com'))
    assert user.email == 'test@example.com'


async def test__update_user__email_taken_raises(
    db_session: AsyncSession, test_user: User, other_user: User,
) -> None:
    with pytest.raises(EmailAlreadyRegisteredError):
        await update_user(db_session, test_user, UserUpdate(email=other_user.email))


async def test__update_user__clear_first_name(
    db_session: AsyncSession, test_user: User,
) -> None:
    user = await update_user(db_session, test_user, UserUpdate(first_name=None))
    assert user.first_name is None


async def test__update_user__empty_update_is_noop(
    db_session: AsyncSession, test_user: User,
) -> None:
    user = await update_user(db_session, test_user, UserUpdate())
    assert user.email == 'test@example.com'
    assert user.first_name == 'Test'


async def test__update_user__concurrent_email_claim_maps_to_conflict(
    db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A unique-index violation at flush time is reported as an email conflict."""
    user = User(email='first@example.com', password_hash='x')
    taken = User(email='taken@example.com', password_hash='x')
    db_session.add_all([user, taken])
    await db_session.commit()
    user_id = user.id

    # The conflict check misses the row, as when another request claims it first
    async def _no_user(_db: AsyncSession, _email: str) -> None:
        return None

    monkeypatch.setattr('services.user_service.get_user_by_email', _no_user)

    with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
        await update_user(db_session, user, UserUpdate(email='taken@example.com'))
    assert exc_info.value.email == 'taken@example.com'

    # Session was rolled back and can still be used; the email is unchanged
    email = (
        await db_session.execute(select(User.email).where(User.id == user_id))
    ).scalar_one()
    assert email == 'first@example.com'
    count = (await db_session.execute(select(func.count()).select_from(User))).scalar()
    assert count == 2

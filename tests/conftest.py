"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

# Settings are read at import time by db.session and api.main, so the test
# environment has to be in place before any application module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-bytes-long")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from models.base import Base  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_EMAIL = "testuser@email.com"
DEFAULT_PASSWORD = "testpass123"


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create a fresh in-memory database for each test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for tests that call services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Create a test client whose requests run against the test database."""
    # Clear the settings cache so it picks up the test environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def register_user(
    client: AsyncClient,
    email: str = DEFAULT_EMAIL,
    password: str = DEFAULT_PASSWORD,
) -> str:
    """Sign up and sign in through the API. Returns the access token."""
    signup = await client.post("/auth/signup", json={"email": email, "password": password})
    assert signup.status_code == 201, signup.text

    signin = await client.post("/auth/signin", json={"email": email, "password": password})
    assert signin.status_code == 200, signin.text
    return signin.json()["access_token"]


@pytest.fixture
def create_user() -> Callable[..., Awaitable[str]]:
    """Factory fixture: register a user through the API and return its token."""
    return register_user


@pytest.fixture
async def auth_token(client: AsyncClient) -> str:
    """Access token for a freshly registered default user."""
    return await register_user(client)


@pytest.fixture
async def auth_client(client: AsyncClient, auth_token: str) -> AsyncClient:
    """The test client, authenticated as the default user."""
    client.headers["Authorization"] = f"Bearer {auth_token}"
    return client


@pytest.fixture
def client_for_token(
    client: AsyncClient,  # noqa: ARG001 - installs the session override
) -> Callable[[str], AbstractAsyncContextManager[AsyncClient]]:
    """
    Factory fixture: open a second client that sends a given bearer token.

    Shares the app (and its session override) with the `client` fixture, so
    both clients see the same database.
    """
    from api.main import app

    @asynccontextmanager
    async def _open(token: str) -> AsyncGenerator[AsyncClient]:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers={"Authorization": f"Bearer {token}"},
        ) as other_client:
            yield other_client

    return _open

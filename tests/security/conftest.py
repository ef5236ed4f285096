"""
Security test fixtures.

These fixtures create two independent accounts through the API, each with a
private bookmark, so tests can check that neither can reach the other's data.
"""
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager

import pytest
from httpx import AsyncClient


@pytest.fixture
async def user_a_token(create_user: Callable[..., Awaitable[str]], client: AsyncClient) -> str:
    """Access token for the first test user (User A)."""
    return await create_user(client, "user-a@test.com", "password-a")


@pytest.fixture
async def user_b_token(create_user: Callable[..., Awaitable[str]], client: AsyncClient) -> str:
    """Access token for a second test user (User B)."""
    return await create_user(client, "user-b@test.com", "password-b")


@pytest.fixture
async def user_a_client(
    client_for_token: Callable[[str], AbstractAsyncContextManager[AsyncClient]],
    user_a_token: str,
) -> AsyncGenerator[AsyncClient]:
    """Client authenticated as User A."""
    async with client_for_token(user_a_token) as user_client:
        yield user_client


@pytest.fixture
async def user_b_client(
    client_for_token: Callable[[str], AbstractAsyncContextManager[AsyncClient]],
    user_b_token: str,
) -> AsyncGenerator[AsyncClient]:
    """Client authenticated as User B."""
    async with client_for_token(user_b_token) as user_client:
        yield user_client


@pytest.fixture
async def user_a_bookmark(user_a_client: AsyncClient) -> dict:
    """A bookmark belonging to User A."""
    response = await user_a_client.post(
        "/bookmarks",
        json={
            "title": "User A's Private Bookmark",
            "link": "https://user-a-bookmark.example.com/",
            "description": "This should only be accessible to User A",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def user_b_bookmark(user_b_client: AsyncClient) -> dict:
    """A bookmark belonging to User B."""
    response = await user_b_client.post(
        "/bookmarks",
        json={
            "title": "User B's Private Bookmark",
            "link": "https://user-b-bookmark.example.com/",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()

"""Shared fixtures: an isolated store and app per test, and an HTTP client bound to it."""
from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.main import create_app
from core.config import Settings
from services.bookmark_store import BookmarkStore

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment and any .env file."""
    return Settings(
        _env_file=None,  # Don't load from .env file
        cors_allowed_origins=ALLOWED_ORIGIN,
    )


@pytest.fixture
def store() -> BookmarkStore:
    """Store seeded with the three sample bookmarks (ids "1".."3")."""
    return BookmarkStore.with_sample_data()


@pytest.fixture
def app(settings: Settings, store: BookmarkStore) -> FastAPI:
    """Application owning the test's store."""
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        yield client

# ruff: noqa: E402
# IMPORTANT:
# 1) Environment variables (DATABASE_URL etc.) are set first, then src modules are imported.
# 2) Settings and the storage client read the environment at import time.

from collections.abc import AsyncGenerator, Awaitable, Callable
import os
import tempfile
import uuid

from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
import pytest


def _setup_test_environment() -> str:
    """Point the app at a throwaway SQLite file and return the DATABASE_URL used."""
    os.environ.setdefault("ENVIRONMENT", "development")
    os.environ.setdefault("LOG_LEVEL", "INFO")
    os.environ["DB_INIT_ON_START"] = "false"
    os.environ["DB_EXIT_ON_POOL_FAULT"] = "false"

    test_url = os.getenv("TEST_DATABASE_URL")
    if not test_url:
        db_path = os.path.join(tempfile.gettempdir(), f"blog_test_{uuid.uuid4().hex}.db")
        test_url = f"sqlite+aiosqlite:///{db_path}"

    # --- CRITICAL: Set DATABASE_URL before importing src modules ---
    os.environ["DATABASE_URL"] = test_url
    return test_url


TEST_DATABASE_URL = _setup_test_environment()

# isort: off
from app import create_app
from db import database
from db.models.post import posts_table
from db.repositories import post_repository

# isort: on


@pytest.fixture
async def db() -> AsyncGenerator[None]:
    """Fresh posts table for each test; the engine is rebuilt on the test's event loop."""
    await database.close_db_connections()
    await database.run_sync(database.Base.metadata.drop_all, tables=[posts_table], checkfirst=True)
    await database.run_sync(database.Base.metadata.create_all, tables=[posts_table])
    try:
        yield
    finally:
        await database.close_db_connections()


@pytest.fixture
def app():
    """FastAPI application instance created by the factory."""
    return create_app()


@pytest.fixture
async def client(app, db: None) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client with app lifespan management."""
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            yield ac


@pytest.fixture
def make_post(db: None) -> Callable[..., Awaitable[dict]]:
    """Insert a post straight through the repository."""

    async def _make_post(title: str = "Hello", content: str = "Body text", **extra) -> dict:
        return await post_repository.create_post(title=title, content=content, **extra)

    return _make_post

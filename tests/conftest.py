"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Create a temporary directory for the application database
_test_tmp_dir = tempfile.mkdtemp(prefix="social_auth_facebook_test_")

# Set config BEFORE importing app modules
os.environ["SOCIAL_AUTH_FACEBOOK_DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{Path(_test_tmp_dir) / 'test.db'}"
)
os.environ.pop("SOCIAL_AUTH_FACEBOOK_BASE_URL", None)

from social_auth_facebook.db import get_db
from social_auth_facebook.db.base import Base
from social_auth_facebook.db.models import Role
from social_auth_facebook.main import app


@pytest.fixture
async def db_engine():
    """Create an in-memory test database engine."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest.fixture
async def roles(db_session):
    """Seed the built-in roles plus two custom roles."""
    db_session.add_all(
        [
            Role(id="anonymous", label="Anonymous user", weight=0),
            Role(id="authenticated", label="Authenticated user", weight=1),
            Role(id="editor", label="Content <editor>", weight=2),
            Role(id="administrator", label="Administrator", weight=3),
        ]
    )
    await db_session.commit()
    return {
        "anonymous": "Anonymous user",
        "authenticated": "Authenticated user",
        "editor": "Content <editor>",
        "administrator": "Administrator",
    }


@pytest.fixture
async def client(db_session):
    """Create a test client with database override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def pytest_sessionfinish(session, exitstatus):
    """Clean up temp directories after test session."""
    import shutil
    if Path(_test_tmp_dir).exists():
        shutil.rmtree(_test_tmp_dir, ignore_errors=True)

"""
Test configuration and fixtures for the Meta Leads API.

Every test gets a fresh SQLite database (aiosqlite) and a mocked Graph API
client; the app's DB session, session factory and Meta client dependencies
are overridden to use them.
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

from dotenv import load_dotenv

load_dotenv()

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    if "postgresql://" in test_db_url and "asyncpg" not in test_db_url:
        test_db_url = test_db_url.replace("postgresql://", "postgresql+asyncpg://")
    os.environ["DATABASE_URL"] = test_db_url
else:
    test_db_path = tempfile.mktemp(suffix=".db")
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

os.environ["META_APP_SECRET"] = "test-app-secret"
os.environ["META_APP_VERIFY_TOKEN"] = "test-verify-token"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.platform.db.models  # noqa: F401
from app.features.auth.models.user import User
from app.features.auth.utils.security import create_access_token
from app.features.social_media.dependencies import get_meta_client
from app.features.social_media.models.social_media import (
    PageLink,
    SocialMediaConnection,
    SocialMediaType,
)
from app.features.social_media.services.meta_client import MetaGraphClient
from app.platform.db.base import Base
from app.platform.db.session import get_db, get_session_factory

APP_SECRET = "test-app-secret"
VERIFY_TOKEN = "test-verify-token"


@pytest.fixture
async def engine():
    engine = create_async_engine(os.environ["DATABASE_URL"], poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def meta_client():
    """Graph API client double; every call returns nothing unless a test says otherwise."""
    client = MagicMock(spec=MetaGraphClient)
    client.fetch_pages = AsyncMock(return_value=[])
    client.fetch_lead_details = AsyncMock(return_value=None)
    client.fetch_message_details = AsyncMock(return_value=None)
    client.install_app = AsyncMock(return_value=True)
    return client


@pytest.fixture
async def client(session_factory, meta_client):
    """HTTP client against the app with DB and Graph API dependencies overridden."""
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_meta_client] = lambda: meta_client

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://testserver",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_user(db_session):
    user = User(
        email="owner@example.com",
        username="pageowner",
        first_name="Page",
        last_name="Owner",
        is_email_verified=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def facebook_connection(db_session, test_user):
    connection = SocialMediaConnection(
        user_id=test_user.id,
        social_media=SocialMediaType.facebook,
        user_access_token="user-access-token",
        profile_id="fb-profile-1",
    )
    db_session.add(connection)
    await db_session.commit()
    await db_session.refresh(connection)
    return connection


@pytest.fixture
async def page_link(db_session, facebook_connection):
    link = PageLink(
        page_id="P1",
        page_access_token="page-token-P1",
        page_name="Jane's Bakery",
        connection_id=facebook_connection.id,
        user_id=facebook_connection.user_id,
    )
    db_session.add(link)
    await db_session.commit()
    await db_session.refresh(link)
    return link


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token({"sub": test_user.id})
    return {"Authorization": f"Bearer {token}"}

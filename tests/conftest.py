"""Shared test fixtures for the appserver test suite."""

import os
from datetime import date, datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine

# Ensure settings can be imported without real env vars
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from appserver.modules.user_profiles.domain.models import Realm, UserProfile  # noqa: E402
from appserver.modules.user_profiles.infrastructure.database import (  # noqa: E402
    AppDbContext,
    RealmRepositoryImpl,
    UserProfileModel,
    UserProfileRepositoryImpl,
)
from appserver.shared.infrastructure.database.connection import Base  # noqa: E402
from appserver.shared.infrastructure.database.session import create_session_factory  # noqa: E402


# ── Database ──


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite engine so separate sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'appserver.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def context(session_factory):
    async with session_factory() as session:
        yield AppDbContext(session)


@pytest_asyncio.fixture
async def other_context(session_factory):
    """A second, independent request context over the same database."""
    async with session_factory() as session:
        yield AppDbContext(session)


@pytest.fixture
def realms(context):
    return RealmRepositoryImpl(context)


@pytest.fixture
def user_profiles(context):
    return UserProfileRepositoryImpl(context)


# ── Entity factories ──


@pytest.fixture
def make_realm():
    def _make(**overrides) -> Realm:
        fields = {
            "realm_id": "r1",
            "name": "EXAMPLE.COM",
            "description": "Example realm",
        }
        fields.update(overrides)
        return Realm(**fields)
    return _make


@pytest.fixture
def make_profile():
    def _make(**overrides) -> UserProfile:
        fields = {
            "user_id": "u1",
            "realm_id": "r1",
            "username": "admin",
            "email": "admin@gmail.com",
            "first_name": "Admin",
            "last_name": "Admin",
            "birthday": date(1990, 1, 1),
        }
        fields.update(overrides)
        return UserProfile(**fields)
    return _make


@pytest_asyncio.fixture
async def stored_realm(context, realms, make_realm):
    """Realm r1 committed to the store."""
    realm = await realms.add(make_realm())
    await context.commit()
    return realm


@pytest_asyncio.fixture
async def stored_profile(context, user_profiles, stored_realm, make_profile):
    """Profile u1 in realm r1 committed to the store."""
    profile = await user_profiles.add(make_profile())
    await context.commit()
    return profile


@pytest_asyncio.fixture
async def corrupted_profile(session_factory, stored_realm):
    """Profile 'legacy' written straight to the table with an email lacking '@'."""
    now = datetime.now(timezone.utc)
    async with session_factory() as session:
        await session.execute(
            insert(UserProfileModel.__table__).values(
                user_id="legacy",
                realm_id="r1",
                username="legacy",
                email="no-at-sign",
                first_name="Legacy",
                last_name="User",
                birthday=None,
                version=1,
                created_at=now,
                updated_at=now,
            )
        )
        await session.commit()
    return "legacy"

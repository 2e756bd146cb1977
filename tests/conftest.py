"""
Shared test fixtures for the portfolio tests.

Provides an in-memory database per test, an HTTP client bound to it,
the owner account and session cookies, and a fake GitHub provider.
"""

from collections.abc import AsyncGenerator, Callable, Generator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portfolio.auth.github import get_identity_provider
from portfolio.auth.session import encode_session
from portfolio.config import settings
from portfolio.database import Base, enable_sqlite_foreign_keys, get_db
from portfolio.errors import IdentityProviderError
from portfolio.main import app
from portfolio.middleware.rate_limit import reset_limiter
from portfolio.models.user import User
from portfolio.schemas.auth import GitHubEmail, GitHubProfile, Identity

# Test database URL (in-memory SQLite unless overridden)
TEST_DATABASE_URL = settings.test_database_url


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    # One shared connection, otherwise every checkout sees a fresh empty :memory: database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session. Redirects are not
    followed so guard and login redirects can be asserted.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=False,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Clock Fixtures ---


class FakeClock:
    """Deterministic clock; each call returns the current time, ``advance`` moves it."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def frozen_time():
    """
    Fixture for time-based testing using freezegun.

    Usage:
        with frozen_time("2026-02-01 12:00:00"):
            # time is frozen
    """
    from freezegun import freeze_time

    return freeze_time


# --- Owner Fixtures ---


async def _create_user(db_session: AsyncSession, email: str, name: str) -> Identity:
    user = User(name=name, email=email, avatar=None)
    db_session.add(user)
    await db_session.commit()
    return Identity(id=user.id, email=user.email, name=user.name, avatar=user.avatar)


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> Identity:
    """The site owner, provisioned ahead of any login."""
    return await _create_user(db_session, "owner@example.com", "Site Owner")


@pytest_asyncio.fixture
async def second_owner(db_session: AsyncSession) -> Identity:
    """Another account, for ownership scenarios."""
    return await _create_user(db_session, "other@example.com", "Other Owner")


@pytest.fixture
def session_headers() -> Callable[[Identity], dict[str, str]]:
    """Factory fixture for creating session cookie headers."""

    def _session_headers(identity: Identity) -> dict[str, str]:
        return {"Cookie": f"{settings.session_cookie_name}={encode_session(identity)}"}

    return _session_headers


@pytest.fixture
def owner_headers(owner: Identity, session_headers) -> dict[str, str]:
    return session_headers(owner)


# --- Identity Provider Fixtures ---


class FakeProvider:
    """Stands in for GitHub: returns a canned profile and emails for any code."""

    name = "github"

    def __init__(self):
        self.profile = GitHubProfile(
            login="octo-owner",
            name="Octo Owner",
            avatar_url="https://avatars.example.com/octo.png",
        )
        self.emails = [GitHubEmail(email="owner@example.com", primary=True, verified=True)]
        self.fail = False
        self.codes: list[str] = []

    def authorization_url(self, state: str) -> str:
        return f"https://github.example.com/authorize?state={state}"

    async def fetch_identity(self, code: str):
        self.codes.append(code)
        if self.fail:
            raise IdentityProviderError("Unauthorized")
        return self.profile, self.emails


@pytest.fixture
def fake_provider() -> Generator[FakeProvider, None, None]:
    provider = FakeProvider()
    app.dependency_overrides[get_identity_provider] = lambda: provider
    yield provider
    app.dependency_overrides.pop(get_identity_provider, None)

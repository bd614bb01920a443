"""
Pytest configuration and fixtures for testing.
"""
import os

# Settings are read at import time, so the test environment goes in first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_rsvp.db")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Awaitable, Callable
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from app.main import app
from app.db.session import Base, get_session, enable_sqlite_foreign_keys
from app.db.models import User, Event, RSVP, RSVPStatus, EventRole
from datetime import date, time, timedelta


# Test database URL - use environment variable if available (e.g. a PostgreSQL container)
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test_rsvp.db")

# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,  # Disable connection pooling for tests
    echo=False,
)
if TEST_DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(test_engine)


# Create test session factory
TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

EVENT_DAY = date.today() + timedelta(days=7)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database schema and session for each test.
    """
    # Drop all tables first to ensure clean state
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

    # Drop tables after test for complete isolation
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing API endpoints.
    Overrides the database session dependency.
    """
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for persisted users with unique emails."""
    counter = {"n": 0}

    async def _make(first_name: str = "Ada", last_name: str = "Lovelace") -> User:
        counter["n"] += 1
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}.{counter['n']}@example.com",
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_event(db_session: AsyncSession) -> Callable[..., Awaitable[Event]]:
    """Factory for persisted events; keyword overrides replace the defaults."""
    async def _make(host: User, **overrides) -> Event:
        fields = dict(
            name="Community Meetup",
            description="Monthly meetup",
            location="Main Hall",
            date=EVENT_DAY,
            time=time(18, 0),
            duration_minutes=120,
            capacity=50,
            budget=0,
        )
        fields.update(overrides)
        event = Event(host=host, participants=set(), tasks=[], **fields)
        db_session.add(event)
        await db_session.commit()
        return event

    return _make


@pytest_asyncio.fixture
async def test_host(make_user) -> User:
    """The user hosting test events."""
    return await make_user("Grace", "Hopper")


@pytest_asyncio.fixture
async def test_user(make_user) -> User:
    """Create a test user."""
    return await make_user("Ada", "Lovelace")


@pytest_asyncio.fixture
async def other_user(make_user) -> User:
    """A second attendee."""
    return await make_user("Alan", "Turing")


@pytest_asyncio.fixture
async def test_event(make_event, test_host) -> Event:
    """Create a test event."""
    return await make_event(test_host)


@pytest_asyncio.fixture
async def test_rsvp(db_session: AsyncSession, test_user: User, test_event: Event) -> RSVP:
    """An ATTENDING RSVP of test_user to test_event."""
    rsvp = RSVP(
        user=test_user,
        event=test_event,
        status=RSVPStatus.ATTENDING,
        event_role=EventRole.PARTICIPANT,
        checked_in=False,
        checked_in_at=None,
    )
    test_event.participants.add(test_user)
    db_session.add(rsvp)
    await db_session.commit()
    return rsvp

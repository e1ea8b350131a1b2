"""Pytest configuration and fixtures for backend tests."""

import os
from datetime import date, timedelta
from typing import AsyncGenerator
from unittest.mock import patch

# Keep module-level engines off the network during import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sleeptrack.core.database import Base, get_db
from sleeptrack.main import app as main_app
from sleeptrack.models import CalendarEvent, JournalEntry, SleepGoal, SleepLog, User
from sleeptrack.services.user_settings import get_settings_store


# -------------------------------------------------------------------------
# Database Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
async def async_engine():
    """Create an async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """Create a FastAPI app instance with test database."""

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture(autouse=True)
def reset_settings_store():
    """Settings are process-wide; start every test from defaults."""
    get_settings_store().clear()
    yield
    get_settings_store().clear()


# -------------------------------------------------------------------------
# User Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    from sleeptrack.core.security import get_password_hash

    user = User(
        email="test@example.com",
        password_hash=get_password_hash("testpassword123"),
        display_name="Test User",
        timezone="UTC",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second account, for ownership checks."""
    user = User(email="other@example.com", display_name="Other User")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def session_store() -> dict:
    return {}


@pytest.fixture
async def auth_client(
    app: FastAPI,
    test_user: User,
    session_store: dict,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an authenticated HTTP client."""

    async def mock_create_session(user_id: int, user_data: dict) -> str:
        session_id = f"test_session_{user_id}"
        session_store[session_id] = {"user_id": user_id, **user_data}
        return session_id

    async def mock_get_session(session_id: str) -> dict | None:
        return session_store.get(session_id)

    async def mock_delete_session(session_id: str) -> bool:
        return session_store.pop(session_id, None) is not None

    # Patch where the names are looked up, not where they are defined
    with patch("sleeptrack.core.session.get_session", mock_get_session):
        with patch("sleeptrack.api.v1.endpoints.auth.create_session", mock_create_session):
            with patch("sleeptrack.api.v1.endpoints.auth.delete_session", mock_delete_session):
                session_id = await mock_create_session(
                    test_user.id,
                    {"email": test_user.email, "display_name": test_user.display_name},
                )

                async with AsyncClient(
                    transport=ASGITransport(app=app),
                    base_url="http://test",
                    cookies={"session_id": session_id},
                ) as ac:
                    yield ac


# -------------------------------------------------------------------------
# Sleep Data Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
async def sample_logs(db_session: AsyncSession, test_user: User) -> list[SleepLog]:
    """Seven consecutive nights ending today, oldest first.

    Durations in hours: 6, 8, 9, 7, 8, 6, 8.
    """
    nights = [
        ("00:00", "06:00", 3, ["Caffeine"]),
        ("22:00", "06:00", 4, ["Exercise"]),
        ("21:30", "06:30", 5, ["Exercise", "Read book"]),
        ("23:00", "06:00", 3, ["Stress"]),
        ("23:00", "07:00", 4, []),
        ("01:00", "07:00", 2, ["Caffeine", "Screen time"]),
        ("22:30", "06:30", 4, ["Read book"]),
    ]
    today = date.today()
    logs = []
    for offset, (bedtime, wake_time, quality, factors) in enumerate(nights):
        log = SleepLog(
            user_id=test_user.id,
            date=today - timedelta(days=len(nights) - 1 - offset),
            bedtime=bedtime,
            wake_time=wake_time,
            quality=quality,
            factors=factors,
        )
        db_session.add(log)
        logs.append(log)

    await db_session.commit()
    return logs


@pytest.fixture
async def saved_goal(db_session: AsyncSession, test_user: User) -> SleepGoal:
    goal = SleepGoal(user_id=test_user.id, goal_hours=7.5)
    db_session.add(goal)
    await db_session.commit()
    return goal


@pytest.fixture
async def sample_journal(db_session: AsyncSession, test_user: User) -> list[JournalEntry]:
    today = date.today()
    entries = [
        JournalEntry(user_id=test_user.id, note="Woke up twice", date=today - timedelta(days=1)),
        JournalEntry(user_id=test_user.id, note="Slept like a rock", date=today),
    ]
    db_session.add_all(entries)
    await db_session.commit()
    return entries


@pytest.fixture
async def sample_events(db_session: AsyncSession, test_user: User) -> list[CalendarEvent]:
    events = [
        CalendarEvent(user_id=test_user.id, date=date(2024, 3, 15), title="Late flight", color="red"),
        CalendarEvent(user_id=test_user.id, date=date(2024, 3, 1), title="Start routine"),
        CalendarEvent(user_id=test_user.id, date=date(2024, 4, 2), title="Trip", color="blue"),
    ]
    db_session.add_all(events)
    await db_session.commit()
    return events

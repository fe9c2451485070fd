"""Shared fixtures: an in-memory SQLite database, model factories and an API client."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.security import create_tokens
from app.database import Base, get_db
from app.models.event import Event
from app.models.profile import Musician, Venue
from app.models.user import User


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(db):
    async def _make_user(email: str | None = None, **kwargs) -> User:
        kwargs.setdefault("roles", ["signed-in"])
        kwargs.setdefault("primary_role", "user")
        user = User(
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            password_hash="not-a-real-hash",
            **kwargs,
        )
        db.add(user)
        await db.flush()
        return user

    return _make_user


@pytest.fixture
def make_musician(db):
    async def _make_musician(user: User, **kwargs) -> Musician:
        kwargs.setdefault("name", "Test Musician")
        kwargs.setdefault("email", user.email)
        musician = Musician(
            user_id=user.id,
            genres=kwargs.pop("genres", ["jazz"]),
            instruments=kwargs.pop("instruments", ["guitar"]),
            social_links=[],
            **kwargs,
        )
        db.add(musician)
        await db.flush()
        return musician

    return _make_musician


@pytest.fixture
def make_venue(db):
    async def _make_venue(owner: User, **kwargs) -> Venue:
        kwargs.setdefault("name", "The Blue Room")
        venue = Venue(
            owner_id=owner.id,
            genres=[],
            amenities=[],
            social_links=[],
            additional_pictures=[],
            hours={},
            **kwargs,
        )
        db.add(venue)
        await db.flush()
        return venue

    return _make_venue


@pytest.fixture
def make_event(db):
    async def _make_event(venue: Venue, **kwargs) -> Event:
        kwargs.setdefault("title", "Friday Night Jazz")
        kwargs.setdefault("date", datetime.now(UTC) + timedelta(days=14))
        event = Event(
            venue_id=venue.id,
            created_by_id=venue.owner_id,
            genres=[],
            equipment=[],
            recurring_days=[],
            **kwargs,
        )
        db.add(event)
        await db.flush()
        return event

    return _make_event


@pytest_asyncio.fixture
async def musician_user(make_user):
    return await make_user(
        email="mia@example.com", first_name="Mia", last_name="Stone", primary_role="musician",
        roles=["signed-in", "musician"],
    )


@pytest_asyncio.fixture
async def venue_owner(make_user):
    return await make_user(
        email="owner@example.com", first_name="Olly", last_name="Owner", primary_role="venue",
        roles=["signed-in", "venueOwner"],
    )


@pytest_asyncio.fixture
async def musician(make_musician, musician_user):
    return await make_musician(musician_user, name="Mia Stone", stage_name="Mia & The Tides")


@pytest_asyncio.fixture
async def venue(make_venue, venue_owner):
    return await make_venue(venue_owner)


@pytest_asyncio.fixture
async def event(make_event, venue):
    return await make_event(venue)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        tokens = create_tokens(str(user.id), user.email, user.primary_role)
        return {"Authorization": f"Bearer {tokens['access_token']}"}

    return _auth_headers


@pytest_asyncio.fixture
async def client(db):
    from app.main import app

    async def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

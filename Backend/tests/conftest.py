import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import StaticPool  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from eventhub.database import get_db  # noqa: E402
from eventhub.dependencies import get_current_user  # noqa: E402
from eventhub.main import app  # noqa: E402
from eventhub.models import Base  # noqa: E402
from eventhub.models.assistance import Assistance  # noqa: E402
from eventhub.models.enums import AssistanceFormat, EventCategory, EventFormat  # noqa: E402
from eventhub.models.event import Event  # noqa: E402
from eventhub.models.user import User  # noqa: E402
from eventhub.services.auth_service import hash_password  # noqa: E402

TEST_PASSWORD = "password123"


async def add_user(db: AsyncSession, email: str, name: str = "Test", last_name: str = "User") -> User:
    user = User(
        name=name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        image_url="https://img.example.com/avatar.png",
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def add_event(db: AsyncSession, owner: User, starts_in: timedelta, **overrides) -> Event:
    """Insert a two hour event starting ``starts_in`` from now (negative for past events)."""
    start = datetime.now(timezone.utc) + starts_in
    values = {
        "title": "Jazz night",
        "owner_id": owner.id,
        "creation_date": datetime.now(timezone.utc) - timedelta(days=30),
        "image_url": "https://img.example.com/event.png",
        "format": EventFormat.face_to_face,
        "location": "Blue Note, Madrid",
        "description": "Live jazz",
        "start_date": start,
        "end_date": start + timedelta(hours=2),
        "max_attendees": 100,
        "ticket_price": 12.5,
        "category": EventCategory.music,
    }
    values.update(overrides)
    event = Event(**values)
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


async def add_assistance(
    db: AsyncSession, user: User, event: Event, rating: float | None = None, comment: str | None = None
) -> Assistance:
    assistance = Assistance(
        user_id=user.id,
        event_id=event.id,
        format=AssistanceFormat.face_to_face,
        rating=rating,
        comment=comment,
    )
    db.add(assistance)
    await db.commit()
    return assistance


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await add_user(db_session, "test@example.com", name="Ann", last_name="Lee")


@pytest.fixture
async def second_user(db_session: AsyncSession) -> User:
    return await add_user(db_session, "friend@example.com", name="Bob", last_name="Stone")


@pytest.fixture
async def third_user(db_session: AsyncSession) -> User:
    return await add_user(db_session, "third@example.com", name="Carla", last_name="Ruiz")


@pytest.fixture
async def future_event(db_session: AsyncSession, test_user: User) -> Event:
    return await add_event(db_session, test_user, timedelta(days=7))


@pytest.fixture
async def finished_event(db_session: AsyncSession, test_user: User) -> Event:
    return await add_event(db_session, test_user, timedelta(days=-7), title="Past concert")


def _override_db(db_engine):
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db


@pytest.fixture
async def client(db_engine, test_user: User) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_db] = _override_db(db_engine)
    app.dependency_overrides[get_current_user] = lambda: test_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Client that goes through real bearer token authentication."""
    app.dependency_overrides[get_db] = _override_db(db_engine)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def act_as():
    """Switch the authenticated user for the following requests."""

    def _act_as(user: User):
        app.dependency_overrides[get_current_user] = lambda: user

    return _act_as

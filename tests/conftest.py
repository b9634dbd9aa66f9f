"""
Pytest fixtures for backend tests.
"""

import os
import pytest
import pytest_asyncio
from typing import AsyncGenerator, List, Tuple
from uuid import UUID

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("REDIS_URL", None)

from mentor_chat.main import app
from mentor_chat.core.database import get_db
from mentor_chat.models import Base
from mentor_chat.routers.chat.dependencies import get_delivery_channel
from mentor_chat.services.chat.delivery import DeliveryChannel
from mentor_chat.services.profile_service import ProfileService


class RecordingChannel(DeliveryChannel):
    """Collects notifications instead of pushing them to sockets."""

    def __init__(self):
        self.events: List[Tuple[UUID, dict]] = []

    async def notify(self, chat_room_id: UUID, payload: dict) -> None:
        self.events.append((chat_room_id, payload))


class FailingChannel(DeliveryChannel):
    async def notify(self, chat_room_id: UUID, payload: dict) -> None:
        raise ConnectionError("pub/sub unreachable")


# --- Fixtures ---

@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """File-backed SQLite so several sessions can run side by side."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def delivery() -> RecordingChannel:
    return RecordingChannel()


@pytest_asyncio.fixture(scope="function")
async def async_client(session_factory, delivery) -> AsyncGenerator[AsyncClient, None]:
    """
    Async test client with the database and delivery channel swapped out.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_delivery_channel] = lambda: delivery
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def mentor(db_session):
    return await ProfileService(db_session).create_profile({
        "username": "mentor_m",
        "full_name": "Mentor M",
        "user_type": "mentor",
    })


@pytest_asyncio.fixture
async def patient(db_session):
    return await ProfileService(db_session).create_profile({
        "username": "patient_p",
        "full_name": "Patient P",
        "user_type": "patient",
    })


@pytest_asyncio.fixture
async def stranger(db_session):
    return await ProfileService(db_session).create_profile({
        "username": "someone_else",
        "user_type": "patient",
    })

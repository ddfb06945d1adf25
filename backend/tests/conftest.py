"""Test fixtures for the shelter backend."""
from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from shelter.core.config import get_settings
from shelter.core.security import get_password_hash
from shelter.db.base import Base
from shelter.db.session import create_engine_for_url, dispose_engine, get_sessionmaker
from shelter.main import app
from shelter.models import Animal, AnimalSex, User, UserStatus

CARETAKER_PASSWORD = "Carer1234!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_engine_for_url(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def session(reset_database: None, db_url: str) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the freshly created schema."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as db_session:
        yield db_session


async def create_caretaker(
    session: AsyncSession,
    *,
    email: str | None = None,
    full_name: str = "Casey Carer",
    password: str = CARETAKER_PASSWORD,
    status: UserStatus = UserStatus.ACTIVE,
) -> User:
    user = User(
        email=email or f"carer-{uuid.uuid4().hex[:8]}@example.com",
        hashed_password=get_password_hash(password),
        full_name=full_name,
        status=status,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_animal(
    session: AsyncSession,
    *,
    created_by: uuid.UUID,
    name: str = "Rex",
    owner_name: str = "Shelter",
    active: bool = True,
) -> Animal:
    animal = Animal(
        name=name,
        sex=AnimalSex.MALE,
        coat="Tabby",
        age="2 years",
        owner_name=owner_name,
        treatment_for="Skin infection",
        treatment="Antibiotics",
        active=active,
        created_by=created_by,
    )
    session.add(animal)
    await session.commit()
    await session.refresh(animal)
    return animal


@pytest_asyncio.fixture()
async def caretaker(session: AsyncSession) -> User:
    """An active caretaker to act as the caller."""
    return await create_caretaker(session, email="casey@example.com")


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client, a signed-in caretaker and their auth headers."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as db_session:
        user = await create_caretaker(
            db_session, email="manager@example.com", full_name="Morgan Manager"
        )
        context: dict[str, object] = {
            "caretaker_id": user.id,
            "caretaker_email": user.email,
            "caretaker_password": CARETAKER_PASSWORD,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/api/v1/auth/token",
            data={"username": context["caretaker_email"], "password": CARETAKER_PASSWORD},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200
        context["client"] = client
        context["headers"] = {"Authorization": f"Bearer {response.json()['access_token']}"}
        yield context


@pytest.fixture()
def make_caretaker(session: AsyncSession):
    """Factory creating additional caretakers in the test session."""

    async def _make(**kwargs: object) -> User:
        return await create_caretaker(session, **kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def make_animal(session: AsyncSession, caretaker: User):
    """Factory creating animals owned by the default caretaker."""

    async def _make(**kwargs: object) -> Animal:
        kwargs.setdefault("created_by", caretaker.id)
        return await create_animal(session, **kwargs)  # type: ignore[arg-type]

    return _make

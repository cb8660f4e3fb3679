import os
import tempfile

# Настройки читаются при импорте core.config, поэтому задаём окружение до импорта приложения
TEST_DB_DIR = tempfile.mkdtemp(prefix="forkeep-tests-")
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "api.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DEBUG"] = "false"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from models.base import Base
from models.match import Match  # noqa: F401
from models.message import Message  # noqa: F401
from models.swipe import Swipe  # noqa: F401
from models.user import User


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db):
    """Фабрика пользователей: create(id, gender, looking_for, **поля)."""

    async def create(user_id, gender="Male", looking_for=("Everyone",), **fields):
        data = {
            "email": f"user{user_id}@example.com",
            "password_hash": "not-a-real-hash",
            "name": f"User {user_id}",
            "age": 25,
            "photo_url": "https://example.com/photo.jpg",
            "photos": [],
        }
        data.update(fields)
        user = User(id=user_id, gender=gender, looking_for_genders=list(looking_for), **data)
        db.add(user)
        await db.commit()
        return user

    return create


@pytest.fixture
def client():
    # Новая пустая БД на каждый тест: таблицы создаёт startup приложения
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    from main import app

    with TestClient(app) as test_client:
        yield test_client

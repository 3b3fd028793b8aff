"""Shared test fixtures - uses async SQLite for isolated testing."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from affirmly.db.database import Base, Database, get_database, get_db
from affirmly.db.redis import get_redis
from affirmly.models.affirmation import Affirmation
from affirmly.models.user import User

# In-memory SQLite for tests (no Docker needed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///file::memory:?cache=shared&uri=true"

test_database = Database(TEST_DATABASE_URL)


async def _override_get_db():
    async with test_database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the draft store."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value
        if ex is not None:
            self.ttls[key] = ex

    async def delete(self, *keys):
        for key in keys:
            self.data.pop(key, None)
            self.ttls.pop(key, None)

    def load(self, key):
        return json.loads(self.data[key])


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    # Import all models so Base.metadata knows about them
    import affirmly.models  # noqa: F401

    async with test_database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db():
    """Direct async DB session for service-level tests."""
    async with test_database.session_factory() as session:
        yield session
        await session.commit()


@pytest.fixture
def session_factory():
    """Open extra independent sessions, e.g. to interleave two requests."""
    return test_database.session_factory


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
async def client(fake_redis):
    """Async HTTP test client with test DB and fake Redis overrides."""
    from affirmly.main import app

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_database] = lambda: test_database
    app.dependency_overrides[get_redis] = lambda: fake_redis
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_affirmation(db):
    async def _make(content="I am enough", category="confidence", tags=None, is_active=True):
        affirmation = Affirmation(
            content=content,
            category=category,
            tags=tags or [],
            created_by="admin",
            is_active=is_active,
        )
        db.add(affirmation)
        await db.flush()
        return affirmation

    return _make


@pytest.fixture
def make_user(db):
    async def _make(email="ada@example.com", goals=None, current_streak=0):
        user = User(
            email=email,
            name="Ada",
            password_hash="not-a-real-hash",
            goals=goals or [],
            current_streak=current_streak,
        )
        db.add(user)
        await db.flush()
        return user

    return _make

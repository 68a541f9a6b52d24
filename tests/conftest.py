import os

# The app's module-level engine is never used in tests: every test gets its own
# SQLite file and overrides get_async_session.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-long-enough-for-hs256-signing")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from db import item, users  # noqa: E402,F401
from db.database import Base, get_async_session  # noqa: E402
from main import app as fastapi_app  # noqa: E402

PASSWORD = "correct-horse-battery"


async def create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def engine(tmp_path):
    # NullPool: connections never outlive the event loop that opened them
    return create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'stockmaster.db'}", poolclass=NullPool)


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def tables(engine):
    await create_tables(engine)


@pytest.fixture
async def db(session_maker, tables):
    async with session_maker() as session:
        yield session


@pytest.fixture
def app(session_maker):
    async def _get_test_session():
        async with session_maker() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = _get_test_session
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def api(app, tables):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def login_headers(api):
    """Register ``email`` and return bearer headers for it."""

    async def _login_headers(email: str, password: str = PASSWORD) -> dict:
        r = await api.post("/auth/register", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        r = await api.post("/auth/jwt/login", data={"username": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login_headers

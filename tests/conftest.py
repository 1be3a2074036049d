"""Test fixtures: a fresh in-memory database per test.

Learn: Each test gets its own SQLite engine (aiosqlite + StaticPool so
every session shares the single in-memory connection). Tables are
created from the ORM metadata; nothing outlives the test.

The environment is set before `inkwell` is imported because settings
are read once at import time.
"""

import os

os.environ.setdefault("INKWELL_ENVIRONMENT", "test")
os.environ.setdefault("INKWELL_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("INKWELL_JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("INKWELL_BCRYPT_ROUNDS", "4")

from http.cookies import SimpleCookie  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from inkwell.db.engine import create_tables, get_db  # noqa: E402
from inkwell.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with get_db pointed at the test database.

    Learn: Auth is NOT overridden, so tests go through the real cookie
    pipeline. The client's cookie jar is cleared after every helper
    call, so each request only carries the cookie a test passes in.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ─── Helpers ─────────────────────────────────────────────


def session_cookie(response):
    """Return the `token` Morsel from a response's Set-Cookie headers."""
    for header in response.headers.get_list("set-cookie"):
        jar = SimpleCookie()
        jar.load(header)
        if "token" in jar:
            return jar["token"]
    return None


def as_cookie(token: str) -> dict:
    return {"Cookie": f"token={token}"}


async def register(client, name="Ann", email="a@x.com", password="secret1"):
    """Register a user and return (user_json, token)."""
    r = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    client.cookies.clear()
    return r.json()["user"], session_cookie(r).value


async def create_post(client, token, title="Hello World", content="hi", **extra):
    r = await client.post(
        "/api/posts",
        json={"title": title, "content": content, **extra},
        headers=as_cookie(token),
    )
    assert r.status_code == 201, r.text
    return r.json()["post"]

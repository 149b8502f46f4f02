"""
Shared pytest fixtures for the Kazi API tests.

Every test gets a fresh in-memory SQLite database. The API's session
dependency is overridden so requests run against it through httpx.
"""

import os

# Settings are read at import time, so the environment is prepared first
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only-0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAILS"] = "admin@kazi.io"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kazi.db import Base, enable_sqlite_foreign_keys, get_db_session
from kazi.main import app
from kazi.models.user import User
from kazi.services.credentials import hash_password

PASSWORD = "Str0ng!Pass"
ADMIN_EMAIL = "admin@kazi.io"


@pytest.fixture
async def engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def make_user(session):
    """Insert a user directly, bypassing the API."""

    async def _make_user(email="someone@kazi.io", password=PASSWORD, role="User", **fields):
        user = User(email=email, password_hash=hash_password(password), role=role, **fields)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def client(session_factory):
    """HTTP client talking to the app in-process."""

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def register(client, email, password=PASSWORD, **extra):
    """Register through the API and return the created user JSON."""
    response = await client.post(
        "/api/auth/register", json={"email": email, "password": password, **extra}
    )
    assert response.status_code == 200, response.text
    return response.json()


async def login_headers(client, email, password=PASSWORD):
    """Log in through the API and return an Authorization header."""
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def alice(client):
    user = await register(client, "alice@kazi.io", firstName="Alice")
    return {"id": user["userID"], "headers": await login_headers(client, "alice@kazi.io")}


@pytest.fixture
async def bob(client):
    user = await register(client, "bob@kazi.io", firstName="Bob")
    return {"id": user["userID"], "headers": await login_headers(client, "bob@kazi.io")}


@pytest.fixture
async def admin(client):
    """ADMIN_EMAILS makes this registration an Admin."""
    user = await register(client, ADMIN_EMAIL)
    assert user["role"] == "Admin"
    return {"id": user["userID"], "headers": await login_headers(client, ADMIN_EMAIL)}


async def create_budget(client, headers, amount=100.00, category="Food", month_year="2024-01-01"):
    response = await client.post(
        "/api/budgets",
        json={"category": category, "amount": amount, "monthYear": month_year},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_expense(client, headers, amount=10.00, budget_id=None, **extra):
    body = {"category": "Food", "amount": amount, "date": "2024-01-15", **extra}
    if budget_id is not None:
        body["budgetID"] = budget_id
    return await client.post("/api/expenses", json=body, headers=headers)

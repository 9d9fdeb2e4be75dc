"""
MedMall Back Office - Test Configuration (conftest.py)
=======================================================

What:  Shared fixtures: an isolated database per test, an API client wired to
       it, and a token factory for the bearer-auth pipeline.
How:   Environment variables are set before any medmall import so the
       module-level settings object never sees a production value. Each test
       gets a fresh in-memory SQLite database (aiosqlite + StaticPool) with
       foreign keys enforced, created from the ORM metadata.

Fixtures:
    engine          per-test async engine with all tables created
    session_factory async_sessionmaker bound to that engine
    db_session      one AsyncSession for service-level tests
    client          httpx AsyncClient talking to the app in-process
    make_token      builds signed JWTs with chosen roles/permissions
    admin_headers   Authorization header for an Admin principal
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-used-only-by-the-test-suite"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["SEED_REFERENCE_DATA"] = "false"

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import medmall.models  # noqa: F401
from medmall.config import settings
from medmall.database import Base, get_db_session


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    A session for calling services directly.

    Usage:
        async def test_create(db_session):
            entity = await product_category_service.create(db_session, payload)
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory):
    """
    HTTPX AsyncClient bound to the FastAPI app and the per-test database.

    get_db_session is overridden with the same commit/rollback behaviour as
    production, only against the test engine.
    """
    from medmall.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    """
    Factory for signed bearer tokens.

    Usage:
        token = make_token(roles=["Admin"], permissions=["refunds.view"])
    """

    def _make_token(
        roles=("Admin",),
        permissions=(),
        subject=None,
        expires_in=timedelta(hours=1),
        secret=None,
    ) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": subject or str(uuid.uuid4()),
            "name": "Test Operator",
            "roles": list(roles),
            "permissions": list(permissions),
            "iat": now,
            "exp": now + expires_in,
        }
        return jwt.encode(
            claims,
            secret or settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

    return _make_token


@pytest.fixture
def admin_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}

"""Service test fixtures — async DB, FastAPI test client and signed-in admins.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine through a real
      DatabaseSessionManager (same rollback and error mapping as production)
    - db_manager patched so the readiness probe sees the test database
    - Admin fixtures are seeded directly; `login` signs the shared client in

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (ADR: PostgreSQL-specific features not exercised here)
    - One AsyncClient per test: its cookie jar holds the signed session, so
      logging in as another admin simply replaces the cookie
"""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from argan_hr.db.base import Base
from argan_hr.infrastructure.database import get_db, DatabaseSessionManager
from argan_hr.infrastructure.passwords import hash_password
from argan_hr.models.admin import Admin
import argan_hr.infrastructure.database as db_module
from argan_hr.main import app

PASSWORD = "Password123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_admin(test_db):
    """Factory: insert an admin with the shared test password."""
    async def _make(
        email: str, role: str = "ADMIN", name: str | None = None,
        is_active: bool = True,
    ) -> Admin:
        admin = Admin(
            email=email,
            name=name or email.split("@")[0].title(),
            password_hash=hash_password(PASSWORD),
            role=role,
            is_active=is_active,
        )
        test_db.add(admin)
        await test_db.commit()
        await test_db.refresh(admin)
        return admin
    return _make


@pytest.fixture
async def super_admin(make_admin):
    return await make_admin("root@argan.test", role="SUPER_ADMIN", name="Root")


@pytest.fixture
async def admin(make_admin):
    return await make_admin("staff@argan.test", role="ADMIN", name="Staff")


@pytest.fixture
async def read_only(make_admin):
    return await make_admin("viewer@argan.test", role="READ_ONLY", name="Viewer")


async def _login(client: AsyncClient, email: str, password: str = PASSWORD):
    res = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res


@pytest.fixture
async def as_super_admin(client, super_admin):
    await _login(client, super_admin.email)
    return client


@pytest.fixture
async def as_admin(client, admin):
    await _login(client, admin.email)
    return client


@pytest.fixture
async def as_read_only(client, read_only):
    await _login(client, read_only.email)
    return client


def _client_payload(**overrides) -> dict:
    """Minimal valid body for POST /api/v1/clients."""
    body = {
        "company_name": "Acme Ltd",
        "service_tier": "TIER_1",
        "contact_name": "Jane Smith",
        "contact_email": "jane@acme.test",
        "monthly_retainer": 500,
        "sector": "Retail",
        "payment_method": "DIRECT_DEBIT",
        "contract": {
            "contract_start_date": date(2026, 1, 1).isoformat(),
        },
    }
    body.update(overrides)
    return body


@pytest.fixture
async def seed_client(as_admin):
    """Create a client through the API (signed in as ADMIN); returns the detail body."""
    res = await as_admin.post("/api/v1/clients", json=_client_payload())
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def login():
    """`await login(client, email)` signs the client in (asserts 200)."""
    return _login


@pytest.fixture
def client_payload():
    """`client_payload(**overrides)` builds a valid client create body."""
    return _client_payload

"""Seed script — creates or resets an admin, then releases its engine."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from argan_hr.config import Settings
from argan_hr.db.base import Base
from argan_hr.infrastructure.passwords import verify_password
from argan_hr.models.admin import Admin
from scripts import seed_admin


@pytest.fixture
async def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"
    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    monkeypatch.setattr(seed_admin, "get_settings", lambda: Settings(database_url=url))
    return url


@pytest.fixture
def disposed(monkeypatch):
    engines = []
    original = AsyncEngine.dispose

    async def _dispose(self, close: bool = True):
        engines.append(self)
        await original(self, close)

    monkeypatch.setattr(AsyncEngine, "dispose", _dispose)
    return engines


async def _stored_admin(url: str, email: str):
    engine = create_async_engine(url)
    try:
        async with engine.connect() as conn:
            row = (await conn.execute(select(Admin).where(Admin.email == email))).first()
    finally:
        await engine.dispose()
    return row


async def test_creates_admin_and_disposes_engine(database_url, disposed):
    code = await seed_admin.seed("ops@argan.test", "Ops", "StrongPass123", "SUPER_ADMIN", False)
    assert code == 0
    assert len(disposed) == 1

    row = await _stored_admin(database_url, "ops@argan.test")
    assert row.role == "SUPER_ADMIN"
    assert verify_password(row.password_hash, "StrongPass123")


async def test_existing_admin_without_reset_is_refused(database_url, disposed):
    await seed_admin.seed("ops@argan.test", "Ops", "StrongPass123", "ADMIN", False)
    code = await seed_admin.seed("ops@argan.test", "Ops", "OtherPass123", "ADMIN", False)
    assert code == 2
    assert len(disposed) == 2


async def test_reset_password(database_url, disposed):
    await seed_admin.seed("ops@argan.test", "Ops", "StrongPass123", "ADMIN", False)
    code = await seed_admin.seed("ops@argan.test", None, "NewPass12345", "ADMIN", True)
    assert code == 0
    row = await _stored_admin(database_url, "ops@argan.test")
    assert verify_password(row.password_hash, "NewPass12345")


async def test_reset_unknown_admin_fails(database_url, disposed):
    code = await seed_admin.seed("nobody@argan.test", None, "NewPass12345", "ADMIN", True)
    assert code == 2
    assert len(disposed) == 1

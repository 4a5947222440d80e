"""Health probes — liveness, readiness and configuration warnings."""

import argan_hr.api.routes.health as health
import argan_hr.infrastructure.database as db_module


class _DownManager:
    async def health_check(self) -> bool:
        return False


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready_when_database_up(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "healthy",
        "checks": {"database": "healthy", "configuration": "healthy"},
        "warnings": [],
    }


async def test_configuration_warning_degrades(client, monkeypatch):
    monkeypatch.setattr(
        health, "configuration_warnings",
        lambda: ["session_secret uses the development default"],
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "degraded"
    assert res.json()["checks"]["configuration"] == "warning"


async def test_database_down_is_unhealthy(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", _DownManager())
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["status"] == "unhealthy"
    assert res.json()["checks"]["database"] == "unhealthy"


async def test_no_session_needed(client):
    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 401
    assert (await client.get("/api/v1/health/ready")).status_code == 200

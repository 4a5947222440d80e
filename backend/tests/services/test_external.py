"""External API — availability echo and the per-IP fixed-window rate limit."""

import pytest

import argan_hr.api.routes.external as external
from argan_hr.infrastructure.rate_limit import FixedWindowRateLimiter


@pytest.fixture
def small_limiter(monkeypatch):
    limiter = FixedWindowRateLimiter(2, 60)
    monkeypatch.setattr(external, "limiter", limiter)
    return limiter


async def test_get_reports_availability(client, small_limiter):
    res = await client.get("/api/v1/external")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "External API is available"
    assert body["endpoint"] == "/api/v1/external"
    assert body["version"] == "v1"
    assert res.headers["X-RateLimit-Limit"] == "2"
    assert res.headers["X-RateLimit-Remaining"] == "1"


async def test_post_echoes_payload_without_session(client, small_limiter):
    res = await client.post("/api/v1/external", json={"event": "ping", "n": 3})
    assert res.status_code == 200
    assert res.json()["message"] == "External POST received"
    assert res.json()["received_data"] == {"event": "ping", "n": 3}


async def test_limit_exceeded_returns_429(client, small_limiter):
    assert (await client.get("/api/v1/external")).status_code == 200
    assert (await client.post("/api/v1/external", json={})).status_code == 200

    res = await client.get("/api/v1/external")
    assert res.status_code == 429
    assert res.json()["error"]["code"] == "RATE_LIMITED"
    assert 1 <= int(res.headers["Retry-After"]) <= 60


async def test_limit_window_resets(client, small_limiter):
    await client.get("/api/v1/external")
    await client.get("/api/v1/external")
    small_limiter.reset()
    assert (await client.get("/api/v1/external")).status_code == 200

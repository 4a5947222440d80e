"""Dashboard — active-client metrics, renewal window, recent clients and deadlines."""

from datetime import date

import pytest

from argan_hr.core import clock


@pytest.fixture
def today(monkeypatch):
    """Pin the dashboard's notion of today."""
    def _pin(value: date):
        monkeypatch.setattr(clock, "today", lambda: value)
    return _pin


async def test_metrics_count_active_clients_only(as_admin, seed_client, client_payload, today):
    today(date(2026, 12, 15))
    await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Beta", contact_email="b@beta.test",
        service_tier="AD_HOC", monthly_retainer=250.5,
    ))
    archived = (await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Gamma", contact_email="g@gamma.test", monthly_retainer=1000,
    ))).json()
    await as_admin.delete(f"/api/v1/clients/{archived['id']}")

    body = (await as_admin.get("/api/v1/dashboard/metrics")).json()
    assert body["total_clients"] == 2
    assert body["tier_breakdown"]["TIER_1"] == 1
    assert body["tier_breakdown"]["AD_HOC"] == 1
    assert body["tier_breakdown"]["DOC_ONLY"] == 0
    assert body["total_monthly_revenue"] == 750.5
    # Both active clients renew on 2027-01-01, inside the 30 day window.
    assert body["upcoming_renewals"] == 2


async def test_renewals_outside_window_not_counted(as_admin, seed_client, today):
    today(date(2026, 6, 1))
    body = (await as_admin.get("/api/v1/dashboard/metrics")).json()
    assert body["upcoming_renewals"] == 0

    today(date(2027, 1, 2))
    body = (await as_admin.get("/api/v1/dashboard/metrics")).json()
    assert body["upcoming_renewals"] == 0


async def test_recent_clients_newest_first(as_admin, seed_client, client_payload):
    await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Beta", contact_email="b@beta.test",
    ))
    body = (await as_admin.get("/api/v1/dashboard/recent-clients", params={"limit": 1})).json()
    assert [c["company_name"] for c in body] == ["Beta"]

    res = await as_admin.get("/api/v1/dashboard/recent-clients", params={"limit": 0})
    assert res.status_code == 400


async def test_action_deadlines_flag_overdue(as_admin, seed_client, today):
    today(date(2026, 11, 10))
    case = (await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/cases",
        json={"title": "Grievance", "escalated_by": "Jane"},
    )).json()
    later = (await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/cases",
        json={"title": "Absence", "escalated_by": "Jane"},
    )).json()
    party = {
        "party1_name": "Jane", "party1_type": "CLIENT",
        "party2_name": "Argan", "party2_type": "ARGAN", "content": "Call",
        "action_required": "Send letter", "action_required_by": "ARGAN",
        "is_active_action": True,
    }
    await as_admin.post(f"/api/v1/cases/{case['id']}/interactions", json={
        **party, "action_required_by_date": "2026-11-01",
    })
    await as_admin.post(f"/api/v1/cases/{later['id']}/interactions", json={
        **party, "action_required_by_date": "2026-12-01",
    })
    # No due date: not a deadline.
    await as_admin.post(f"/api/v1/cases/{later['id']}/interactions", json={
        **party, "is_active_action": False,
    })

    body = (await as_admin.get("/api/v1/dashboard/actions")).json()
    assert [(a["case_number"], a["overdue"]) for a in body] == [
        ("CASE-0001", True), ("CASE-0002", False),
    ]
    assert body[0]["company_name"] == "Acme Ltd"

    limited = (await as_admin.get("/api/v1/dashboard/actions", params={"limit": 1})).json()
    assert len(limited) == 1

"""Cases — per-client references, filtered lists, updates and cascade delete."""

from sqlalchemy import func, select

from argan_hr.models.case import CaseFile, CaseInteraction


def _case(**overrides):
    body = {"title": "Grievance from warehouse team", "escalated_by": "Jane Smith"}
    body.update(overrides)
    return body


async def _open(client, client_id, **overrides):
    res = await client.post(f"/api/v1/clients/{client_id}/cases", json=_case(**overrides))
    assert res.status_code == 201, res.text
    return res.json()


async def test_case_numbers_are_per_client(as_admin, seed_client, client_payload):
    other = (await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Other", contact_email="o@other.test",
    ))).json()

    first = await _open(as_admin, seed_client["id"])
    second = await _open(as_admin, seed_client["id"], title="Absence review")
    elsewhere = await _open(as_admin, other["id"])

    assert first["case_number"] == "CASE-0001"
    assert second["case_number"] == "CASE-0002"
    assert elsewhere["case_number"] == "CASE-0001"
    assert first["status"] == "OPEN"
    assert first["company_name"] == "Acme Ltd"
    assert first["interaction_count"] == 0


async def test_create_validates_text_and_client(as_admin, seed_client):
    res = await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/cases", json=_case(title="   "),
    )
    assert res.status_code == 400

    res = await as_admin.post("/api/v1/clients/999/cases", json=_case())
    assert res.status_code == 404


async def test_client_case_list_filters(as_admin, seed_client):
    cid = seed_client["id"]
    await _open(as_admin, cid, assigned_to="Sam")
    await _open(as_admin, cid, title="Disciplinary hearing", status="AWAITING",
                action_required="Send invite", action_required_by="CLIENT")
    await _open(as_admin, cid, title="Closed matter", status="CLOSED")
    url = f"/api/v1/clients/{cid}/cases"

    body = (await as_admin.get(url)).json()
    assert body["pagination"]["total_count"] == 3
    assert body["cases"][0]["title"] == "Closed matter"

    by_status = (await as_admin.get(url, params={"status": "AWAITING"})).json()
    assert [c["title"] for c in by_status["cases"]] == ["Disciplinary hearing"]

    by_party = (await as_admin.get(url, params={"action_required_by": "CLIENT"})).json()
    assert by_party["pagination"]["total_count"] == 1

    by_owner = (await as_admin.get(url, params={"assigned_to": "Sam"})).json()
    assert by_owner["pagination"]["total_count"] == 1

    searched = (await as_admin.get(url, params={"search": "CASE-0002"})).json()
    assert [c["case_number"] for c in searched["cases"]] == ["CASE-0002"]

    ordered = (await as_admin.get(url, params={"sort_by": "title", "sort_dir": "asc"})).json()
    assert [c["title"] for c in ordered["cases"]] == [
        "Closed matter", "Disciplinary hearing", "Grievance from warehouse team",
    ]


async def test_global_list_spans_clients(as_admin, seed_client, client_payload):
    other = (await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Other", contact_email="o@other.test",
    ))).json()
    await _open(as_admin, seed_client["id"])
    await _open(as_admin, other["id"])

    body = (await as_admin.get("/api/v1/cases")).json()
    assert body["pagination"]["total_count"] == 2
    assert {c["company_name"] for c in body["cases"]} == {"Acme Ltd", "Other"}


async def test_missing_client_case_list_is_404(as_admin):
    res = await as_admin.get("/api/v1/clients/999/cases")
    assert res.status_code == 404


async def test_update_case(as_admin, seed_client):
    case = await _open(as_admin, seed_client["id"])
    res = await as_admin.patch(f"/api/v1/cases/{case['id']}", json={
        "status": "CLOSED", "assigned_to": "Alex",
    })
    assert res.status_code == 200
    assert res.json()["status"] == "CLOSED"
    assert res.json()["assigned_to"] == "Alex"

    res = await as_admin.get(f"/api/v1/cases/{case['id']}")
    assert res.json()["assigned_to"] == "Alex"


async def test_delete_case_removes_interactions_and_files(as_admin, seed_client, test_db):
    case = await _open(as_admin, seed_client["id"])
    base = f"/api/v1/cases/{case['id']}"
    await as_admin.post(f"{base}/interactions", json={
        "party1_name": "Jane", "party1_type": "CLIENT",
        "party2_name": "Argan", "party2_type": "ARGAN", "content": "Called client",
    })
    await as_admin.post(f"{base}/files", json={
        "file_name": "notes.pdf", "file_url": "https://files.test/notes.pdf",
        "uploaded_by": "Staff",
    })

    res = await as_admin.delete(base)
    assert res.status_code == 204
    assert (await as_admin.get(base)).status_code == 404
    assert await test_db.scalar(select(func.count(CaseInteraction.id))) == 0
    assert await test_db.scalar(select(func.count(CaseFile.id))) == 0


async def test_read_only_can_list_but_not_open(seed_client, client, login, read_only):
    await login(client, read_only.email)
    assert (await client.get("/api/v1/cases")).status_code == 200
    res = await client.post(f"/api/v1/clients/{seed_client['id']}/cases", json=_case())
    assert res.status_code == 403

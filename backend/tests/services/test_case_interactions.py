"""Case interactions — the single active action and case/interaction file scoping.

Invariants:
    - Setting an active action clears the flag on every other interaction of the case
    - The case mirrors the active interaction's action fields; unsetting clears them
"""

import pytest


def _interaction(**overrides):
    body = {
        "party1_name": "Jane Smith", "party1_type": "CLIENT",
        "party2_name": "Argan Advisor", "party2_type": "ARGAN",
        "content": "Discussed the grievance timeline",
    }
    body.update(overrides)
    return body


@pytest.fixture
async def case(as_admin, seed_client):
    res = await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/cases",
        json={"title": "Grievance", "escalated_by": "Jane Smith"},
    )
    return res.json()


async def test_create_and_list_interactions(as_admin, case):
    base = f"/api/v1/cases/{case['id']}/interactions"
    res = await as_admin.post(base, json=_interaction())
    assert res.status_code == 201
    assert res.json()["is_active_action"] is False

    await as_admin.post(base, json=_interaction(content="Follow-up call"))
    listed = (await as_admin.get(base)).json()
    assert [i["content"] for i in listed] == ["Follow-up call", "Discussed the grievance timeline"]

    detail = (await as_admin.get(f"/api/v1/cases/{case['id']}")).json()
    assert detail["interaction_count"] == 2


async def test_active_action_on_create_copies_fields(as_admin, case):
    res = await as_admin.post(f"/api/v1/cases/{case['id']}/interactions", json=_interaction(
        action_required="Send outcome letter", action_required_by="ARGAN",
        action_required_by_date="2026-11-01", is_active_action=True,
    ))
    assert res.json()["is_active_action"] is True

    detail = (await as_admin.get(f"/api/v1/cases/{case['id']}")).json()
    assert detail["action_required"] == "Send outcome letter"
    assert detail["action_required_by"] == "ARGAN"


async def test_setting_active_action_clears_others(as_admin, case):
    base = f"/api/v1/cases/{case['id']}/interactions"
    first = (await as_admin.post(base, json=_interaction(
        action_required="Book meeting", action_required_by="CLIENT", is_active_action=True,
    ))).json()
    second = (await as_admin.post(base, json=_interaction(
        action_required="Draft letter", action_required_by="ARGAN",
    ))).json()

    res = await as_admin.post(f"{base}/{second['id']}/active-action")
    assert res.status_code == 200
    assert res.json()["is_active_action"] is True

    flags = {i["id"]: i["is_active_action"] for i in (await as_admin.get(base)).json()}
    assert flags == {first["id"]: False, second["id"]: True}
    detail = (await as_admin.get(f"/api/v1/cases/{case['id']}")).json()
    assert detail["action_required"] == "Draft letter"
    assert detail["action_required_by"] == "ARGAN"


async def test_unset_active_action_clears_case(as_admin, case):
    base = f"/api/v1/cases/{case['id']}/interactions"
    created = (await as_admin.post(base, json=_interaction(
        action_required="Book meeting", action_required_by="CLIENT", is_active_action=True,
    ))).json()

    res = await as_admin.delete(f"{base}/{created['id']}/active-action")
    assert res.json()["is_active_action"] is False
    detail = (await as_admin.get(f"/api/v1/cases/{case['id']}")).json()
    assert detail["action_required"] is None
    assert detail["action_required_by"] is None


async def test_deleting_active_interaction_clears_case(as_admin, case):
    base = f"/api/v1/cases/{case['id']}/interactions"
    created = (await as_admin.post(base, json=_interaction(
        action_required="Book meeting", action_required_by="CLIENT", is_active_action=True,
    ))).json()

    assert (await as_admin.delete(f"{base}/{created['id']}")).status_code == 204
    detail = (await as_admin.get(f"/api/v1/cases/{case['id']}")).json()
    assert detail["action_required"] is None
    assert detail["interaction_count"] == 0


async def test_active_action_requires_action_text(as_admin, case):
    base = f"/api/v1/cases/{case['id']}/interactions"
    res = await as_admin.post(base, json=_interaction(is_active_action=True))
    assert res.status_code == 400

    plain = (await as_admin.post(base, json=_interaction())).json()
    res = await as_admin.post(f"{base}/{plain['id']}/active-action")
    assert res.status_code == 400


async def test_interaction_of_other_case_is_404(as_admin, case, seed_client):
    other = (await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/cases",
        json={"title": "Other", "escalated_by": "Jane"},
    )).json()
    created = (await as_admin.post(
        f"/api/v1/cases/{other['id']}/interactions", json=_interaction(),
    )).json()
    res = await as_admin.post(
        f"/api/v1/cases/{case['id']}/interactions/{created['id']}/active-action",
    )
    assert res.status_code == 404


async def test_files_scoped_to_case_or_interaction(as_admin, case):
    base = f"/api/v1/cases/{case['id']}"
    interaction = (await as_admin.post(f"{base}/interactions", json=_interaction())).json()
    file_body = {
        "file_name": "letter.pdf", "file_url": "https://files.test/letter.pdf",
        "file_size": 2048, "uploaded_by": "Staff", "file_tags": [" outcome ", ""],
    }
    case_file = (await as_admin.post(f"{base}/files", json=file_body)).json()
    assert case_file["file_tags"] == ["outcome"]
    await as_admin.post(f"{base}/files", json={
        **file_body, "file_name": "minutes.pdf", "interaction_id": interaction["id"],
    })

    case_level = (await as_admin.get(f"{base}/files")).json()
    assert [f["file_name"] for f in case_level] == ["letter.pdf"]
    attached = (await as_admin.get(f"{base}/files", params={"interaction_id": interaction["id"]})).json()
    assert [f["file_name"] for f in attached] == ["minutes.pdf"]

    listed = (await as_admin.get(f"{base}/interactions")).json()
    assert listed[0]["file_count"] == 1
    detail = (await as_admin.get(base)).json()
    assert detail["file_count"] == 2


async def test_file_for_unknown_interaction_is_404(as_admin, case):
    res = await as_admin.post(f"/api/v1/cases/{case['id']}/files", json={
        "file_name": "x.pdf", "file_url": "https://files.test/x.pdf",
        "uploaded_by": "Staff", "interaction_id": 999,
    })
    assert res.status_code == 404

"""Onboarding checklist — client and contract flags, N/A rules and progress."""


def _url(seed_client):
    return f"/api/v1/clients/{seed_client['id']}/onboarding"


async def test_get_checklist(as_admin, seed_client):
    res = await as_admin.get(_url(seed_client))
    body = res.json()
    assert res.status_code == 200
    assert body["contract_id"] == seed_client["contracts"][0]["id"]
    assert set(body["contract"]) == {
        "signed_contract_received", "contract_uploaded",
        "contract_sent_to_client", "payment_terms_agreed",
    }
    assert body["progress"]["total"] == 11


async def test_toggle_client_flag_updates_progress(as_admin, seed_client):
    res = await as_admin.patch(_url(seed_client), json={
        "scope": "client", "field": "welcome_email_sent", "value": True,
    })
    assert res.status_code == 200
    body = res.json()
    assert body["client"]["welcome_email_sent"] is True
    assert body["progress"] == {"completed": 1, "total": 11, "percentage": 9}


async def test_toggle_contract_flag_with_type_alias(as_admin, seed_client):
    res = await as_admin.patch(_url(seed_client), json={
        "type": "contract", "field": "contract_uploaded", "value": True,
    })
    assert res.status_code == 200
    assert res.json()["contract"]["contract_uploaded"] is True


async def test_not_applicable_flag_is_422(as_admin, seed_client):
    res = await as_admin.patch(_url(seed_client), json={
        "scope": "client", "field": "recurring_invoice_setup", "value": True,
    })
    assert res.status_code == 422


async def test_unknown_field_is_400(as_admin, seed_client):
    res = await as_admin.patch(_url(seed_client), json={
        "scope": "client", "field": "password_hash", "value": True,
    })
    assert res.status_code == 400


async def test_contract_scope_without_active_contract_is_404(as_admin, seed_client):
    await as_admin.post(f"/api/v1/clients/{seed_client['id']}/contracts", json={
        "contract_start_date": "2027-01-01", "contract_renewal_date": "2028-01-01",
        "status": "DRAFT", "replace_existing": True,
    })
    checklist = (await as_admin.get(_url(seed_client))).json()
    assert checklist["contract"] is None
    assert checklist["progress"]["total"] == 7

    res = await as_admin.patch(_url(seed_client), json={
        "scope": "contract", "field": "contract_uploaded", "value": True,
    })
    assert res.status_code == 404


async def test_missing_client_is_404(as_admin):
    res = await as_admin.get("/api/v1/clients/404/onboarding")
    assert res.status_code == 404

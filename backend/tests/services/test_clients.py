"""Clients — creation with related records, list/search, updates and status toggle.

Invariants:
    - Client, primary contact and the first ACTIVE contract are created together
    - contact_email unique among ACTIVE clients (409)
    - Payment method decides which onboarding payment flags apply
"""


async def test_create_client_builds_related_records(as_admin, client_payload):
    res = await as_admin.post("/api/v1/clients", json=client_payload(
        secondary_contact={"name": "Bob", "email": "BOB@acme.test"},
        invoice_contact={"name": "Accounts", "email": "accounts@acme.test"},
        service_address={"address_line_1": "1 High St", "city": "Leeds", "postcode": "ls1 1aa"},
    ))
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "ACTIVE"
    assert [(c["type"], c["email"]) for c in body["contacts"]] == [
        ("SERVICE", "jane@acme.test"),
        ("SERVICE", "bob@acme.test"),
        ("INVOICE", "accounts@acme.test"),
    ]
    assert body["addresses"][0]["postcode"] == "LS1 1AA"
    assert body["addresses"][0]["country"] == "United Kingdom"

    [contract] = body["contracts"]
    assert contract["version"] == 1
    assert contract["status"] == "ACTIVE"
    assert contract["contract_number"] == f"CON-1-{body['id']:03d}-001"
    assert contract["contract_renewal_date"] == "2027-01-01"
    assert "HR Admin Support" in contract["services_in_scope"]


async def test_create_client_applies_direct_debit_onboarding(seed_client):
    onboarding = seed_client["onboarding"]
    assert onboarding["client"]["direct_debit_setup"] is False
    assert onboarding["client"]["recurring_invoice_setup"] is None
    assert onboarding["progress"] == {"completed": 0, "total": 11, "percentage": 0}


async def test_create_client_reports_all_missing_fields(as_admin):
    res = await as_admin.post("/api/v1/clients", json={})
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert fields == {"company_name", "contact_name", "contact_email", "service_tier"}


async def test_create_client_duplicate_active_email_is_409(as_admin, seed_client, client_payload):
    res = await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Other Ltd", contact_email="JANE@acme.test",
    ))
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


async def test_external_audit_requires_an_audit(as_admin, client_payload):
    res = await as_admin.post("/api/v1/clients", json=client_payload(external_audit=True))
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "audits"


async def test_external_audit_legacy_fields(as_admin, client_payload):
    res = await as_admin.post("/api/v1/clients", json=client_payload(
        external_audit=True, audited_by="Auditors plc",
        audit_interval="ANNUALLY", next_audit_date="2026-12-01",
    ))
    assert res.status_code == 201
    [audit] = res.json()["audits"]
    assert audit["audited_by"] == "Auditors plc"
    assert audit["interval"] == "ANNUALLY"


async def test_read_only_cannot_create(as_read_only, client_payload):
    res = await as_read_only.post("/api/v1/clients", json=client_payload())
    assert res.status_code == 403


async def test_list_search_filter_and_sort(as_admin, client_payload):
    await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Zeta Corp", contact_email="z@zeta.test", service_tier="AD_HOC", sector="Tech",
    ))
    await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Alpha 100% Ltd", contact_email="a@alpha.test", sector="Retail",
    ))

    res = await as_admin.get("/api/v1/clients")
    assert [c["company_name"] for c in res.json()["clients"]] == ["Alpha 100% Ltd", "Zeta Corp"]

    res = await as_admin.get("/api/v1/clients", params={"search": "100%"})
    assert [c["company_name"] for c in res.json()["clients"]] == ["Alpha 100% Ltd"]

    res = await as_admin.get("/api/v1/clients", params={"service_tier": "AD_HOC"})
    assert res.json()["pagination"]["total_count"] == 1

    res = await as_admin.get("/api/v1/clients", params={"sort_by": "company_name", "sort_dir": "desc"})
    assert res.json()["clients"][0]["company_name"] == "Zeta Corp"

    res = await as_admin.get("/api/v1/clients", params={"sort_by": "password"})
    assert res.status_code == 400

    sectors = await as_admin.get("/api/v1/clients/sectors")
    assert sectors.json() == ["Retail", "Tech"]


async def test_get_missing_client_is_404(as_read_only):
    res = await as_read_only.get("/api/v1/clients/999")
    assert res.status_code == 404


async def test_update_switches_payment_method(as_admin, seed_client):
    res = await as_admin.patch(f"/api/v1/clients/{seed_client['id']}", json={"payment_method": "INVOICE"})
    assert res.status_code == 200
    flags = res.json()["onboarding"]["client"]
    assert flags["direct_debit_setup"] is None
    assert flags["direct_debit_confirmed"] is None
    assert flags["recurring_invoice_setup"] is False


async def test_update_email_syncs_primary_contact(as_admin, seed_client):
    res = await as_admin.patch(f"/api/v1/clients/{seed_client['id']}", json={
        "contact_email": "New@Acme.test", "contact_name": "Janet",
    })
    body = res.json()
    assert body["contact_email"] == "new@acme.test"
    assert body["contacts"][0]["email"] == "new@acme.test"
    assert body["contacts"][0]["name"] == "Janet"


async def test_update_rejects_blank_required_field(as_admin, seed_client):
    res = await as_admin.patch(f"/api/v1/clients/{seed_client['id']}", json={"company_name": "  "})
    assert res.status_code == 400


async def test_update_rejects_null_for_non_nullable_fields(as_admin, seed_client):
    url = f"/api/v1/clients/{seed_client['id']}"
    res = await as_admin.patch(url, json={"client_type": None, "external_audit": None})
    assert res.status_code == 400
    assert {d["field"] for d in res.json()["error"]["details"]} == {"client_type", "external_audit"}

    res = await as_admin.patch(url, json={"sector": None})
    assert res.status_code == 200
    assert res.json()["sector"] is None
    assert res.json()["client_type"] == "COMPANY"


async def test_status_toggle_round_trip(as_admin, seed_client):
    url = f"/api/v1/clients/{seed_client['id']}/status-toggle"
    res = await as_admin.post(url)
    assert res.json()["status"] == "INACTIVE"
    res = await as_admin.post(url)
    assert res.json()["status"] == "ACTIVE"
    res = await as_admin.post(url, json={"target_status": "PENDING"})
    assert res.json()["status"] == "PENDING"


async def test_delete_archives_instead_of_removing(as_admin, seed_client):
    res = await as_admin.delete(f"/api/v1/clients/{seed_client['id']}")
    assert res.status_code == 200
    assert res.json()["status"] == "INACTIVE"
    assert (await as_admin.get(f"/api/v1/clients/{seed_client['id']}")).status_code == 200


async def test_reactivation_blocked_by_email_in_use(as_admin, seed_client, client_payload):
    await as_admin.post(f"/api/v1/clients/{seed_client['id']}/status-toggle")
    res = await as_admin.post("/api/v1/clients", json=client_payload(company_name="Successor Ltd"))
    assert res.status_code == 201

    res = await as_admin.post(f"/api/v1/clients/{seed_client['id']}/status-toggle")
    assert res.status_code == 409

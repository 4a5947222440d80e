"""Client records — contacts, addresses and external audit schedule under a client."""


async def test_contact_crud(as_admin, seed_client):
    base = f"/api/v1/clients/{seed_client['id']}/contacts"
    res = await as_admin.post(base, json={"type": "INVOICE", "name": "Ann", "email": "ANN@acme.test"})
    assert res.status_code == 201
    contact = res.json()
    assert contact["email"] == "ann@acme.test"

    res = await as_admin.patch(f"{base}/{contact['id']}", json={"role": "Finance"})
    assert res.json()["role"] == "Finance"

    res = await as_admin.delete(f"{base}/{contact['id']}")
    assert res.status_code == 204
    detail = await as_admin.get(f"/api/v1/clients/{seed_client['id']}")
    assert len(detail.json()["contacts"]) == 1


async def test_contact_email_validated(as_admin, seed_client):
    res = await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/contacts", json={"name": "Ann", "email": "nope"},
    )
    assert res.status_code == 400


async def test_contact_update_rejects_null_required_fields(as_admin, seed_client):
    base = f"/api/v1/clients/{seed_client['id']}/contacts"
    contact_id = seed_client["contacts"][0]["id"]

    res = await as_admin.patch(f"{base}/{contact_id}", json={"email": None})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "email"

    res = await as_admin.patch(f"{base}/{contact_id}", json={"name": None, "type": None})
    assert res.status_code == 400
    assert {d["field"] for d in res.json()["error"]["details"]} == {"name", "type"}

    res = await as_admin.patch(f"{base}/{contact_id}", json={"phone": None, "email": "NEW@acme.test"})
    assert res.status_code == 200
    assert res.json()["email"] == "new@acme.test"


async def test_record_of_another_client_is_404(as_admin, seed_client, client_payload):
    other = (await as_admin.post("/api/v1/clients", json=client_payload(
        company_name="Other", contact_email="o@other.test",
    ))).json()
    contact_id = other["contacts"][0]["id"]
    res = await as_admin.patch(
        f"/api/v1/clients/{seed_client['id']}/contacts/{contact_id}", json={"name": "X"},
    )
    assert res.status_code == 404


async def test_address_crud(as_admin, seed_client):
    base = f"/api/v1/clients/{seed_client['id']}/addresses"
    res = await as_admin.post(base, json={
        "type": "INVOICE", "address_line_1": "2 Mill Lane", "city": "York", "postcode": "yo1 7hh",
    })
    assert res.status_code == 201
    address = res.json()
    assert address["postcode"] == "YO1 7HH"

    res = await as_admin.patch(f"{base}/{address['id']}", json={"address_line_2": "Unit 4"})
    assert res.json()["address_line_2"] == "Unit 4"

    assert (await as_admin.delete(f"{base}/{address['id']}")).status_code == 204


async def test_address_requires_city(as_admin, seed_client):
    res = await as_admin.post(
        f"/api/v1/clients/{seed_client['id']}/addresses",
        json={"address_line_1": "x", "postcode": "y"},
    )
    assert res.status_code == 400


async def test_audit_add_enables_external_audit_and_reschedules(as_admin, seed_client):
    base = f"/api/v1/clients/{seed_client['id']}/audits"
    res = await as_admin.post(base, json={
        "audited_by": "Auditors plc", "interval": "QUARTERLY", "next_audit_date": "2099-01-31",
    })
    assert res.status_code == 201
    audit = res.json()

    detail = await as_admin.get(f"/api/v1/clients/{seed_client['id']}")
    assert detail.json()["external_audit"] is True

    res = await as_admin.post(f"{base}/{audit['id']}/schedule-next")
    assert res.json()["next_audit_date"] == "2099-04-30"

    assert (await as_admin.delete(f"{base}/{audit['id']}")).status_code == 204


async def test_read_only_cannot_edit_records(seed_client, client, login, read_only):
    await login(client, read_only.email)
    res = await client.post(
        f"/api/v1/clients/{seed_client['id']}/contacts", json={"name": "Ann", "email": "a@b.co"},
    )
    assert res.status_code == 403

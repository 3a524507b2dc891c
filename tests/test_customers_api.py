import pytest

pytestmark = pytest.mark.anyio


async def _create(client, **fields):
    payload = {"name": "Siti Aminah", "phone": "081234567890", "email": "siti@example.com"}
    payload.update(fields)
    return await client.post("/customers", json=payload)


async def test_create_customer(test_client):
    r = await _create(test_client, email="Siti@Example.com")
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["id"].startswith("cust-")
    assert data["email"] == "siti@example.com"
    assert data["total_orders"] == 0


async def test_duplicate_email_is_a_conflict(test_client):
    first = await _create(test_client)
    r = await _create(test_client, phone="0899999", email="SITI@example.com")
    assert r.status_code == 409
    body = r.json()
    assert body["success"] is False
    assert body["details"]["existing_customer_id"] == first.json()["data"]["id"]


async def test_duplicate_phone_is_a_conflict(test_client):
    await _create(test_client)
    r = await _create(test_client, email="other@example.com")
    assert r.status_code == 409


async def test_missing_name_and_phone(test_client):
    r = await test_client.post("/customers", json={"email": "a@example.com"})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert "name is required" in errors
    assert "phone is required" in errors


async def test_create_customer_without_database(test_client, no_database):
    r = await _create(test_client)
    assert r.status_code == 503
    assert r.json()["success"] is False


async def test_customer_details_lookups(test_client):
    customer_id = (await _create(test_client)).json()["data"]["id"]

    by_query = await test_client.get("/customers/details", params={"id": customer_id})
    by_path = await test_client.get(f"/customers/details/{customer_id}")
    by_body = await test_client.post("/customers/details", json={"customer_id": customer_id})
    legacy = await test_client.post("/customer_endpoint", json={"id": customer_id})

    for r in (by_query, by_path, by_body, legacy):
        assert r.status_code == 200
        assert r.json()["data"]["id"] == customer_id


async def test_customer_details_requires_an_id(test_client):
    r = await test_client.get("/customers/details")
    assert r.status_code == 400
    assert "Customer ID is required" in r.json()["error"]


async def test_unknown_customer_is_a_404(test_client):
    r = await test_client.get("/customers/details/cust-missing")
    assert r.status_code == 404
    assert r.json()["success"] is False

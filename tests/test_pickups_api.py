import pytest

pytestmark = pytest.mark.anyio

PICKUP = {
    "type": "pickup",
    "customer_name": "Siti Aminah",
    "customer_phone": "081234567890",
    "address": "Jl. Melati 4",
    "scheduled_date": "2024-05-02T09:00:00",
}


async def _create(client, **overrides):
    r = await client.post("/pickups-deliveries", json=dict(PICKUP, **overrides))
    assert r.status_code == 201
    return r.json()["data"]


async def test_pickup_status_without_database(test_client, no_database):
    r = await test_client.get("/pickup-status", params={"pickup_id": "pd-1"})
    assert r.status_code == 200
    assert r.json()["status"] == "pending"


async def test_pickup_status_with_no_pickups(test_client):
    r = await test_client.get("/pickup-status")
    assert r.status_code == 200
    assert r.json()["status"] == "pending"


async def test_pickup_status_unknown_id(test_client):
    r = await test_client.get("/pickup-status", params={"id": "pd-missing"})
    assert r.status_code == 200
    assert r.json()["status"] == "not_found"


async def test_pickup_status_for_a_pickup(test_client):
    created = await _create(test_client, order_id="ORD-1")
    r = await test_client.get("/pickup-status", params={"pickup_id": created["id"]})
    body = r.json()
    assert body["status"] == "pending"
    assert body["pickup_id"] == created["id"]
    assert body["order_id"] == "ORD-1"
    assert body["scheduled_date"].startswith("2024-05-02")


async def test_pickup_status_ignores_deliveries(test_client):
    delivery = await _create(test_client, type="delivery")
    r = await test_client.get("/pickup-status", params={"pickup_id": delivery["id"]})
    assert r.json()["status"] == "not_found"


async def test_create_requires_contact_details(test_client):
    r = await test_client.post("/pickups-deliveries", json={"type": "pickup", "customer_name": " "})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert "customer_name is required" in errors
    assert "customer_phone is required" in errors
    assert "address is required" in errors


async def test_advance_pickup_to_completed(test_client):
    record = await _create(test_client)
    statuses = []
    for _ in range(6):
        r = await test_client.post(f"/pickups-deliveries/{record['id']}/advance")
        assert r.status_code == 200
        statuses.append(r.json()["data"]["status"])
    assert statuses == ["assigned", "enroute", "arrived", "picked", "completed", "completed"]
    assert r.json()["data"]["status_label"] == "Completed"


async def test_advance_delivery(test_client):
    record = await _create(test_client, type="delivery")
    for _ in range(3):
        r = await test_client.post(f"/pickups-deliveries/{record['id']}/advance")
    assert r.json()["data"]["status"] == "completed"


async def test_advance_unknown_record(test_client):
    r = await test_client.post("/pickups-deliveries/pd-missing/advance")
    assert r.status_code == 404


async def test_list_filters(test_client):
    pickup = await _create(test_client)
    await _create(test_client, type="delivery")
    await test_client.post(f"/pickups-deliveries/{pickup['id']}/advance")

    everything = (await test_client.get("/pickups-deliveries")).json()["data"]
    deliveries = (await test_client.get("/pickups-deliveries", params={"type": "delivery"})).json()["data"]
    assigned = (await test_client.get("/pickups-deliveries", params={"status": "assigned"})).json()["data"]

    assert len(everything) == 2
    assert [d["type"] for d in deliveries] == ["delivery"]
    assert [a["id"] for a in assigned] == [pickup["id"]]


async def test_list_without_database(test_client, no_database):
    r = await test_client.get("/pickups-deliveries")
    assert r.status_code == 200
    assert r.json()["data"] == []


async def test_delete(test_client):
    record = await _create(test_client)
    r = await test_client.delete(f"/pickups-deliveries/{record['id']}")
    assert r.status_code == 200
    again = await test_client.delete(f"/pickups-deliveries/{record['id']}")
    assert again.status_code == 404

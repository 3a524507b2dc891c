import pytest
from sqlalchemy import Numeric

from models.order import Order

pytestmark = pytest.mark.anyio

ORDER = {
    "customer_id": "cust-1",
    "customer_name": "Siti Aminah",
    "service_type": "Wash & Iron",
    "items": [
        {"name": "Shirts", "quantity": 2, "price": 10000},
        {"name": "Blanket", "quantity": 1.5, "price": "8000"},
    ],
    "pickup_date": "2024-05-02",
}


async def _create(client, **overrides):
    payload = dict(ORDER, **overrides)
    return await client.post("/create_order", json=payload)


async def test_create_order_computes_totals(test_client):
    r = await _create(test_client)
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["id"].startswith("ORD-")
    assert data["total_amount"] == 32000
    assert data["quantity"] == 3.5
    assert data["service_type"] == "wash_iron"
    assert data["service_name"] == "Shirts, Blanket"
    assert data["customer_phone"] == "customer-cust-1"
    assert data["status"] == "pending"
    assert data["pickup_delivery"]["type"] == "pickup"
    assert data["pickup_delivery"]["status"] == "pending"


async def test_orders_alias_route(test_client):
    r = await test_client.post("/orders", json=dict(ORDER, pickup_date=None))
    assert r.status_code == 201
    assert r.json()["data"]["pickup_delivery"] is None


async def test_create_order_validation(test_client):
    r = await test_client.post("/create_order", json={"items": [], "pickup_date": "02/05/2024"})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert "service_type or service_id is required" in errors
    assert "items array cannot be empty" in errors
    assert "pickup_date must be in YYYY-MM-DD format" in errors


async def test_create_order_item_checks(test_client):
    r = await _create(test_client, items=[{"name": "", "quantity": 0, "price": -1}])
    assert r.status_code == 400
    assert r.json()["errors"] == [
        "items[0].name is required",
        "items[0].quantity must be a positive number",
        "items[0].price must be a non-negative number",
    ]


async def test_create_order_without_database(test_client, no_database):
    r = await _create(test_client)
    assert r.status_code == 503


async def test_edit_order(test_client):
    order_id = (await _create(test_client)).json()["data"]["id"]
    r = await test_client.put("/orders/edit", json={"order_id": order_id, "status": "completed", "notes": "folded"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["order_id"] == order_id
    assert data["status"] == "completed"
    assert data["notes"] == "folded"
    assert data["completed_at"] is not None
    assert data["customer_name"] == "Siti Aminah"


async def test_edit_order_accepts_post(test_client):
    order_id = (await _create(test_client)).json()["data"]["id"]
    r = await test_client.post("/orders/edit", json={"order_id": order_id, "total_amount": 30000})
    assert r.status_code == 200
    assert r.json()["data"]["total_amount"] == 30000


async def test_edit_unknown_order(test_client):
    r = await test_client.put("/orders/edit", json={"order_id": "ORD-missing", "status": "ready"})
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "Order not found"
    assert body["order_id"] == "ORD-missing"
    assert body["message"] == "No order found with ID: ORD-missing"


async def test_edit_order_rejects_unknown_status(test_client):
    order_id = (await _create(test_client)).json()["data"]["id"]
    r = await test_client.put("/orders/edit", json={"order_id": order_id, "status": "lost"})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid status"
    assert body["errors"][0].startswith("Status must be one of:")


async def test_edit_order_requires_id(test_client):
    r = await test_client.put("/orders/edit", json={"status": "ready"})
    assert r.status_code == 400
    assert r.json()["errors"] == ["order_id is required"]


def test_quantity_and_weight_columns_keep_fractions():
    # an integer column would round 3.5 kg to 4 on Postgres
    for column in ("quantity", "weight"):
        column_type = Order.__table__.c[column].type
        assert isinstance(column_type, Numeric)
        assert column_type.scale == 2


async def test_new_order_starts_at_reception(test_client):
    data = (await _create(test_client)).json()["data"]
    assert data["current_stage"] == "reception"
    assert data["tagging_required"] is False
    assert (data["weight"], data["quantity"]) == (3.5, 3.5)

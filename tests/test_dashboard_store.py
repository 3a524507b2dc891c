from datetime import datetime

import pydantic
import pytest

from store import actions
from store.state import DashboardState, initial_state

NOW = datetime(2024, 5, 1, 9, 30)


def _pickup(record_id="pd-1", kind="pickup", status="pending", **overrides):
    record = {
        "id": record_id,
        "type": kind,
        "status": status,
        "customer_name": "Siti",
        "customer_phone": "08123",
        "address": "Jl. Melati 4",
        "created_at": NOW,
    }
    record.update(overrides)
    return record


def _order(order_id="ORD-1", **overrides):
    order = {
        "id": order_id,
        "customer_name": "Siti",
        "total_amount": 16000,
        "created_at": NOW,
    }
    order.update(overrides)
    return order


def _courier(staff_id="st-1", name="Budi", role="courier"):
    return {"id": staff_id, "name": name, "role": role, "created_at": NOW}


def test_initial_state_has_default_services():
    state = initial_state(NOW)
    assert [s.id for s in state.services] == ["svc-1", "svc-2", "svc-3", "svc-4"]
    assert all(s.is_default for s in state.services)
    assert state.services[0].price == 8000
    assert state.selected_tab == "orders"


def test_reducers_do_not_mutate_previous_state():
    before = DashboardState()
    after = actions.add_order(before, _order())
    assert before.orders == ()
    assert len(after.orders) == 1


def test_update_of_unknown_id_returns_state_unchanged():
    state = actions.add_customer(DashboardState(), {
        "id": "cust-1", "name": "Siti", "phone": "08123", "created_at": NOW
    })
    assert actions.update_customer(state, "cust-404", {"name": "X"}) == state
    assert actions.delete_order(state, "ORD-404") == state


def test_default_services_cannot_be_deleted():
    state = initial_state(NOW)
    state = actions.add_service(state, {
        "id": "svc-custom", "name": "Curtains", "unit_price": 25000,
        "unit": "piece", "created_at": NOW
    })
    assert actions.delete_service(state, "svc-1") == state
    trimmed = actions.delete_service(state, "svc-custom")
    assert actions.get_service(trimmed, "svc-custom") is None
    assert len(trimmed.services) == 4


def test_update_customer_stats_accumulates():
    state = actions.add_customer(DashboardState(), {
        "id": "cust-1", "name": "Siti", "phone": "08123", "created_at": NOW
    })
    later = datetime(2024, 5, 2)
    state = actions.update_customer_stats(state, "cust-1", 16000, later)
    state = actions.update_customer_stats(state, "cust-1", 4000, later)
    customer = actions.get_customer(state, "cust-1")
    assert customer.total_orders == 2
    assert customer.total_spent == 20000
    assert customer.last_order_date == later


def test_advance_walks_a_pickup_to_completed_and_stops():
    state = actions.add_pickup_delivery(DashboardState(), _pickup())
    seen = []
    for _ in range(7):
        state = actions.advance_pickup_delivery(state, "pd-1")
        seen.append(actions.get_pickup_delivery(state, "pd-1").status)
    assert seen == ["assigned", "enroute", "arrived", "picked", "completed", "completed", "completed"]
    assert actions.get_pickup_delivery(state, "pd-1").completed_at is None


def test_advance_delivery_uses_transit():
    state = actions.add_pickup_delivery(DashboardState(), _pickup(kind="delivery", status="assigned"))
    state = actions.advance_pickup_delivery(state, "pd-1")
    assert actions.get_pickup_delivery(state, "pd-1").status == "transit"


def test_advance_unknown_record_is_a_no_op():
    state = actions.add_pickup_delivery(DashboardState(), _pickup())
    assert actions.advance_pickup_delivery(state, "pd-404") == state


def test_update_pickup_delivery_keeps_identity_fields():
    state = actions.add_pickup_delivery(DashboardState(), _pickup())
    state = actions.update_pickup_delivery(state, "pd-1", {
        "id": "pd-2",
        "type": "delivery",
        "created_at": datetime(2020, 1, 1),
        "notes": "ring twice",
    })
    record = actions.get_pickup_delivery(state, "pd-1")
    assert record.type == "pickup"
    assert record.created_at == NOW
    assert record.notes == "ring twice"


def test_status_outside_the_kind_sequence_is_rejected():
    with pytest.raises(pydantic.ValidationError):
        actions.add_pickup_delivery(DashboardState(), _pickup(kind="delivery", status="arrived"))

    state = actions.add_pickup_delivery(DashboardState(), _pickup())
    with pytest.raises(pydantic.ValidationError):
        actions.update_pickup_delivery(state, "pd-1", {"status": "transit"})


def test_assign_courier_snapshots_name():
    state = actions.add_staff(DashboardState(), _courier())
    state = actions.add_pickup_delivery(state, _pickup())
    state = actions.assign_courier(state, "pd-1", "st-1")
    state = actions.update_staff(state, "st-1", {"name": "Budi Santoso"})

    record = actions.get_pickup_delivery(state, "pd-1")
    assert record.courier_id == "st-1"
    assert record.courier_name == "Budi"


def test_assign_courier_ignores_other_roles():
    state = actions.add_staff(DashboardState(), _courier(role="cashier"))
    state = actions.add_pickup_delivery(state, _pickup())
    assert actions.assign_courier(state, "pd-1", "st-1") == state


def test_available_orders_for_pickup():
    state = DashboardState()
    state = actions.add_order(state, _order("ORD-1"))
    state = actions.add_order(state, _order("ORD-2", status="completed"))
    state = actions.add_order(state, _order("ORD-3"))
    state = actions.add_order(state, _order("ORD-4", pickup_delivery={"type": "pickup"}))
    state = actions.add_pickup_delivery(state, _pickup(order_id="ORD-3"))

    assert [o.id for o in actions.available_orders_for_pickup(state)] == ["ORD-1"]


def test_ui_selection():
    state = actions.select_tab(DashboardState(), "pickups")
    state = actions.select_outlet(state, "outlet-2")
    assert (state.selected_tab, state.selected_outlet) == ("pickups", "outlet-2")


def test_assign_courier_ignores_inactive_couriers():
    courier = dict(_courier(), status="inactive")
    state = actions.add_staff(DashboardState(), courier)
    state = actions.add_pickup_delivery(state, _pickup())
    assert actions.assign_courier(state, "pd-1", "st-1") == state
    assert actions.get_pickup_delivery(state, "pd-1").courier_name is None


def test_moving_an_order_through_stages_updates_status():
    state = actions.add_order(DashboardState(), _order(current_stage="reception", tagging_status="pending"))
    assert actions.get_order(state, "ORD-1").status == "pending"

    statuses = []
    for stage in ("washing", "ready", "picked"):
        state = actions.update_order(state, "ORD-1", {"current_stage": stage, "tagging_status": "done"})
        statuses.append(actions.get_order(state, "ORD-1").status)
    assert statuses == ["processing", "ready", "completed"]


def test_tagging_an_order_at_reception_starts_processing():
    state = actions.add_order(DashboardState(), _order(current_stage="reception", tagging_status="pending"))
    state = actions.update_order(state, "ORD-1", {"tagging_status": "done"})
    assert actions.get_order(state, "ORD-1").status == "processing"


def test_cancelled_order_stays_cancelled_when_stage_moves():
    state = actions.add_order(DashboardState(), _order(status="cancelled"))
    state = actions.update_order(state, "ORD-1", {"current_stage": "ready"})
    assert actions.get_order(state, "ORD-1").status == "cancelled"


def test_plain_order_edit_keeps_status():
    state = actions.add_order(DashboardState(), _order(status="ready", current_stage="washing"))
    state = actions.update_order(state, "ORD-1", {"notes": "no starch"})
    order = actions.get_order(state, "ORD-1")
    assert (order.status, order.notes) == ("ready", "no starch")

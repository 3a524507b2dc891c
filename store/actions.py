"""
Pure reducers over `DashboardState`.

Every function takes the current state and returns a new one; nothing is
mutated in place. Updating or deleting an id that is not present returns
the state unchanged.
"""
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.order_workflow import WORKFLOW_FIELDS, order_status_from_stage
from core.pickup_workflow import next_status
from models.order import OrderStatus
from schemas.customer import CustomerRecord
from schemas.order import OrderRecord
from schemas.pickup_delivery import PickupDeliveryRecord
from schemas.service import ServiceRecord
from schemas.staff import STAFF_ACTIVE, StaffRecord, StaffRole
from store.state import DashboardState

R = TypeVar("R", bound=BaseModel)

# fixed once a pickup/delivery exists
PICKUP_DELIVERY_FROZEN_FIELDS = ("id", "type", "created_at")


def _find(items: Iterable[R], record_id: str) -> Optional[R]:
    return next((item for item in items if item.id == record_id), None)


def _merge(record: R, updates: Dict[str, Any], frozen: Tuple[str, ...] = ("id",)) -> R:
    data = record.model_dump()
    data.update({key: value for key, value in updates.items() if key not in frozen})
    return type(record).model_validate(data)


def _update(
    items: Tuple[R, ...],
    record_id: str,
    updates: Dict[str, Any],
    frozen: Tuple[str, ...] = ("id",)
) -> Tuple[R, ...]:
    return tuple(
        _merge(item, updates, frozen) if item.id == record_id else item
        for item in items
    )


def _remove(items: Tuple[R, ...], record_id: str) -> Tuple[R, ...]:
    return tuple(item for item in items if item.id != record_id)


def _coerce(model: Type[R], record: Any) -> R:
    return record if isinstance(record, model) else model.model_validate(record)


# Orders
def add_order(state: DashboardState, order) -> DashboardState:
    return replace(state, orders=state.orders + (_coerce(OrderRecord, order),))


def update_order(state: DashboardState, order_id: str, updates: Dict[str, Any]) -> DashboardState:
    """
    Merge `updates` into the order. Moving the order through its processing
    stages (or tagging it) re-derives its status.
    """
    orders = _update(state.orders, order_id, updates)
    if WORKFLOW_FIELDS.intersection(updates):
        orders = tuple(
            _merge(order, {"status": _status_from_workflow(order)}) if order.id == order_id else order
            for order in orders
        )
    return replace(state, orders=orders)


def _status_from_workflow(order: OrderRecord) -> str:
    return order_status_from_stage(
        order.current_stage,
        order.status,
        tagging_required=order.tagging_required,
        tagging_status=order.tagging_status
    )


def delete_order(state: DashboardState, order_id: str) -> DashboardState:
    return replace(state, orders=_remove(state.orders, order_id))


def get_order(state: DashboardState, order_id: str) -> Optional[OrderRecord]:
    return _find(state.orders, order_id)


# Customers
def add_customer(state: DashboardState, customer) -> DashboardState:
    return replace(state, customers=state.customers + (_coerce(CustomerRecord, customer),))


def update_customer(state: DashboardState, customer_id: str, updates: Dict[str, Any]) -> DashboardState:
    return replace(state, customers=_update(state.customers, customer_id, updates))


def delete_customer(state: DashboardState, customer_id: str) -> DashboardState:
    return replace(state, customers=_remove(state.customers, customer_id))


def get_customer(state: DashboardState, customer_id: str) -> Optional[CustomerRecord]:
    return _find(state.customers, customer_id)


def update_customer_stats(
    state: DashboardState,
    customer_id: str,
    order_value: float,
    now: Optional[datetime] = None
) -> DashboardState:
    """Count one more order for the customer and add its value to their spend."""
    customer = get_customer(state, customer_id)
    if customer is None:
        return state
    return update_customer(state, customer_id, {
        "total_orders": customer.total_orders + 1,
        "total_spent": customer.total_spent + order_value,
        "last_order_date": now or datetime.utcnow(),
    })


# Services
def add_service(state: DashboardState, service) -> DashboardState:
    return replace(state, services=state.services + (_coerce(ServiceRecord, service),))


def update_service(state: DashboardState, service_id: str, updates: Dict[str, Any]) -> DashboardState:
    return replace(state, services=_update(state.services, service_id, updates))


def delete_service(state: DashboardState, service_id: str) -> DashboardState:
    """Default services are kept."""
    service = get_service(state, service_id)
    if service is None or service.is_default:
        return state
    return replace(state, services=_remove(state.services, service_id))


def get_service(state: DashboardState, service_id: str) -> Optional[ServiceRecord]:
    return _find(state.services, service_id)


# Staff
def add_staff(state: DashboardState, member) -> DashboardState:
    return replace(state, staff=state.staff + (_coerce(StaffRecord, member),))


def update_staff(state: DashboardState, staff_id: str, updates: Dict[str, Any]) -> DashboardState:
    return replace(state, staff=_update(state.staff, staff_id, updates))


def delete_staff(state: DashboardState, staff_id: str) -> DashboardState:
    return replace(state, staff=_remove(state.staff, staff_id))


def get_staff(state: DashboardState, staff_id: str) -> Optional[StaffRecord]:
    return _find(state.staff, staff_id)


# Pickup & Delivery
def add_pickup_delivery(state: DashboardState, record) -> DashboardState:
    record = _coerce(PickupDeliveryRecord, record)
    return replace(state, pickups_deliveries=state.pickups_deliveries + (record,))


def update_pickup_delivery(state: DashboardState, record_id: str, updates: Dict[str, Any]) -> DashboardState:
    """
    Direct edit of a pickup/delivery. `id`, `type` and `created_at` are ignored;
    a status outside the record's sequence raises a pydantic ValidationError.
    """
    return replace(
        state,
        pickups_deliveries=_update(
            state.pickups_deliveries, record_id, updates, PICKUP_DELIVERY_FROZEN_FIELDS
        )
    )


def delete_pickup_delivery(state: DashboardState, record_id: str) -> DashboardState:
    return replace(state, pickups_deliveries=_remove(state.pickups_deliveries, record_id))


def get_pickup_delivery(state: DashboardState, record_id: str) -> Optional[PickupDeliveryRecord]:
    return _find(state.pickups_deliveries, record_id)


def advance_pickup_delivery(state: DashboardState, record_id: str) -> DashboardState:
    """Apply the status machine once. `completed_at` is left to the caller."""
    record = get_pickup_delivery(state, record_id)
    if record is None:
        return state
    following = next_status(record.status, record.type)
    if following == record.status:
        return state
    return update_pickup_delivery(state, record_id, {"status": following})


def assign_courier(state: DashboardState, record_id: str, staff_id: str) -> DashboardState:
    """
    Link a courier and snapshot their current name onto the record.

    Later edits to the staff member do not touch the snapshot. Only active
    couriers can be assigned.
    """
    courier = get_staff(state, staff_id)
    if (
        courier is None
        or courier.role != StaffRole.COURIER.value
        or courier.status != STAFF_ACTIVE
    ):
        return state
    return update_pickup_delivery(state, record_id, {
        "courier_id": courier.id,
        "courier_name": courier.name,
    })


def available_orders_for_pickup(state: DashboardState) -> Tuple[OrderRecord, ...]:
    """Orders a new pickup/delivery may link to: open and not linked yet."""
    linked = {pd.order_id for pd in state.pickups_deliveries if pd.order_id}
    return tuple(
        order for order in state.orders
        if order.status != OrderStatus.COMPLETED.value
        and not order.pickup_delivery
        and order.id not in linked
    )


# UI
def select_tab(state: DashboardState, tab: str) -> DashboardState:
    return replace(state, selected_tab=tab)


def select_outlet(state: DashboardState, outlet_id: Optional[str]) -> DashboardState:
    return replace(state, selected_outlet=outlet_id)

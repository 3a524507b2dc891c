"""
Dashboard session state.

The dashboard keeps one immutable `DashboardState` per session and replaces it
with the value returned by the reducers in `store.actions`.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from schemas.customer import CustomerRecord
from schemas.order import OrderRecord
from schemas.pickup_delivery import PickupDeliveryRecord
from schemas.service import ServiceRecord
from schemas.staff import StaffRecord
from services.service_catalog import DEFAULT_SERVICES


@dataclass(frozen=True)
class DashboardState:
    orders: Tuple[OrderRecord, ...] = ()
    customers: Tuple[CustomerRecord, ...] = ()
    services: Tuple[ServiceRecord, ...] = ()
    pickups_deliveries: Tuple[PickupDeliveryRecord, ...] = ()
    staff: Tuple[StaffRecord, ...] = ()
    selected_tab: str = "orders"
    selected_outlet: Optional[str] = None


def default_services(now: Optional[datetime] = None) -> Tuple[ServiceRecord, ...]:
    created_at = now or datetime.utcnow()
    return tuple(
        ServiceRecord(is_active=True, is_default=True, created_at=created_at, **entry)
        for entry in DEFAULT_SERVICES
    )


def initial_state(now: Optional[datetime] = None) -> DashboardState:
    """Empty session seeded with the built-in services"""
    return DashboardState(services=default_services(now))

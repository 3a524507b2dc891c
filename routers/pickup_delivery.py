from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.pickup_workflow import DeliveryKind, status_label
from core.response import success_response
from database.connection import get_db, require_database
from schemas.pickup_delivery import PickupDeliveryCreate, PickupDeliveryRecord
from services.pickup_delivery import (
    advance_pickup_delivery,
    create_pickup_delivery,
    delete_pickup_delivery,
    get_pickup_status,
    list_pickups_deliveries
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _payload(record) -> dict:
    payload = PickupDeliveryRecord.model_validate(record).model_dump(mode="json")
    payload["status_label"] = status_label(payload["status"])
    return payload


@router.get("/pickup-status")
def pickup_status(
    pickup_id: Optional[str] = Query(None),
    id: Optional[str] = Query(None),
    db: Optional[Session] = Depends(get_db)
):
    """Status of a pickup (or the latest one). Always answers 200."""
    return get_pickup_status(db, pickup_id or id)


@router.get("/pickups-deliveries")
def get_pickups_deliveries(
    type: Optional[DeliveryKind] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Optional[Session] = Depends(get_db)
):
    if db is None:
        return success_response(data=[], message="Database not configured")
    records = list_pickups_deliveries(db, kind=type, status=status_filter)
    return success_response(data=[_payload(record) for record in records])


@router.post("/pickups-deliveries", status_code=status.HTTP_201_CREATED)
def create_pickup_delivery_endpoint(
    data: PickupDeliveryCreate,
    db: Optional[Session] = Depends(get_db)
):
    db = require_database(db)
    record = create_pickup_delivery(db, data)
    return success_response(
        data=_payload(record),
        message=f"{data.type.value.title()} created successfully"
    )


@router.post("/pickups-deliveries/{record_id}/advance")
def advance_pickup_delivery_endpoint(
    record_id: str,
    db: Optional[Session] = Depends(get_db)
):
    """Move the record to the next status of its pickup or delivery sequence."""
    db = require_database(db)
    record = advance_pickup_delivery(db, record_id)
    return success_response(data=_payload(record), message="Status updated")


@router.delete("/pickups-deliveries/{record_id}")
def delete_pickup_delivery_endpoint(
    record_id: str,
    db: Optional[Session] = Depends(get_db)
):
    db = require_database(db)
    delete_pickup_delivery(db, record_id)
    return success_response(data={"id": record_id}, message="Pickup/Delivery deleted")

from sqlalchemy import desc
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from core.exceptions import ResourceNotFoundError
from core.pickup_workflow import DeliveryKind, PickupStatus, next_status
from models.pickup_delivery import PickupDelivery
from schemas.pickup_delivery import PickupDeliveryCreate

logger = logging.getLogger(__name__)


def get_pickup_delivery(db: Session, record_id: str, kind: Optional[DeliveryKind] = None) -> Optional[PickupDelivery]:
    query = db.query(PickupDelivery).filter(PickupDelivery.id == record_id)
    if kind is not None:
        query = query.filter(PickupDelivery.type == kind.value)
    return query.first()


def get_pickup_delivery_or_404(db: Session, record_id: str) -> PickupDelivery:
    record = get_pickup_delivery(db, record_id)
    if not record:
        raise ResourceNotFoundError("Pickup/Delivery", record_id)
    return record


def list_pickups_deliveries(
    db: Session,
    kind: Optional[DeliveryKind] = None,
    status: Optional[str] = None
) -> List[PickupDelivery]:
    """Newest first, optionally filtered by kind and status"""
    query = db.query(PickupDelivery)
    if kind is not None:
        query = query.filter(PickupDelivery.type == kind.value)
    if status:
        query = query.filter(PickupDelivery.status == status)
    return query.order_by(desc(PickupDelivery.created_at)).all()


def get_latest_pickup(db: Session) -> Optional[PickupDelivery]:
    return (
        db.query(PickupDelivery)
        .filter(PickupDelivery.type == DeliveryKind.PICKUP.value)
        .order_by(desc(PickupDelivery.created_at))
        .first()
    )


def create_pickup_delivery(db: Session, data: PickupDeliveryCreate) -> PickupDelivery:
    record = PickupDelivery(
        type=data.type.value,
        status=PickupStatus.PENDING.value,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        address=data.address,
        notes=data.notes,
        courier_id=data.courier_id,
        courier_name=data.courier_name,
        order_id=data.order_id,
        scheduled_date=data.scheduled_date
    )

    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating pickup/delivery: {str(e)}")
        raise

    logger.info(f"{record.type.title()} created: {record.id}")
    return record


def advance_pickup_delivery(db: Session, record_id: str) -> PickupDelivery:
    """Move a record one step along its kind's status sequence and persist it."""
    record = get_pickup_delivery_or_404(db, record_id)
    previous = record.status
    record.status = next_status(previous, record.type)

    if record.status == previous:
        logger.info(f"{record.type.title()} {record_id} left at '{previous}'")
        return record

    try:
        db.commit()
        db.refresh(record)
    except Exception as e:
        db.rollback()
        logger.error(f"Error advancing {record_id}: {str(e)}")
        raise

    logger.info(f"{record.type.title()} {record_id}: {previous} -> {record.status}")
    return record


def delete_pickup_delivery(db: Session, record_id: str) -> None:
    record = get_pickup_delivery_or_404(db, record_id)
    try:
        db.delete(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting {record_id}: {str(e)}")
        raise
    logger.info(f"Pickup/Delivery deleted: {record_id}")


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _status_payload(record: PickupDelivery) -> Dict[str, Any]:
    return {
        "status": record.status or PickupStatus.PENDING.value,
        "pickup_id": record.id,
        "order_id": record.order_id,
        "customer_name": record.customer_name,
        "scheduled_date": _isoformat(record.scheduled_date),
        "courier_name": record.courier_name,
        "address": record.address,
        "created_at": _isoformat(record.created_at),
    }


def get_pickup_status(db: Optional[Session], pickup_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Status of one pickup, or of the most recent one when no id is given.

    Never signals "not found" through an error: a missing database, an unknown
    id and an empty table all produce a plain status body.
    """
    if db is None:
        return {
            "status": PickupStatus.PENDING.value,
            "message": "Database not configured. Returning default status.",
        }

    if pickup_id:
        record = get_pickup_delivery(db, pickup_id, kind=DeliveryKind.PICKUP)
        if not record:
            return {
                "status": "not_found",
                "message": f"Pickup with ID '{pickup_id}' not found",
            }
        return _status_payload(record)

    record = get_latest_pickup(db)
    if not record:
        return {
            "status": PickupStatus.PENDING.value,
            "message": "No scheduled pickups found.",
        }
    return _status_payload(record)

from sqlalchemy import desc
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from database.connection import require_database
from core.exceptions import BusinessLogicError, ResourceNotFoundError, ValidationError
from models.service import Service, ServiceType, ServiceUnit
from schemas.common import parse_number
from schemas.service import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

# Built-in catalogue every shop starts with; these rows cannot be deleted
DEFAULT_SERVICES: List[Dict[str, Any]] = [
    {
        "id": "svc-1",
        "name": "Laundry Regular",
        "description": "Regular wash",
        "type": ServiceType.REGULAR.value,
        "unit_price": 8000,
        "unit": ServiceUnit.KG.value,
    },
    {
        "id": "svc-2",
        "name": "Wash + Iron",
        "description": "Wash and iron",
        "type": ServiceType.WASH_IRON.value,
        "unit_price": 10000,
        "unit": ServiceUnit.KG.value,
    },
    {
        "id": "svc-3",
        "name": "Iron Only",
        "description": "Ironing without washing",
        "type": ServiceType.IRON_ONLY.value,
        "unit_price": 5000,
        "unit": ServiceUnit.KG.value,
    },
    {
        "id": "svc-4",
        "name": "Express",
        "description": "Same-day service",
        "type": ServiceType.EXPRESS.value,
        "unit_price": 12000,
        "unit": ServiceUnit.KG.value,
    },
]


def list_services(db: Session, active_only: bool = False) -> List[Service]:
    """All services, newest first"""
    query = db.query(Service)
    if active_only:
        query = query.filter(Service.is_active.is_(True))
    return query.order_by(desc(Service.created_at)).all()


def get_service_by_id(db: Session, service_id: str) -> Optional[Service]:
    return db.query(Service).filter(Service.id == service_id).first()


def create_service(db: Optional[Session], service_data: ServiceCreate) -> Service:
    errors = service_data.validation_errors()
    if errors:
        raise ValidationError(errors)
    db = require_database(db)

    service = Service(
        name=service_data.name.strip(),
        description=service_data.description,
        type=service_data.type or ServiceType.REGULAR.value,
        unit_price=parse_number(service_data.raw_price()),
        unit=service_data.unit or ServiceUnit.KG.value,
        is_active=True if service_data.is_active is None else service_data.is_active,
        is_default=bool(service_data.is_default)
    )

    try:
        db.add(service)
        db.commit()
        db.refresh(service)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating service: {str(e)}")
        raise

    logger.info(f"Service created: {service.id} ({service.name})")
    return service


def update_service(db: Optional[Session], service_data: ServiceUpdate) -> Service:
    """Apply the provided fields; everything else keeps its stored value."""
    errors = service_data.validation_errors()
    if errors:
        raise ValidationError(errors)
    db = require_database(db)

    service_id = str(service_data.service_id)
    service = get_service_by_id(db, service_id)
    if not service:
        raise ResourceNotFoundError("Service", service_id)

    if service_data.service_name is not None:
        service.name = service_data.service_name.strip()
    if service_data.price is not None:
        service.unit_price = parse_number(service_data.price)
    if "description" in service_data.model_fields_set:
        service.description = service_data.description
    if service_data.is_active is not None:
        service.is_active = service_data.is_active

    try:
        db.commit()
        db.refresh(service)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating service {service_id}: {str(e)}")
        raise

    logger.info(f"Service updated: {service_id}")
    return service


def delete_service(db: Session, service_id: str) -> None:
    service = get_service_by_id(db, service_id)
    if not service:
        raise ResourceNotFoundError("Service", service_id)
    if service.is_default:
        raise BusinessLogicError(
            "Default services cannot be deleted",
            details={"service_id": service_id}
        )

    try:
        db.delete(service)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting service {service_id}: {str(e)}")
        raise

    logger.info(f"Service deleted: {service_id}")


def seed_default_services(db: Session) -> int:
    """Insert any missing default service; returns how many were added"""
    added = 0
    for entry in DEFAULT_SERVICES:
        if get_service_by_id(db, entry["id"]):
            continue
        db.add(Service(is_active=True, is_default=True, **entry))
        added += 1
    if added:
        db.commit()
        logger.info(f"Seeded {added} default services")
    return added

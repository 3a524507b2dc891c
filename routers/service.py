from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.response import success_response
from database.connection import get_db, require_database
from schemas.service import ServiceCreate, ServiceRecord, ServiceUpdate
from services.service_catalog import (
    create_service,
    delete_service,
    list_services,
    update_service
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _payload(service) -> dict:
    return ServiceRecord.model_validate(service).model_dump(mode="json")


@router.get("/services")
def get_all_services(db: Optional[Session] = Depends(get_db)):
    """List services as a bare JSON array; empty when no database is configured."""
    if db is None:
        logger.info("Database not configured; returning empty service list")
        return []
    return [_payload(service) for service in list_services(db)]


@router.post("/service", status_code=status.HTTP_201_CREATED)
def create_service_endpoint(
    service_data: ServiceCreate,
    db: Optional[Session] = Depends(get_db)
):
    service = create_service(db, service_data)
    return success_response(data=_payload(service), message="Service created successfully")


@router.put("/update_service")
def update_service_endpoint(
    service_data: ServiceUpdate,
    db: Optional[Session] = Depends(get_db)
):
    service = update_service(db, service_data)
    payload = _payload(service)
    payload["service_id"] = payload["id"]
    payload["service_name"] = payload["name"]
    return success_response(data=payload, message="Service updated successfully")


@router.delete("/services/{service_id}")
def delete_service_endpoint(
    service_id: str,
    db: Optional[Session] = Depends(get_db)
):
    db = require_database(db)
    delete_service(db, service_id)
    return success_response(data={"id": service_id}, message="Service deleted successfully")

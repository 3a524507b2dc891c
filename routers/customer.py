from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.exceptions import BusinessLogicError
from core.response import success_response
from database.connection import get_db, require_database
from schemas.customer import CustomerCreate, CustomerLookup, CustomerRecord
from services.customer import create_customer, get_customer_or_404

logger = logging.getLogger(__name__)
router = APIRouter()

MISSING_ID_MESSAGE = "Customer ID is required. Use ?id=<customer_id> or /customers/details/<customer_id>"


@router.post("/customers", status_code=status.HTTP_201_CREATED)
def create_customer_endpoint(
    customer_data: CustomerCreate,
    db: Optional[Session] = Depends(get_db)
):
    """Create a customer. Email and phone must not belong to another customer."""
    db = require_database(db)
    customer = create_customer(db, customer_data)
    return success_response(
        data=CustomerRecord.model_validate(customer).model_dump(mode="json"),
        message="Customer created successfully"
    )


def _customer_details(db: Optional[Session], customer_id: Optional[str]):
    if not customer_id:
        raise BusinessLogicError(MISSING_ID_MESSAGE)
    db = require_database(db)
    customer = get_customer_or_404(db, customer_id)
    return success_response(
        data=CustomerRecord.model_validate(customer).model_dump(mode="json"),
        message="Customer details retrieved successfully"
    )


@router.get("/customers/details")
def get_customer_details(
    customer_id: Optional[str] = Query(None, alias="id"),
    db: Optional[Session] = Depends(get_db)
):
    return _customer_details(db, customer_id)


@router.get("/customers/details/{customer_id}")
def get_customer_details_by_path(
    customer_id: str,
    db: Optional[Session] = Depends(get_db)
):
    return _customer_details(db, customer_id)


@router.post("/customers/details")
@router.post("/customer_endpoint")
def post_customer_details(
    lookup: Optional[CustomerLookup] = Body(None),
    customer_id: Optional[str] = Query(None, alias="id"),
    db: Optional[Session] = Depends(get_db)
):
    """Body `customer_id`/`id` wins over the `?id=` query parameter."""
    resolved = (lookup.resolved_id() if lookup else None) or customer_id
    return _customer_details(db, resolved)

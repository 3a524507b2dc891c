from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.response import success_response
from database.connection import get_db
from schemas.order import OrderCreate, OrderEdit, OrderRecord
from services.order import create_order, edit_order

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/create_order", status_code=status.HTTP_201_CREATED)
@router.post("/orders", status_code=status.HTTP_201_CREATED)
def create_order_endpoint(
    order_data: OrderCreate,
    db: Optional[Session] = Depends(get_db)
):
    """Create an order from its line items."""
    order = create_order(db, order_data)
    record = OrderRecord.model_validate(order)
    return success_response(
        data=record.model_dump(mode="json"),
        message="Order created successfully"
    )


@router.api_route("/orders/edit", methods=["POST", "PUT"])
def edit_order_endpoint(
    order_data: OrderEdit,
    db: Optional[Session] = Depends(get_db)
):
    order = edit_order(db, order_data)
    payload = OrderRecord.model_validate(order).model_dump(mode="json")
    payload["order_id"] = payload["id"]
    return success_response(data=payload, message="Order updated successfully")

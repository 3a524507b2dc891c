from datetime import datetime
from sqlalchemy.orm import Session
from typing import Optional
import logging

from database.connection import require_database
from core.exceptions import ResourceNotFoundError, ValidationError
from core.order_workflow import OrderStage
from core.pickup_workflow import DeliveryKind, PickupStatus
from models.order import Order, OrderStatus, PaymentMethod
from schemas.common import parse_number
from schemas.order import OrderCreate, OrderEdit

logger = logging.getLogger(__name__)


def get_order_by_id(db: Session, order_id: str) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def create_order(db: Optional[Session], order_data: OrderCreate) -> Order:
    """Create an order from line items; totals are computed server-side."""
    errors = order_data.validation_errors()
    if errors:
        raise ValidationError(errors)
    db = require_database(db)

    items = order_data.parsed_items()
    service_type = order_data.mapped_service_type()

    services = [
        {
            "service_id": f"service-{index}",
            "service_name": item.name,
            "service_type": service_type,
            "weight": item.quantity,
            "quantity": item.quantity,
            "unit_price": item.price,
            "subtotal": item.subtotal,
        }
        for index, item in enumerate(items)
    ]
    subtotal = sum(item.subtotal for item in items)
    total_quantity = sum(item.quantity for item in items)
    first = services[0]

    customer_id = None if order_data.customer_id is None else str(order_data.customer_id)
    customer_phone = order_data.customer_phone or ""
    if customer_id and not customer_phone:
        customer_phone = f"customer-{customer_id}"

    pickup_delivery = None
    if order_data.pickup_date or order_data.delivery_date:
        kind = DeliveryKind.PICKUP if order_data.pickup_date else DeliveryKind.DELIVERY
        pickup_delivery = {
            "type": kind.value,
            "address": "",
            "status": PickupStatus.PENDING.value,
            "scheduled_date": order_data.pickup_date or order_data.delivery_date,
        }

    order = Order(
        customer_id=customer_id,
        customer_name=order_data.customer_name or "Customer",
        customer_phone=customer_phone,
        service_id=str(order_data.service_id) if order_data.service_id else first["service_id"],
        service_name=", ".join(s["service_name"] for s in services),
        service_type=service_type,
        services=services,
        weight=total_quantity,
        quantity=total_quantity,
        unit_price=first["unit_price"],
        subtotal=subtotal,
        discount=0,
        surcharge=0,
        total_amount=subtotal,
        payment_method=order_data.payment_method or PaymentMethod.CASH.value,
        status=OrderStatus.PENDING.value,
        notes=order_data.notes,
        pickup_delivery=pickup_delivery,
        current_stage=OrderStage.RECEPTION.value
    )

    try:
        db.add(order)
        db.commit()
        db.refresh(order)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating order: {str(e)}")
        raise

    logger.info(f"Order created: {order.id} total={subtotal}")
    return order


def edit_order(db: Optional[Session], order_data: OrderEdit) -> Order:
    """Update the fields present in the request body."""
    errors = order_data.validation_errors()
    if errors:
        raise ValidationError(errors)
    db = require_database(db)

    order_id = str(order_data.order_id)
    order = get_order_by_id(db, order_id)
    if not order:
        raise ResourceNotFoundError(
            "Order",
            order_id,
            error="Order not found",
            order_id=order_id,
            message=f"No order found with ID: {order_id}"
        )

    status_error = order_data.status_error()
    if status_error:
        raise ValidationError([status_error], message="Invalid status")

    provided = order_data.model_fields_set
    if "status" in provided:
        order.status = order_data.status
        if order_data.status == OrderStatus.COMPLETED.value and order.completed_at is None:
            order.completed_at = datetime.utcnow()
    if "customer_name" in provided:
        order.customer_name = order_data.customer_name
    if "customer_phone" in provided:
        order.customer_phone = order_data.customer_phone
    if "notes" in provided:
        order.notes = order_data.notes
    if "total_amount" in provided:
        order.total_amount = parse_number(order_data.total_amount)
    if "payment_method" in provided:
        order.payment_method = order_data.payment_method
    order.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(order)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating order {order_id}: {str(e)}")
        raise

    logger.info(f"Order updated: {order_id}")
    return order

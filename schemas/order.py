from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional
from datetime import date, datetime
import re

from models.order import OrderStatus, PaymentMethod
from schemas.common import is_blank, parse_number

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ORDER_STATUSES = [s.value for s in OrderStatus]
PAYMENT_METHODS = [m.value for m in PaymentMethod]

# Service labels accepted from the order form -> stored service type
SERVICE_TYPE_MAP = {
    "Washing": "regular",
    "Wash & Iron": "wash_iron",
    "Iron Only": "iron_only",
    "Express": "express",
    "Dry Clean": "dry_clean",
}


def date_errors(field: str, value: Any) -> List[str]:
    if is_blank(value):
        return []
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return [f"{field} must be in YYYY-MM-DD format"]
    try:
        date.fromisoformat(value)
    except ValueError:
        return [f"{field} must be a valid date"]
    return []


class OrderItemIn(BaseModel):
    name: str
    quantity: float
    price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.price


# Order Creation Schema
class OrderCreate(BaseModel):
    customer_id: Any = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    service_type: Any = None
    service_id: Any = None
    pickup_date: Any = None
    delivery_date: Any = None
    items: Any = None
    notes: Optional[str] = None
    payment_method: Optional[str] = None

    def validation_errors(self) -> List[str]:
        errors = []
        fields = self.model_fields_set

        has_service_type = "service_type" in fields and self.service_type not in (None, "")
        has_service_id = "service_id" in fields and self.service_id not in (None, "")
        if not has_service_type and not has_service_id:
            errors.append("service_type or service_id is required")
        else:
            if self.service_id == "":
                errors.append("service_id cannot be empty")
            if self.service_type == "":
                errors.append("service_type cannot be empty")

        if "customer_id" in fields and self.customer_id == "":
            errors.append("customer_id cannot be empty")

        if not isinstance(self.items, list):
            errors.append("items must be a valid array")
        elif not self.items:
            errors.append("items array cannot be empty")
        else:
            for index, item in enumerate(self.items):
                errors.extend(self._item_errors(index, item))

        errors.extend(date_errors("pickup_date", self.pickup_date))
        errors.extend(date_errors("delivery_date", self.delivery_date))

        if self.payment_method is not None and self.payment_method not in PAYMENT_METHODS:
            errors.append(f"payment_method must be one of: {', '.join(PAYMENT_METHODS)}")
        return errors

    @staticmethod
    def _item_errors(index: int, item: Any) -> List[str]:
        if not isinstance(item, dict):
            return [f"items[{index}] must be an object"]
        errors = []
        if is_blank(item.get("name")):
            errors.append(f"items[{index}].name is required")
        quantity = parse_number(item.get("quantity"))
        if quantity is None or quantity <= 0:
            errors.append(f"items[{index}].quantity must be a positive number")
        price = parse_number(item.get("price"))
        if price is None or price < 0:
            errors.append(f"items[{index}].price must be a non-negative number")
        return errors

    def parsed_items(self) -> List[OrderItemIn]:
        return [
            OrderItemIn(
                name=str(item["name"]).strip(),
                quantity=parse_number(item["quantity"]),
                price=parse_number(item["price"]),
            )
            for item in self.items
        ]

    def mapped_service_type(self) -> str:
        if isinstance(self.service_type, str):
            return SERVICE_TYPE_MAP.get(self.service_type, "regular")
        return "regular"


# Order Edit Schema; only fields present in the body are applied
class OrderEdit(BaseModel):
    order_id: Any = None
    status: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    total_amount: Any = None
    payment_method: Optional[str] = None

    def validation_errors(self) -> List[str]:
        errors = []
        if not self.order_id:
            errors.append("order_id is required")
        elif isinstance(self.order_id, str) and not self.order_id.strip():
            errors.append("order_id cannot be empty")
        if "customer_name" in self.model_fields_set and is_blank(self.customer_name):
            errors.append("customer_name cannot be empty")
        if "total_amount" in self.model_fields_set:
            amount = parse_number(self.total_amount)
            if amount is None or amount < 0:
                errors.append("total_amount must be a non-negative number")
        if self.payment_method is not None and self.payment_method not in PAYMENT_METHODS:
            errors.append(f"payment_method must be one of: {', '.join(PAYMENT_METHODS)}")
        return errors

    def status_error(self) -> Optional[str]:
        if "status" in self.model_fields_set and self.status not in ORDER_STATUSES:
            return f"Status must be one of: {', '.join(ORDER_STATUSES)}"
        return None


# Order Response Schema
class OrderRecord(BaseModel):
    id: str
    customer_id: Optional[str] = None
    customer_name: str
    customer_phone: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    service_type: Optional[str] = None
    services: Optional[List[Dict[str, Any]]] = None
    weight: float = 0
    quantity: float = 0
    subtotal: float = 0
    total_amount: float
    payment_method: str = PaymentMethod.CASH.value
    status: str = OrderStatus.PENDING.value
    notes: Optional[str] = None
    pickup_delivery: Optional[Dict[str, Any]] = None
    current_stage: Optional[str] = None
    tagging_required: bool = False
    tagging_status: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

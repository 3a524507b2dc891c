from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from core.pickup_workflow import DeliveryKind, PickupStatus, is_valid_status, statuses_for


def _required_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


# Pickup/Delivery Creation Schema
class PickupDeliveryCreate(BaseModel):
    type: DeliveryKind = DeliveryKind.PICKUP
    customer_name: Optional[str] = Field(None, validate_default=True)
    customer_phone: Optional[str] = Field(None, validate_default=True)
    address: Optional[str] = Field(None, validate_default=True)
    notes: Optional[str] = None
    courier_id: Optional[str] = None
    courier_name: Optional[str] = None
    order_id: Optional[str] = None
    scheduled_date: Optional[datetime] = None

    @field_validator('customer_name')
    @classmethod
    def validate_customer_name(cls, v):
        return _required_text(v, "customer_name")

    @field_validator('customer_phone')
    @classmethod
    def validate_customer_phone(cls, v):
        return _required_text(v, "customer_phone")

    @field_validator('address')
    @classmethod
    def validate_address(cls, v):
        return _required_text(v, "address")


# Pickup/Delivery record; the status must belong to its kind's sequence
class PickupDeliveryRecord(BaseModel):
    id: str
    type: DeliveryKind
    status: str = PickupStatus.PENDING.value
    customer_name: str
    customer_phone: str
    address: str
    notes: Optional[str] = None
    courier_id: Optional[str] = None
    courier_name: Optional[str] = None
    order_id: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator('customer_name', 'customer_phone', 'address')
    @classmethod
    def validate_contact(cls, v, info):
        return _required_text(v, info.field_name)

    @model_validator(mode='after')
    def validate_status_for_kind(self):
        if not is_valid_status(self.status, self.type):
            allowed = ", ".join(statuses_for(self.type))
            raise ValueError(
                f"status '{self.status}' is not valid for a {self.type.value}; expected one of: {allowed}"
            )
        return self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Any, Dict, Optional
from datetime import datetime


# Customer Creation Schema
class CustomerCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=120, validate_default=True)
    phone: Optional[str] = Field(None, max_length=30, validate_default=True)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is None or not v.strip():
            raise ValueError('name is required')
        return v.strip()

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if v is None or not v.strip():
            raise ValueError('phone is required')
        return v.strip()

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        if v is None:
            return v
        return v.lower()


# Customer lookup body (POST /customers/details)
class CustomerLookup(BaseModel):
    customer_id: Optional[str] = None
    id: Optional[str] = None

    def resolved_id(self) -> Optional[str]:
        return self.customer_id or self.id


# Customer Response Schema
class CustomerRecord(BaseModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    total_orders: int = 0
    total_spent: float = 0
    last_order_date: Optional[datetime] = None
    created_at: datetime
    notes: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)

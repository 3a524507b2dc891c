from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Any, List, Optional
from datetime import datetime

from models.service import ServiceType, ServiceUnit
from schemas.common import is_blank, parse_number

SERVICE_TYPES = [t.value for t in ServiceType]
SERVICE_UNITS = [u.value for u in ServiceUnit]


def price_errors(value: Any) -> List[str]:
    number = parse_number(value)
    if number is None:
        return ["price must be a valid number"]
    if number < 0:
        return ["price must be a positive number"]
    if number == 0:
        return ["price must be greater than zero"]
    return []


# Service Creation Schema (checked field by field so every problem is reported)
class ServiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    description: Optional[str] = None
    type: Optional[str] = None
    price: Any = None
    unit_price: Any = Field(None, alias="unitPrice")
    unit: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")
    is_default: Optional[bool] = Field(None, alias="isDefault")

    def raw_price(self) -> Any:
        """`price` wins whenever the key was sent, even as null"""
        if "price" in self.model_fields_set:
            return self.price
        return self.unit_price

    def price_provided(self) -> bool:
        return bool({"price", "unit_price"} & self.model_fields_set)

    def validation_errors(self) -> List[str]:
        errors = []
        if is_blank(self.name) or not isinstance(self.name, str):
            errors.append("name is required and cannot be empty")

        if not self.price_provided():
            errors.append("price or unitPrice is required")
        else:
            errors.extend(price_errors(self.raw_price()))

        if self.type is not None and self.type not in SERVICE_TYPES:
            errors.append(f"type must be one of: {', '.join(SERVICE_TYPES)}")
        if self.unit is not None and self.unit not in SERVICE_UNITS:
            errors.append(f"unit must be one of: {', '.join(SERVICE_UNITS)}")
        return errors


# Service Update Schema
class ServiceUpdate(BaseModel):
    service_id: Any = None
    service_name: Optional[str] = None
    price: Any = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    def validation_errors(self) -> List[str]:
        errors = []
        if is_blank(self.service_id):
            errors.append("service_id is required")
        if "service_name" in self.model_fields_set and is_blank(self.service_name):
            errors.append("service_name cannot be empty")
        if self.price is not None:
            errors.extend(price_errors(self.price))
        return errors


# Service Response Schema
class ServiceRecord(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    type: str = ServiceType.REGULAR.value
    unit_price: float
    unit: str = ServiceUnit.KG.value
    is_active: bool = True
    is_default: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def price(self) -> float:
        return self.unit_price

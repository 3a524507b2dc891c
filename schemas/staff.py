from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
import enum

STAFF_ACTIVE = "active"


class StaffRole(str, enum.Enum):
    CASHIER = "cashier"
    OPERATOR = "operator"
    COURIER = "courier"
    SUPERVISOR = "supervisor"


class StaffRecord(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    role: StaffRole
    phone: Optional[str] = None
    email: Optional[str] = None
    outlet_id: Optional[str] = None
    status: str = STAFF_ACTIVE
    created_at: datetime

    model_config = ConfigDict(use_enum_values=True)

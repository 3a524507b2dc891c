import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text, Numeric
from database.base import Base

class ServiceType(str, enum.Enum):
    REGULAR = "regular"
    WASH_IRON = "wash_iron"
    IRON_ONLY = "iron_only"
    EXPRESS = "express"
    DRY_CLEAN = "dry_clean"
    CUSTOM = "custom"

class ServiceUnit(str, enum.Enum):
    KG = "kg"
    PIECE = "piece"
    ITEM = "item"

class Service(Base):
    __tablename__ = "services"

    id = Column(String, primary_key=True, default=lambda: f"svc-{uuid.uuid4().hex[:12]}", index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String, default=ServiceType.REGULAR.value, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    unit = Column(String, default=ServiceUnit.KG.value, nullable=False)
    is_active = Column(Boolean, default=True)
    is_default = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

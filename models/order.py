import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Numeric, Boolean, JSON
from database.base import Base
import enum

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    QRIS = "qris"
    CREDIT = "credit"

class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: f"ORD-{uuid.uuid4().hex[:12]}", index=True)
    customer_id = Column(String, nullable=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    service_id = Column(String, nullable=True)
    service_name = Column(String, nullable=True)
    service_type = Column(String, nullable=True)
    services = Column(JSON, nullable=True)
    weight = Column(Numeric(10, 2), default=0)
    quantity = Column(Numeric(10, 2), default=0)
    unit_price = Column(Numeric(12, 2), default=0)
    subtotal = Column(Numeric(12, 2), default=0)
    discount = Column(Numeric(12, 2), default=0)
    surcharge = Column(Numeric(12, 2), default=0)
    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, default=PaymentMethod.CASH.value)
    status = Column(String, default=OrderStatus.PENDING.value, index=True)
    notes = Column(Text, nullable=True)
    pickup_delivery = Column(JSON, nullable=True)
    current_stage = Column(String, default="reception")
    tagging_required = Column(Boolean, default=False)
    tagging_status = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from database.base import Base
from core.pickup_workflow import DeliveryKind, PickupStatus

class PickupDelivery(Base):
    __tablename__ = "pickups_deliveries"

    id = Column(String, primary_key=True, default=lambda: f"pd-{uuid.uuid4().hex[:12]}", index=True)
    type = Column(String, default=DeliveryKind.PICKUP.value, nullable=False, index=True)
    status = Column(String, default=PickupStatus.PENDING.value, nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    address = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    courier_id = Column(String, nullable=True)
    courier_name = Column(String, nullable=True)
    order_id = Column(String, nullable=True, index=True)
    scheduled_date = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Numeric, JSON
from database.base import Base

class Customer(Base):
    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=lambda: f"cust-{uuid.uuid4().hex[:12]}", index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True, index=True)
    address = Column(Text, nullable=True)
    total_orders = Column(Integer, default=0)
    total_spent = Column(Numeric(12, 2), default=0)
    last_order_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

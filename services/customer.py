from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from core.exceptions import ConflictError, ResourceNotFoundError
from models.customer import Customer
from schemas.customer import CustomerCreate

logger = logging.getLogger(__name__)


def get_customer_by_email(db: Session, email: str) -> Optional[Customer]:
    return db.query(Customer).filter(func.lower(Customer.email) == email.lower()).first()


def get_customer_by_phone(db: Session, phone: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.phone == phone).first()


def get_customer_by_id(db: Session, customer_id: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def get_customer_or_404(db: Session, customer_id: str) -> Customer:
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise ResourceNotFoundError("Customer", customer_id)
    return customer


def create_customer(db: Session, customer_data: CustomerCreate) -> Customer:
    """Create a customer; email (case-insensitive) and phone must be unique."""
    if customer_data.email:
        existing = get_customer_by_email(db, customer_data.email)
        if existing:
            logger.warning(f"Duplicate customer email rejected: {customer_data.email}")
            raise ConflictError(
                "A customer with this email already exists",
                details={"email": customer_data.email, "existing_customer_id": existing.id}
            )

    existing_phone = get_customer_by_phone(db, customer_data.phone)
    if existing_phone:
        logger.warning(f"Duplicate customer phone rejected: {customer_data.phone}")
        raise ConflictError(
            "A customer with this phone number already exists",
            details={"phone": customer_data.phone, "existing_customer_id": existing_phone.id}
        )

    customer = Customer(
        name=customer_data.name,
        phone=customer_data.phone,
        email=customer_data.email,
        address=customer_data.address,
        notes=customer_data.notes,
        preferences=customer_data.preferences,
        total_orders=0,
        total_spent=0
    )

    try:
        db.add(customer)
        db.commit()
        db.refresh(customer)
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Database integrity error creating customer: {str(e)}")
        raise ConflictError("A customer with this email or phone number already exists")
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error creating customer: {str(e)}")
        raise

    logger.info(f"Customer created: {customer.id}")
    return customer

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.models import Customer, Order
from payment.exceptions import ConflictError, NotFoundError
from schemas.customer_schema import CustomerCreate

logger = logging.getLogger(__name__)


def get_customer_by_email(db: Session, email: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.email == email).first()


# Return the customer for this email, creating it on first checkout.
# Existing rows are reused as they are; contact details are not overwritten.
def get_or_create_customer(db: Session, customer_data: CustomerCreate) -> Tuple[Customer, bool]:
    customer = get_customer_by_email(db, customer_data.email)
    if customer:
        logger.info("[customer_service] Found existing customer %s for %s", customer.id, customer_data.email)
        return customer, False

    new_customer = Customer(
        email=customer_data.email,
        name=customer_data.name,
        address=customer_data.address,
        phone=customer_data.phone,
    )
    try:
        # Savepoint so a lost race only discards this insert
        with db.begin_nested():
            db.add(new_customer)
            db.flush()
    except IntegrityError as e:
        logger.info("[customer_service] Insert for %s rejected (%s), re-reading", customer_data.email, e.orig)
        customer = get_customer_by_email(db, customer_data.email)
        if customer is None:
            # The blocking row is not visible, so surface the database error itself
            raise ConflictError(
                f"Customer insert rejected for {customer_data.email}: {e.orig}",
                details={"error": str(e.orig)},
            )
        return customer, False

    logger.info("[customer_service] Created new customer %s for %s", new_customer.id, customer_data.email)
    return new_customer, True


def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def get_customer_by_order_id(db: Session, order_id: int) -> Customer:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order", order_id)
    if not order.customer:
        raise NotFoundError("Customer for order", order_id)
    return order.customer

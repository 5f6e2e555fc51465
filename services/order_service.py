# services/order_service.py
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import CheckoutSettings
from models.models import Order, OrderItem, OrderStatus, PaymentMethod
from payment.exceptions import CheckoutError, NotFoundError, StorageError
from schemas.customer_schema import CustomerCreate
from schemas.orders_schema import OrderCreate
from services.cart_checkout_service import verify_order_total
from services.customer_service import get_or_create_customer

logger = logging.getLogger(__name__)


def place_order(db: Session, order_data: OrderCreate, settings: CheckoutSettings) -> Order:
    """Find-or-create the customer, then write the order and its items as one unit of work.

    The supplied total is checked against the priced cart before anything is written
    and stored exactly as supplied.

    Raises:
        ValidationError: if the total does not match the cart
        ConflictError: if the customer email cannot be created or re-read
        StorageError: on any other persistence failure; nothing is committed
    """
    logger.info(
        "[order_service] Received order - email: %s, payment method: %s, items: %d, total: %s",
        order_data.email, order_data.payment_method, len(order_data.cart_items), order_data.total,
    )

    verify_order_total(order_data.total, order_data.cart_items, settings)

    try:
        customer, _ = get_or_create_customer(
            db,
            CustomerCreate(
                email=order_data.email,
                name=order_data.name,
                address=order_data.address,
                phone=order_data.phone,
            ),
        )

        order = Order(
            customer_id=customer.id,
            total_amount=order_data.total,
            payment_method=order_data.payment_method or PaymentMethod.cash_on_delivery,
            status=OrderStatus.pending,
        )
        db.add(order)
        db.flush()  # Get order.id before adding items

        for item in order_data.cart_items:
            db.add(OrderItem(
                order_id=order.id,
                product_id=str(item.id),
                quantity=item.quantity,
                price=item.price,
            ))

        db.commit()
        db.refresh(order)
    except CheckoutError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[order_service] Failed to persist order for %s: %s", order_data.email, e)
        raise StorageError(str(e))

    logger.info("[order_service] Created order %s with %d items", order.id, len(order_data.cart_items))
    return order


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def require_order(db: Session, order_id: int) -> Order:
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order", order_id)
    return order

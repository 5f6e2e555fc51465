# routers/order.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.settings import CheckoutSettings, get_checkout_settings
from database.db import get_db
from payment.exceptions import CheckoutError
from schemas.customer_schema import CustomerOut
from schemas.orders_schema import OrderCreate, OrderOut, OrderPlaced, QuoteOut, QuoteRequest
from services import order_service
from services.cart_checkout_service import calculate_cart_total
from services.customer_service import get_customer_by_order_id
from utils.responses import ORDER_FAILURE_PREFIX, checkout_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.post("", response_model=OrderPlaced)
def place_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    settings: CheckoutSettings = Depends(get_checkout_settings),
):
    try:
        order = order_service.place_order(db, order_data, settings)
    except CheckoutError as e:
        logger.error("Error placing order (%s): %s", e.error_type, e.message)
        return checkout_error_response(e, prefix=ORDER_FAILURE_PREFIX)
    return OrderPlaced(order_id=order.id)


@router.post("/quote", response_model=QuoteOut)
def quote_order(quote: QuoteRequest, settings: CheckoutSettings = Depends(get_checkout_settings)):
    return calculate_cart_total(quote.cart_items, settings)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    try:
        return order_service.require_order(db, order_id)
    except CheckoutError as e:
        return checkout_error_response(e)


@router.get("/{order_id}/customer", response_model=CustomerOut)
def get_order_customer(order_id: int, db: Session = Depends(get_db)):
    try:
        return get_customer_by_order_id(db, order_id)
    except CheckoutError as e:
        return checkout_error_response(e)

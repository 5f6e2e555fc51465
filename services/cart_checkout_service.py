# services/cart_checkout_service.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, Iterable

from config.settings import CheckoutSettings
from payment.exceptions import ValidationError
from schemas.orders_schema import CartItem

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_cart_total(items: Iterable[CartItem], settings: CheckoutSettings) -> Dict[str, Any]:
    """Subtotal, tax and shipping for a cart, the way the checkout page prices it"""
    items = list(items)
    subtotal = sum((Decimal(str(item.price)) * item.quantity for item in items), Decimal("0"))
    tax = subtotal * Decimal(str(settings.tax_rate))
    shipping = Decimal(str(settings.shipping_fee))

    return {
        "subtotal": _money(subtotal),
        "tax": _money(tax),
        "shipping": _money(shipping),
        "total": _money(subtotal + tax + shipping),
        "items_count": len(items),
    }


def verify_order_total(total: Decimal, items: Iterable[CartItem], settings: CheckoutSettings) -> Dict[str, Any]:
    """Reject a client supplied total that does not match the priced cart"""
    quote = calculate_cart_total(items, settings)
    if not settings.verify_totals:
        return quote

    difference = abs(Decimal(str(total)) - quote["total"])
    if difference > Decimal(str(settings.total_tolerance)):
        logger.warning(
            "[CART_CHECKOUT] Total mismatch - supplied: %s, expected: %s", total, quote["total"]
        )
        raise ValidationError(
            f"Order total {total} does not match cart total {quote['total']}",
            field="total",
            details={k: str(v) for k, v in quote.items()},
        )
    return quote

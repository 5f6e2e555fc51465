"""Centralized gateway endpoints and checkout constants."""

INITIATE_PAYMENT_PATH = "/initiate-payment"

DEFAULT_CURRENCY = "BDT"
DEFAULT_VENDOR = "paystation"
DEFAULT_CONFIRMATION_PATH = "/model_test"

# Gateway reports success with a string status code
GATEWAY_SUCCESS_STATUS = "success"
GATEWAY_SUCCESS_CODE = "200"

DEFAULT_TAX_RATE = 0.05
DEFAULT_SHIPPING_FEE = 0


def get_initiate_payment_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{INITIATE_PAYMENT_PATH}"


def get_callback_url(protocol: str, host: str, path: str, customer_id) -> str:
    # protocol arrives as "https:" (browser location style) or "https"
    scheme = protocol if protocol.endswith(":") else f"{protocol}:"
    return f"{scheme}//{host}{path}?customer_id={customer_id}"

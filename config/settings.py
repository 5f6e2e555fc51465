"""
Settings - environment driven configuration for checkout and the payment gateway
Values are read once per process and injected into routers through FastAPI dependencies
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from config.constants import (
    DEFAULT_CONFIRMATION_PATH,
    DEFAULT_CURRENCY,
    DEFAULT_SHIPPING_FEE,
    DEFAULT_TAX_RATE,
    DEFAULT_VENDOR,
)

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class GatewaySettings(BaseModel):
    """Hosted payment gateway credentials and request options"""
    merchant_id: Optional[str] = Field(None, description="Merchant id issued by the gateway")
    password: Optional[str] = Field(None, description="Merchant password issued by the gateway")
    sandbox_base_url: Optional[str] = Field(None, description="Gateway base URL")
    currency: str = Field(DEFAULT_CURRENCY, description="Only currency accepted by the storefront")
    vendor: str = Field(DEFAULT_VENDOR, description="Vendor tag stored on payment sessions")
    confirmation_path: str = Field(DEFAULT_CONFIRMATION_PATH, description="Path the gateway redirects back to")
    pay_with_charge: int = Field(1, description="Ask the gateway to include its fee in the price")
    timeout: float = Field(30, gt=0, description="Request timeout in seconds")


class CheckoutSettings(BaseModel):
    """Order total calculation options"""
    tax_rate: float = Field(DEFAULT_TAX_RATE, ge=0)
    shipping_fee: float = Field(DEFAULT_SHIPPING_FEE, ge=0)
    verify_totals: bool = True
    total_tolerance: float = Field(0.01, ge=0)


def load_gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        merchant_id=os.getenv("PAYSTATION_MERCHANT_ID"),
        password=os.getenv("PAYSTATION_PASSWORD"),
        sandbox_base_url=os.getenv("SANDBOX_URL"),
        currency=os.getenv("PAYSTATION_CURRENCY", DEFAULT_CURRENCY),
        vendor=os.getenv("PAYSTATION_VENDOR", DEFAULT_VENDOR),
        confirmation_path=os.getenv("PAYMENT_CONFIRMATION_PATH", DEFAULT_CONFIRMATION_PATH),
        pay_with_charge=int(os.getenv("PAYSTATION_PAY_WITH_CHARGE", "1")),
        timeout=float(os.getenv("PAYSTATION_TIMEOUT", "30")),
    )


def load_checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(
        tax_rate=float(os.getenv("CHECKOUT_TAX_RATE", str(DEFAULT_TAX_RATE))),
        shipping_fee=float(os.getenv("CHECKOUT_SHIPPING_FEE", str(DEFAULT_SHIPPING_FEE))),
        verify_totals=_env_bool("CHECKOUT_VERIFY_TOTALS", True),
        total_tolerance=float(os.getenv("CHECKOUT_TOTAL_TOLERANCE", "0.01")),
    )


@lru_cache()
def get_gateway_settings() -> GatewaySettings:
    return load_gateway_settings()


@lru_cache()
def get_checkout_settings() -> CheckoutSettings:
    return load_checkout_settings()

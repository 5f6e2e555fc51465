"""
Payment Schemas - Data models and validation for payment operations
Defines the inbound initiation request and the gateway wire models
"""

from decimal import Decimal

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, Union
from datetime import datetime


class PaymentInitiateRequest(BaseModel):
    """Payment initiation request model"""
    customer_id: int = Field(..., description="Customer paying for the order")
    amount: Decimal = Field(..., gt=0, description="Order total to charge")
    order_id: Optional[int] = Field(None, description="Order the payment belongs to, for logging only")


class PaymentInitiateResponse(BaseModel):
    """Payment initiation response model"""
    success: bool = Field(True, description="Whether the gateway accepted the request")
    payment_url: str = Field(..., description="Hosted payment page URL")
    transaction_id: str = Field(..., description="Invoice number sent to the gateway")


class GatewayInitiateRequest(BaseModel):
    """Body of the gateway initiate-payment call"""
    merchantId: str
    password: str
    invoice_number: str
    payment_amount: float
    currency: str
    cust_name: str
    cust_phone: str
    cust_email: str = ""
    cust_address: str
    callback_url: str
    pay_with_charge: int = 1


class GatewayInitiateResponse(BaseModel):
    """Gateway initiate-payment response payload"""
    status: Optional[str] = None
    status_code: Optional[Union[str, int]] = None
    message: Optional[str] = None
    invoice_number: Optional[str] = None
    payment_url: Optional[str] = None
    payment_amount: Optional[Any] = None

    class Config:
        extra = "allow"  # Keep any additional fields the gateway sends


class PaymentSessionOut(BaseModel):
    """Stored payment session"""
    payment_id: str
    customer_id: int
    created_at: datetime
    data: Dict[str, Any]

    class Config:
        from_attributes = True


class PaymentDiagnostics(BaseModel):
    """Payment system diagnostics model"""
    gateway_config: Dict[str, Any] = Field(..., description="Gateway configuration status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Diagnostics timestamp")

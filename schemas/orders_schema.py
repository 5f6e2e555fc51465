from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional, Union
from datetime import datetime

from models.models import OrderStatus, PaymentMethod


class CartItem(BaseModel):
    id: Union[int, str] = Field(..., description="Catalog product id")
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, description="Unit price shown in the cart")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("Product id must not be empty")
        return v


class OrderCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    payment_method: Optional[PaymentMethod] = Field(None, alias="paymentMethod")
    cart_items: List[CartItem] = Field(..., alias="cartItems", min_length=1)
    total: Decimal = Field(..., ge=0)

    @field_validator("payment_method", mode="before")
    @classmethod
    def default_payment_method(cls, v):
        # Empty values from the checkout form mean cash on delivery
        if not v:
            return PaymentMethod.cash_on_delivery
        return v

    class Config:
        populate_by_name = True


class OrderPlaced(BaseModel):
    success: bool = True
    order_id: int = Field(..., serialization_alias="orderId")
    message: str = "Order placed successfully!"


class OrderItemOut(BaseModel):
    id: int
    product_id: str
    quantity: int
    price: float

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    id: int
    customer_id: int
    total_amount: float
    payment_method: PaymentMethod
    status: OrderStatus
    created_at: Optional[datetime] = None
    items: List[OrderItemOut]

    class Config:
        from_attributes = True


class QuoteRequest(BaseModel):
    cart_items: List[CartItem] = Field(..., alias="cartItems", min_length=1)

    class Config:
        populate_by_name = True


class QuoteOut(BaseModel):
    subtotal: float
    tax: float
    shipping: float
    total: float
    items_count: int

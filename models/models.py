"""
Models for the storefront checkout
Customers, Orders and their line items, and payment gateway sessions
"""

import enum
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, ForeignKey, JSON,
    Enum as SAEnum, CheckConstraint
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


# ------------------------------
# Enums
# ------------------------------

class PaymentMethod(str, enum.Enum):
    cash_on_delivery = "cash_on_delivery"
    instant_payment = "instant_payment"


class OrderStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"
    cancelled = "cancelled"


# ------------------------------
# Customers
# ------------------------------

class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    # Natural key for find-or-create; uniqueness guards concurrent checkouts
    email = Column(String(255), unique=True, nullable=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(1000), nullable=False)
    phone = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    orders = relationship("Order", back_populates="customer")
    payment_sessions = relationship("PaymentSession", back_populates="customer")


# ------------------------------
# Orders
# ------------------------------

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(
        SAEnum(PaymentMethod, name="payment_method_enum", native_enum=False),
        nullable=False,
        default=PaymentMethod.cash_on_delivery,
    )
    status = Column(
        SAEnum(OrderStatus, name="order_status_enum", native_enum=False),
        nullable=False,
        default=OrderStatus.pending,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # Catalog ids are owned by the product service, stored as given
    product_id = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(12, 2), nullable=False)  # unit price at purchase time
    created_at = Column(DateTime, default=datetime.utcnow)

    order = relationship("Order", back_populates="items")


# ------------------------------
# Payment sessions
# ------------------------------

class PaymentSession(Base):
    __tablename__ = "payment_sessions"

    # Transaction id, also sent to the gateway as invoice_number
    payment_id = Column(String(100), primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    data = Column(JSON, nullable=False)

    customer = relationship("Customer", back_populates="payment_sessions")

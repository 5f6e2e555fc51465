"""Order placement through POST /orders and the order service."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from config.settings import CheckoutSettings
from models.models import Customer, Order, OrderItem, OrderStatus, PaymentMethod
from payment.exceptions import StorageError, ValidationError
from schemas.orders_schema import OrderCreate
from services.order_service import place_order


def test_place_order_creates_customer_order_and_items(client, db_session, order_payload):
    response = client.post("/orders", json=order_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Order placed successfully!"

    customers = db_session.query(Customer).all()
    assert len(customers) == 1
    assert customers[0].email == "a@b.com"

    order = db_session.query(Order).one()
    assert order.id == body["orderId"]
    assert order.customer_id == customers[0].id
    assert order.total_amount == Decimal("21.00")
    assert order.status == OrderStatus.pending
    assert order.payment_method == PaymentMethod.cash_on_delivery

    item = db_session.query(OrderItem).one()
    assert item.order_id == order.id
    assert item.product_id == "1"
    assert item.quantity == 2
    assert item.price == Decimal("10.00")


def test_second_order_with_same_email_reuses_customer(client, db_session, order_payload):
    first = client.post("/orders", json=order_payload)
    second_payload = dict(order_payload, name="Renamed", address="Elsewhere")
    second = client.post("/orders", json=second_payload)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["orderId"] != second.json()["orderId"]

    customer = db_session.query(Customer).one()
    # Existing contact details are kept
    assert customer.name == "A"
    assert customer.address == "X"
    assert db_session.query(Order).filter(Order.customer_id == customer.id).count() == 2


@pytest.mark.parametrize(
    "payment_method, expected",
    [
        ("instant_payment", PaymentMethod.instant_payment),
        ("cash_on_delivery", PaymentMethod.cash_on_delivery),
        ("", PaymentMethod.cash_on_delivery),
        (None, PaymentMethod.cash_on_delivery),
    ],
)
def test_payment_method_is_stored_or_defaulted(client, db_session, order_payload, payment_method, expected):
    order_payload["paymentMethod"] = payment_method

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 200
    assert db_session.query(Order).one().payment_method == expected


def test_unknown_payment_method_is_rejected(client, db_session, order_payload):
    order_payload["paymentMethod"] = "crypto"

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "validation"
    assert body["message"].startswith("Failed to place order. Please try again. Error: paymentMethod: ")
    assert db_session.query(Order).count() == 0


def test_every_cart_entry_becomes_an_order_item(client, db_session, order_payload):
    order_payload["cartItems"] = [
        {"id": 1, "quantity": 2, "price": 10},
        {"id": "sku-7", "quantity": 1, "price": 99.5},
        {"id": 3, "quantity": 5, "price": 0.2},
    ]
    order_payload["total"] = 126.53  # 120.50 + 5% tax, rounded half up

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 200
    items = db_session.query(OrderItem).order_by(OrderItem.id).all()
    assert [(i.product_id, i.quantity, i.price) for i in items] == [
        ("1", 2, Decimal("10.00")),
        ("sku-7", 1, Decimal("99.50")),
        ("3", 5, Decimal("0.20")),
    ]
    assert db_session.query(Order).one().total_amount == Decimal("126.53")


def test_mismatched_total_is_rejected_before_any_write(client, db_session, order_payload):
    order_payload["total"] = 5

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "validation"
    assert body["message"].startswith("Failed to place order. Please try again. Error: ")
    assert db_session.query(Customer).count() == 0
    assert db_session.query(Order).count() == 0


def test_total_is_stored_as_supplied_when_verification_is_off(client, db_session, order_payload, checkout_settings):
    checkout_settings.verify_totals = False
    order_payload["total"] = 19.99

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 200
    assert db_session.query(Order).one().total_amount == Decimal("19.99")


@pytest.mark.parametrize(
    "field, value",
    [
        ("cartItems", []),
        ("email", "not-an-email"),
        ("name", ""),
        ("total", -1),
    ],
)
def test_malformed_orders_are_rejected(client, db_session, order_payload, field, value):
    order_payload[field] = value

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "validation"
    assert body["message"].startswith(f"Failed to place order. Please try again. Error: {field}: ")
    assert db_session.query(Customer).count() == 0
    assert db_session.query(Order).count() == 0


def test_non_positive_quantity_is_rejected(client, db_session, order_payload):
    order_payload["cartItems"] = [{"id": 1, "quantity": 0, "price": 10}]

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Failed to place order. Please try again. Error: cartItems.0.quantity: Input should be greater than 0"
    )
    assert db_session.query(OrderItem).count() == 0


def test_missing_field_gets_structured_failure_body(client, db_session, order_payload):
    del order_payload["email"]

    response = client.post("/orders", json=order_payload)

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error_type": "validation",
        "message": "Failed to place order. Please try again. Error: email: Field required",
    }
    assert db_session.query(Customer).count() == 0


def test_email_domain_case_is_folded_for_customer_reuse(client, db_session, order_payload):
    order_payload["email"] = "a@B.com"
    first = client.post("/orders", json=order_payload)
    order_payload["email"] = "a@b.com"
    second = client.post("/orders", json=order_payload)

    assert first.status_code == 200
    assert second.status_code == 200
    customer = db_session.query(Customer).one()
    assert customer.email == "a@b.com"
    assert db_session.query(Order).filter(Order.customer_id == customer.id).count() == 2


def test_refresh_failure_after_commit_is_a_storage_error(db_session, order_payload):
    failure = OperationalError("SELECT orders", {}, Exception("connection reset"))

    with patch.object(db_session, "refresh", side_effect=failure):
        with pytest.raises(StorageError) as exc_info:
            place_order(db_session, OrderCreate(**order_payload), CheckoutSettings())

    assert "connection reset" in exc_info.value.message


def test_storage_failure_rolls_back_the_whole_order(db_session, order_payload):
    order_data = OrderCreate(**order_payload)
    failure = OperationalError("INSERT INTO order_items", {}, Exception("database is gone"))

    with patch.object(db_session, "commit", side_effect=failure):
        with pytest.raises(StorageError) as exc_info:
            place_order(db_session, order_data, CheckoutSettings())

    assert exc_info.value.error_type == "storage"
    assert "database is gone" in exc_info.value.message
    assert db_session.query(Order).count() == 0
    assert db_session.query(OrderItem).count() == 0
    assert db_session.query(Customer).count() == 0


def test_storage_failure_is_reported_as_structured_500(client, db_session, order_payload):
    failure = OperationalError("INSERT INTO orders", {}, Exception("connection lost"))

    with patch.object(db_session, "commit", side_effect=failure):
        response = client.post("/orders", json=order_payload)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "storage"
    assert "connection lost" in body["message"]


def test_place_order_service_checks_totals(db_session, order_payload):
    order_payload["total"] = 20
    order_data = OrderCreate(**order_payload)

    with pytest.raises(ValidationError) as exc_info:
        place_order(db_session, order_data, CheckoutSettings())

    assert exc_info.value.field == "total"


def test_get_order_returns_items(client, order_payload):
    order_id = client.post("/orders", json=order_payload).json()["orderId"]

    response = client.get(f"/orders/{order_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == order_id
    assert body["total_amount"] == 21.0
    assert body["status"] == "pending"
    assert body["payment_method"] == "cash_on_delivery"
    assert body["items"][0]["product_id"] == "1"
    assert body["items"][0]["quantity"] == 2


def test_get_missing_order_is_404(client):
    response = client.get("/orders/999")

    assert response.status_code == 404
    assert response.json()["error_type"] == "not_found"


def test_get_customer_for_order(client, order_payload):
    order_id = client.post("/orders", json=order_payload).json()["orderId"]

    response = client.get(f"/orders/{order_id}/customer")

    assert response.status_code == 200
    assert response.json()["email"] == "a@b.com"
    assert response.json()["phone"] == "01700000000"


def test_get_customer_for_missing_order_is_404(client):
    response = client.get("/orders/42/customer")

    assert response.status_code == 404
    assert response.json()["message"] == "Order not found: 42"


def test_quote_prices_the_cart(client):
    response = client.post("/orders/quote", json={"cartItems": [{"id": 1, "quantity": 2, "price": 10}]})

    assert response.status_code == 200
    assert response.json() == {
        "subtotal": 20.0,
        "tax": 1.0,
        "shipping": 0.0,
        "total": 21.0,
        "items_count": 1,
    }

import os

# Keep the application engine off the developer's database file
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from config.settings import CheckoutSettings, GatewaySettings, get_checkout_settings, get_gateway_settings
from database.db import enable_sqlite_savepoints, get_db
from models.models import Base

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_savepoints(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def gateway_settings():
    return GatewaySettings(
        merchant_id="104-1653730183",
        password="merchant-secret",
        sandbox_base_url="https://sandbox.paystation.test",
    )


@pytest.fixture()
def checkout_settings():
    return CheckoutSettings()


@pytest.fixture()
def client(db_session, gateway_settings, checkout_settings):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway_settings] = lambda: gateway_settings
    app.dependency_overrides[get_checkout_settings] = lambda: checkout_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def order_payload():
    return {
        "email": "a@b.com",
        "name": "A",
        "address": "X",
        "phone": "01700000000",
        "cartItems": [{"id": 1, "quantity": 2, "price": 10}],
        "total": 21,
    }

# Payment Module
# Hosted payment gateway integration and payment session storage

from .paystation_client import PayStationClient
from .payment_service import PaymentService
from .schemas import PaymentInitiateRequest, PaymentInitiateResponse, PaymentSessionOut
from .exceptions import (
    CheckoutError,
    ValidationError,
    NotFoundError,
    ConflictError,
    GatewayError,
    StorageError,
    ConfigurationError,
)

__all__ = [
    'PayStationClient',
    'PaymentService',
    'PaymentInitiateRequest',
    'PaymentInitiateResponse',
    'PaymentSessionOut',
    'CheckoutError',
    'ValidationError',
    'NotFoundError',
    'ConflictError',
    'GatewayError',
    'StorageError',
    'ConfigurationError',
]

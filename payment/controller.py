"""
Payment Controller - API endpoints for payment operations
Handles payment initiation, session lookup and diagnostics
"""

import logging

from fastapi import APIRouter, Request, Depends
from sqlalchemy.orm import Session

from config.settings import GatewaySettings, get_gateway_settings
from database.db import get_db
from utils.responses import PAYMENT_FAILURE_PREFIX, callback_origin, checkout_error_response
from .exceptions import CheckoutError
from .payment_service import PaymentService
from .paystation_client import describe_configuration
from .schemas import (
    PaymentDiagnostics,
    PaymentInitiateRequest,
    PaymentInitiateResponse,
    PaymentSessionOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


# ---------------- Payment Diagnostics ---------------- #
@router.get("/diagnostics", response_model=PaymentDiagnostics)
def payment_diagnostics(settings: GatewaySettings = Depends(get_gateway_settings)):
    """Report whether the gateway is configured, without revealing credentials"""
    return PaymentDiagnostics(gateway_config=describe_configuration(settings))


# ---------------- Payment Initiation ---------------- #
@router.post("/initiate", response_model=PaymentInitiateResponse)
def initiate_payment(
    payload: PaymentInitiateRequest,
    request: Request,
    db: Session = Depends(get_db),
    settings: GatewaySettings = Depends(get_gateway_settings),
):
    """Create a hosted payment page for the customer and return its URL"""
    host, protocol = callback_origin(request)
    try:
        payment_service = PaymentService(db, settings=settings)
        session = payment_service.initiate_payment(
            customer_id=payload.customer_id,
            amount=payload.amount,
            callback_host=host,
            callback_protocol=protocol,
            order_id=payload.order_id,
        )
    except CheckoutError as e:
        logger.warning("[payment_controller] Payment initiation failed (%s): %s", e.error_type, e.message)
        return checkout_error_response(e, prefix=PAYMENT_FAILURE_PREFIX)

    return PaymentInitiateResponse(
        payment_url=session.data["payment_url"],
        transaction_id=session.payment_id,
    )


# ---------------- Payment Sessions ---------------- #
@router.get("/sessions/{transaction_id}", response_model=PaymentSessionOut)
def get_payment_session(transaction_id: str, db: Session = Depends(get_db)):
    try:
        session = PaymentService(db).get_session(transaction_id)
    except CheckoutError as e:
        return checkout_error_response(e)
    return session

"""
Payment Service - Core payment initiation logic
Handles the gateway handshake and payment session storage
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import uuid4
from typing import Optional, Dict, Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.constants import GATEWAY_SUCCESS_CODE, GATEWAY_SUCCESS_STATUS, get_callback_url
from config.settings import GatewaySettings
from models.models import PaymentSession
from services.customer_service import get_customer_by_id
from .exceptions import ConfigurationError, GatewayError, NotFoundError, StorageError
from .paystation_client import PayStationClient
from .schemas import GatewayInitiateResponse

logger = logging.getLogger(__name__)


class PaymentService:
    """Core payment initiation service"""

    def __init__(
        self,
        db: Session,
        client: Optional[PayStationClient] = None,
        settings: Optional[GatewaySettings] = None,
    ):
        self.db = db
        self.client = client
        self.settings = settings

    def _get_client(self) -> PayStationClient:
        # Credentials are checked only once a known customer is paying
        if self.client is None:
            if self.settings is None:
                raise ConfigurationError("Payment gateway client not configured")
            self.client = PayStationClient(self.settings)
        return self.client

    def _validate_gateway_response(self, response_data: Dict[str, Any]) -> GatewayInitiateResponse:
        try:
            parsed = GatewayInitiateResponse.model_validate(response_data)
        except PydanticValidationError:
            parsed = None

        if (
            parsed is None
            or parsed.status != GATEWAY_SUCCESS_STATUS
            or str(parsed.status_code) != GATEWAY_SUCCESS_CODE
            or not parsed.payment_url
        ):
            raise GatewayError(
                f"initiate payment failed: {response_data}",
                gateway=self.client.vendor,
                response=response_data,
            )
        return parsed

    def initiate_payment(
        self,
        customer_id: int,
        amount: Decimal,
        callback_host: str,
        callback_protocol: str,
        order_id: Optional[int] = None,
    ) -> PaymentSession:
        """
        Start a hosted payment for a customer and store the session.

        Every call is a new gateway transaction; retries are not deduplicated.

        Args:
            customer_id: Customer paying
            amount: Amount to charge
            callback_host: Host the gateway redirects back to
            callback_protocol: Scheme of the callback URL ("https" or "https:")
            order_id: Order being paid, only logged

        Returns:
            PaymentSession: Stored session; data["payment_url"] is the redirect target

        Raises:
            NotFoundError: If the customer does not exist
            ConfigurationError: If the gateway credentials are missing
            GatewayError: If the gateway call fails or reports failure
            StorageError: If the session cannot be written
        """
        try:
            customer = get_customer_by_id(self.db, customer_id)
        except SQLAlchemyError as e:
            raise StorageError(f"customer lookup failed: {e}")
        if not customer:
            raise NotFoundError("Customer", customer_id)

        client = self._get_client()
        transaction_id = str(uuid4())
        callback_url = get_callback_url(
            callback_protocol, callback_host, client.settings.confirmation_path, customer.id
        )
        request = client.build_initiate_request(
            invoice_number=transaction_id,
            amount=float(amount),
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_email=customer.email,
            customer_address=customer.address,
            callback_url=callback_url,
        )

        logger.info(
            "[PAYMENT_SERVICE] Initiating payment %s for customer %s (order %s), amount: %s",
            transaction_id, customer.id, order_id, amount,
        )
        response_data = client.initiate_payment(request)
        gateway_response = self._validate_gateway_response(response_data)

        session = PaymentSession(
            payment_id=transaction_id,
            customer_id=customer.id,
            created_at=datetime.utcnow(),
            data={
                "vendor": client.vendor,
                "amount": float(amount),
                "invoice_number": transaction_id,
                "payment_amount": gateway_response.payment_amount,
                "payment_url": gateway_response.payment_url,
            },
        )
        try:
            self.db.add(session)
            self.db.commit()
            self.db.refresh(session)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[PAYMENT_SERVICE] Session store creation failed for %s: %s", transaction_id, e)
            raise StorageError(f"session store creation failed: {e}")

        logger.info("[PAYMENT_SERVICE] Payment session %s stored", transaction_id)
        return session

    def get_session(self, transaction_id: str) -> PaymentSession:
        session = self.db.query(PaymentSession).filter(PaymentSession.payment_id == transaction_id).first()
        if not session:
            raise NotFoundError("Payment session", transaction_id)
        return session

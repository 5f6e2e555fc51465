"""
PayStation Client - Direct API integration with the hosted payment gateway
Handles the initiate-payment call, transport errors and configuration checks
"""

import logging
import requests
from typing import Dict, Any, Optional

from config.constants import get_initiate_payment_url
from config.settings import GatewaySettings
from .exceptions import ConfigurationError, GatewayError
from .schemas import GatewayInitiateRequest

logger = logging.getLogger(__name__)


class PayStationClient:
    """PayStation API client for hosted payment pages"""

    def __init__(self, settings: GatewaySettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.http = session or requests

        # Validate configuration
        self._validate_configuration()

    def _validate_configuration(self):
        """Validate gateway configuration"""
        if not self.settings.merchant_id:
            raise ConfigurationError("PAYSTATION_MERCHANT_ID not configured")

        if not self.settings.password:
            raise ConfigurationError("PAYSTATION_PASSWORD not configured")

        if not self.settings.sandbox_base_url:
            raise ConfigurationError("SANDBOX_URL not configured")

    @property
    def vendor(self) -> str:
        return self.settings.vendor

    def build_initiate_request(
        self,
        invoice_number: str,
        amount: float,
        customer_name: str,
        customer_phone: str,
        customer_address: str,
        callback_url: str,
        customer_email: Optional[str] = None,
    ) -> GatewayInitiateRequest:
        """Assemble the initiate-payment body with the merchant credentials"""
        return GatewayInitiateRequest(
            merchantId=self.settings.merchant_id,
            password=self.settings.password,
            invoice_number=invoice_number,
            payment_amount=amount,
            currency=self.settings.currency,
            cust_name=customer_name,
            cust_phone=customer_phone,
            cust_email=customer_email or "",
            cust_address=customer_address,
            callback_url=callback_url,
            pay_with_charge=self.settings.pay_with_charge,
        )

    def initiate_payment(self, request: GatewayInitiateRequest) -> Dict[str, Any]:
        """
        Ask the gateway for a hosted payment page

        Args:
            request: Fully built initiate-payment body

        Returns:
            Dict containing the raw gateway response

        Raises:
            GatewayError: If the call fails or the response is not JSON
        """
        url = get_initiate_payment_url(self.settings.sandbox_base_url)
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
        }

        logger.info(
            "[PAYSTATION_CLIENT] Initiating payment - invoice: %s, amount: %s %s",
            request.invoice_number, request.payment_amount, request.currency,
        )

        try:
            response = self.http.post(
                url,
                json=request.model_dump(),
                headers=headers,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.Timeout:
            raise GatewayError("Payment gateway timeout", gateway=self.vendor)
        except requests.exceptions.ConnectionError:
            raise GatewayError("Payment gateway connection error", gateway=self.vendor)
        except requests.exceptions.RequestException as e:
            raise GatewayError(f"Payment gateway request error: {str(e)}", gateway=self.vendor)

        logger.info("[PAYSTATION_CLIENT] Response status: %s", response.status_code)

        try:
            response_data = response.json()
        except ValueError:
            raise GatewayError(
                f"initiate payment failed: {response.status_code} - {response.text}",
                gateway=self.vendor,
                response={"raw": response.text, "http_status": response.status_code},
            )

        if not isinstance(response_data, dict):
            raise GatewayError(
                f"initiate payment failed: {response_data!r}",
                gateway=self.vendor,
                response={"raw": response_data, "http_status": response.status_code},
            )

        return response_data

    def get_configuration_status(self) -> Dict[str, Any]:
        return describe_configuration(self.settings)


def describe_configuration(settings: GatewaySettings) -> Dict[str, Any]:
    """Configuration status for diagnostics, without exposing credentials"""
    return {
        "merchant_id_configured": bool(settings.merchant_id),
        "password_configured": bool(settings.password),
        "base_url": settings.sandbox_base_url or "Not configured",
        "currency": settings.currency,
        "vendor": settings.vendor,
        "confirmation_path": settings.confirmation_path,
    }

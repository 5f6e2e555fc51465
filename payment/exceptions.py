"""
Checkout Exceptions - Custom exceptions for order placement and payment operations
Each exception carries a stable error_type that callers surface alongside the message
"""


class CheckoutError(Exception):
    """Base exception for checkout-related errors"""

    status_code = 500

    def __init__(self, message: str, error_type: str = "unknown", details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error_type": self.error_type,
            "message": self.message,
        }


class ValidationError(CheckoutError):
    """Exception raised for malformed or inconsistent checkout data"""

    status_code = 400

    def __init__(self, message: str, field: str = None, details: dict = None):
        super().__init__(message, "validation", details)
        self.field = field


class NotFoundError(CheckoutError):
    """Exception raised when a referenced customer or order is missing"""

    status_code = 404

    def __init__(self, entity: str, entity_id, details: dict = None):
        message = f"{entity} not found: {entity_id}"
        super().__init__(message, "not_found", details)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(CheckoutError):
    """Exception raised when a unique key is already taken"""

    status_code = 409

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "conflict", details)


class GatewayError(CheckoutError):
    """Exception raised when the payment gateway rejects or garbles a request"""

    status_code = 502

    def __init__(self, message: str, gateway: str = None, response: dict = None, details: dict = None):
        super().__init__(message, "gateway", details)
        self.gateway = gateway
        self.response = response


class StorageError(CheckoutError):
    """Exception raised for persistence failures"""

    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "storage", details)


class ConfigurationError(CheckoutError):
    """Exception raised for configuration errors"""

    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "configuration", details)

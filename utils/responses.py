from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payment.exceptions import CheckoutError, ValidationError

ORDER_FAILURE_PREFIX = "Failed to place order. Please try again. Error: "
PAYMENT_FAILURE_PREFIX = "Payment initiation failed: "

# The storefront shows these messages to the shopper as they are
FAILURE_PREFIXES = {
    ("POST", "/orders"): ORDER_FAILURE_PREFIX,
    ("POST", "/payments/initiate"): PAYMENT_FAILURE_PREFIX,
}


def checkout_error_response(error: CheckoutError, prefix: str = "") -> JSONResponse:
    """Structured failure body with the status code of the error kind"""
    body = error.to_dict()
    if prefix:
        body["message"] = f"{prefix}{error.message}"
    return JSONResponse(status_code=error.status_code, content=body)


def _error_field(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ()) if part != "body")


def describe_validation_errors(errors) -> str:
    parts = []
    for error in errors:
        field = _error_field(error)
        msg = error.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies in the same shape as other checkout failures"""
    errors = exc.errors()
    error = ValidationError(
        describe_validation_errors(errors),
        field=_error_field(errors[0]) if errors else None,
    )
    path = request.url.path.rstrip("/") or "/"
    return checkout_error_response(error, prefix=FAILURE_PREFIXES.get((request.method, path), ""))


def callback_origin(request: Request):
    """Host and protocol the browser used to reach us, honouring proxy headers"""
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    protocol = request.headers.get("x-forwarded-proto") or request.url.scheme
    return host, f"{protocol}:"

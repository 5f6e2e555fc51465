# app.py
import logging
import sys
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

# Configure logging to ensure messages appear in server logs
# This must be done BEFORE any other imports that create loggers
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Explicitly use stdout
    ],
    force=True  # Override any existing configuration
)

logger = logging.getLogger(__name__)

# Enable uvicorn access logs to see API requests
logging.getLogger("uvicorn.access").setLevel(logging.INFO)

# Silence noisy loggers
logging.getLogger("urllib3").setLevel(logging.WARNING)

from controllers import order_controller
from database.db import engine
from models import models
from payment.controller import router as payment_router
from utils.responses import request_validation_error_handler


models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Storefront Checkout")
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(order_controller.router, prefix="/orders")
app.include_router(payment_router, prefix="/payments")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000)

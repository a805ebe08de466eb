from fastapi import APIRouter

router = APIRouter(prefix="/payments", tags=["Payments"])

# Import routes
from src.routes.payments.payments import create_pending_payment  # noqa

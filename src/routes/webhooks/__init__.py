from fastapi import APIRouter

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

# Import routes
from src.routes.webhooks.payment import payment_notification  # noqa

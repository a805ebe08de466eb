import enum
from datetime import datetime

from pydantic import BaseModel

from src.interfaces.tiers import Tier


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    success = "success"
    failed = "failed"
    challenge = "challenge"


class MidtransNotification(BaseModel):
    """Subset of the Midtrans HTTP notification this service acts on."""

    order_id: str
    transaction_status: str
    fraud_status: str | None = None
    gross_amount: str  # Kept as sent ("75000.00"), it is part of the signed payload
    signature_key: str
    status_code: str


class DecodedOrderId(BaseModel):
    user_id: str
    timestamp: str


class PaymentHistoryResponse(BaseModel):
    order_id: str
    user_id: str
    status: PaymentStatus
    amount: int
    tier: Tier
    created_at: datetime


class PendingPaymentRequest(BaseModel):
    user_id: str
    tier: Tier

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, TIMESTAMP, ForeignKey, Integer, Uuid, Enum, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from src.interfaces.payment import PaymentStatus
from src.interfaces.tiers import Tier
from src.models.base import Base

if TYPE_CHECKING:
    from src.models.user import User


class PaymentHistory(Base):
    __tablename__ = "payment_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), nullable=False, default=PaymentStatus.pending
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)  # Whole IDR, as charged
    tier: Mapped[Tier] = mapped_column(Enum(Tier), nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=func.current_timestamp())

    user: Mapped["User"] = relationship("User", back_populates="payments")

    __table_args__ = (CheckConstraint("amount >= 0", name="check_payment_amount_non_negative"),)

    def __init__(
        self,
        order_id: str,
        user_id: str,
        amount: int,
        tier: Tier,
        status: PaymentStatus = PaymentStatus.pending,
    ):
        self.order_id = order_id
        self.user_id = user_id
        self.amount = amount
        self.tier = tier
        self.status = status

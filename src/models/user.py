from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, TIMESTAMP, Enum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from src.interfaces.tiers import Tier
from src.models.base import Base

if TYPE_CHECKING:
    from src.models.mirror_config import MirrorConfig
    from src.models.payment_history import PaymentHistory


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)  # May contain "-", see order ids
    tier: Mapped[Tier] = mapped_column(Enum(Tier), nullable=False, default=Tier.FREE)
    tier_expires_at: Mapped[datetime | None] = mapped_column(TIMESTAMP, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=func.current_timestamp())

    mirror_configs: Mapped[list["MirrorConfig"]] = relationship(
        "MirrorConfig", back_populates="user", cascade="all, delete-orphan"
    )
    payments: Mapped[list["PaymentHistory"]] = relationship(
        "PaymentHistory", back_populates="user", cascade="all, delete-orphan"
    )

    def __init__(self, id: str, tier: Tier = Tier.FREE, tier_expires_at: datetime | None = None):
        self.id = id
        self.tier = tier
        self.tier_expires_at = tier_expires_at

    @property
    def is_tier_expired(self) -> bool:
        return self.tier_expires_at is not None and self.tier_expires_at < datetime.now()

from datetime import datetime
from typing import Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from src.interfaces.mirror import MirrorConfigUpdate
from src.interfaces.payment import PaymentStatus
from src.interfaces.tiers import Tier
from src.models.mirror_config import MirrorConfig
from src.models.payment_history import PaymentHistory
from src.models.user import User
from src.utils.errors import PaymentRecordNotFound, UserNotFound


class Store:
    """
    Reads and writes used while handling a payment notification.

    Every call goes through the wrapped session, so whatever a caller does between opening the session and
    committing it is applied in a single transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_user(self, user_id: str, for_update: bool = False) -> User | None:
        query = self.db.query(User).filter(User.id == user_id)
        if for_update:
            # Serializes concurrent reconciliations of the same user (ignored by SQLite)
            query = query.with_for_update()
        return query.first()

    def update_user(self, user_id: str, tier: Tier, tier_expires_at: datetime | None) -> User:
        user = self.find_user(user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} not found")
        user.tier = tier
        user.tier_expires_at = tier_expires_at
        self.db.flush()
        return user

    def find_mirror_configs_by_user(self, user_id: str) -> list[MirrorConfig]:
        """All of a user's configs, oldest first (id breaks creation time ties)."""
        return (
            self.db.query(MirrorConfig)
            .filter(MirrorConfig.user_id == user_id)
            .order_by(MirrorConfig.created_at.asc(), MirrorConfig.id.asc())
            .all()
        )

    def batch_update_mirror_configs(self, updates: Sequence[MirrorConfigUpdate]) -> None:
        if not updates:
            return
        self.db.execute(
            update(MirrorConfig),
            [{"id": u.id, "active": u.active, "status": u.status} for u in updates],
        )

    def find_payment_by_order_id(self, order_id: str) -> PaymentHistory | None:
        return self.db.query(PaymentHistory).filter(PaymentHistory.order_id == order_id).first()

    def update_payment_status(self, order_id: str, status: PaymentStatus) -> PaymentHistory:
        payment = self.find_payment_by_order_id(order_id)
        if payment is None:
            raise PaymentRecordNotFound(f"Payment {order_id} not found", order_id=order_id)
        payment.status = status
        self.db.flush()
        return payment
